"""Unit tests for the video service pipeline."""
import asyncio
import pytest
from unittest.mock import Mock

from app.core.exceptions import (
    InvalidVideoURLError, OptimizationParseError, TranscriptUnavailableError,
    UnsupportedModeError, ValidationError, VideoNotFoundError
)
from app.services import PromptComposer, VideoService
from conftest import VIDEO_ID, VIDEO_URL, SEO_RESULT, KEYWORDS_RESULT, make_chat_response


@pytest.fixture
def metrics():
    return Mock()


@pytest.fixture
def video_service(metadata_fetcher, transcript_fetcher, optimization_client, metrics):
    return VideoService(
        metadata_fetcher, transcript_fetcher, PromptComposer(), optimization_client, metrics
    )


class TestVideoService:
    """Test single video optimization."""

    @pytest.mark.asyncio
    async def test_optimize_video(self, video_service, metadata_fetcher, transcript_fetcher, metrics):
        outcome = await video_service.optimize_video(VIDEO_URL, "seo", "req_test")

        assert outcome.video_id == VIDEO_ID
        assert outcome.metadata.title == "Rick Astley - Never Gonna Give You Up"
        assert outcome.transcript.word_count == 10
        assert outcome.optimization == SEO_RESULT
        metadata_fetcher.fetch_metadata.assert_awaited_once_with(VIDEO_ID, "req_test")
        transcript_fetcher.fetch_transcript.assert_awaited_once_with(VIDEO_ID, "req_test")

        args = metrics.log_optimization_metrics.call_args.args
        assert args[:4] == ("req_test", VIDEO_ID, "seo", True)

    @pytest.mark.asyncio
    async def test_prompt_contains_fetched_content(self, video_service, openai_client):
        await video_service.optimize_video(VIDEO_URL, "seo")

        messages = openai_client.chat.completions.create.call_args.kwargs["messages"]
        assert "Rick Astley - Never Gonna Give You Up" in messages[1]["content"]
        assert "never gonna give you up never gonna let you down" in messages[1]["content"]

    @pytest.mark.asyncio
    async def test_missing_url(self, video_service, metadata_fetcher):
        with pytest.raises(ValidationError) as exc_info:
            await video_service.optimize_video(None)

        assert exc_info.value.message == "YouTube URL is required"
        metadata_fetcher.fetch_metadata.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_url_makes_no_provider_calls(
        self, video_service, metadata_fetcher, transcript_fetcher, openai_client
    ):
        with pytest.raises(InvalidVideoURLError):
            await video_service.optimize_video("not a url")

        metadata_fetcher.fetch_metadata.assert_not_awaited()
        transcript_fetcher.fetch_transcript.assert_not_awaited()
        openai_client.chat.completions.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_unsupported_mode(self, video_service, metadata_fetcher):
        with pytest.raises(UnsupportedModeError):
            await video_service.optimize_video(VIDEO_URL, "poetry")

        metadata_fetcher.fetch_metadata.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_transcript_failure_skips_model(
        self, video_service, transcript_fetcher, openai_client, metrics
    ):
        transcript_fetcher.fetch_transcript.side_effect = TranscriptUnavailableError(VIDEO_ID, "TranscriptsDisabled")

        with pytest.raises(TranscriptUnavailableError):
            await video_service.optimize_video(VIDEO_URL)

        openai_client.chat.completions.create.assert_not_called()
        args = metrics.log_optimization_metrics.call_args.args
        assert args[3] is False
        assert args[5] == "TRANSCRIPT_UNAVAILABLE"

    @pytest.mark.asyncio
    async def test_video_not_found(self, video_service, metadata_fetcher, openai_client):
        metadata_fetcher.fetch_metadata.side_effect = VideoNotFoundError(VIDEO_ID)

        with pytest.raises(VideoNotFoundError):
            await video_service.optimize_video(VIDEO_URL)

        openai_client.chat.completions.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_unparseable_model_output(self, video_service, openai_client):
        openai_client.chat.completions.create.return_value = make_chat_response("not json")

        with pytest.raises(OptimizationParseError):
            await video_service.optimize_video(VIDEO_URL)

    @pytest.mark.asyncio
    async def test_get_metadata_only(self, metadata_fetcher):
        service = VideoService(metadata_fetcher=metadata_fetcher)

        video_id, metadata = await service.get_metadata(f"https://youtu.be/{VIDEO_ID}")

        assert video_id == VIDEO_ID
        assert metadata.channel_title == "Rick Astley"

    @pytest.mark.asyncio
    async def test_get_transcript_only(self, transcript_fetcher):
        service = VideoService(transcript_fetcher=transcript_fetcher)

        video_id, transcript = await service.get_transcript(VIDEO_URL)

        assert video_id == VIDEO_ID
        assert transcript.word_count == 10

    @pytest.mark.asyncio
    async def test_get_metadata_invalid_url(self, metadata_fetcher):
        service = VideoService(metadata_fetcher=metadata_fetcher)

        with pytest.raises(InvalidVideoURLError):
            await service.get_metadata("https://vimeo.com/1234")

    @pytest.mark.asyncio
    async def test_metadata_and_transcript_fetched_concurrently(
        self, video_service, metadata_fetcher, transcript_fetcher, sample_metadata, sample_transcript
    ):
        """Each fetch waits for the other to start, so a sequential pipeline would time out."""
        events = []
        metadata_started = asyncio.Event()
        transcript_started = asyncio.Event()

        async def fetch_metadata(video_id, request_id=None):
            events.append("metadata started")
            metadata_started.set()
            await asyncio.wait_for(transcript_started.wait(), 1)
            events.append("metadata done")
            return sample_metadata

        async def fetch_transcript(video_id, request_id=None):
            events.append("transcript started")
            transcript_started.set()
            await asyncio.wait_for(metadata_started.wait(), 1)
            events.append("transcript done")
            return sample_transcript

        metadata_fetcher.fetch_metadata.side_effect = fetch_metadata
        transcript_fetcher.fetch_transcript.side_effect = fetch_transcript

        outcome = await video_service.optimize_video(VIDEO_URL, "seo")

        assert outcome.optimization == SEO_RESULT
        assert set(events[:2]) == {"metadata started", "transcript started"}
        assert set(events[2:]) == {"metadata done", "transcript done"}


class TestTrendingKeywords:
    """Test trending keyword generation."""

    @pytest.mark.asyncio
    async def test_default_category(self, video_service, openai_client):
        openai_client.chat.completions.create.return_value = make_chat_response(KEYWORDS_RESULT)

        topic, category, keywords = await video_service.trending_keywords("cooking")

        assert (topic, category) == ("cooking", "general")
        assert keywords == KEYWORDS_RESULT

    @pytest.mark.asyncio
    async def test_explicit_category(self, video_service, openai_client):
        openai_client.chat.completions.create.return_value = make_chat_response(KEYWORDS_RESULT)

        _, category, _ = await video_service.trending_keywords("cooking", "food")

        assert category == "food"
        messages = openai_client.chat.completions.create.call_args.kwargs["messages"]
        assert "food category" in messages[1]["content"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("topic", [None, "", "   "])
    async def test_topic_required(self, video_service, openai_client, topic):
        with pytest.raises(ValidationError) as exc_info:
            await video_service.trending_keywords(topic)

        assert exc_info.value.message == "Topic is required"
        openai_client.chat.completions.create.assert_not_called()
