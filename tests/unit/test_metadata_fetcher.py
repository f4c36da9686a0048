"""Unit tests for the metadata fetcher."""
import pytest
import httplib2
from unittest.mock import Mock
from googleapiclient.errors import HttpError

from app.core.exceptions import ConfigurationError, ProviderError, VideoNotFoundError
from app.services.metadata_fetcher import MetadataFetcher, build_youtube_client
from conftest import VIDEO_ID, make_api_item


def fake_youtube(response=None, error=None):
    """A ``youtube`` resource whose videos().list() request returns or raises."""
    request = Mock()
    if error is not None:
        request.execute = Mock(side_effect=error)
    else:
        request.execute = Mock(return_value=response)

    youtube = Mock()
    youtube.videos.return_value.list.return_value = request
    return youtube, request


def make_fetcher(youtube):
    return MetadataFetcher(youtube, timeout=5, http_factory=lambda: None)


class TestMetadataFetcher:
    """Test metadata fetching and normalization."""

    @pytest.mark.asyncio
    async def test_fetch_metadata(self):
        youtube, request = fake_youtube({"items": [make_api_item()]})

        metadata = await make_fetcher(youtube).fetch_metadata(VIDEO_ID, "req_test")

        youtube.videos.return_value.list.assert_called_once_with(
            part="snippet,statistics,contentDetails", id=VIDEO_ID
        )
        request.execute.assert_called_once_with(http=None)
        assert metadata.title == "Rick Astley - Never Gonna Give You Up"
        assert metadata.channel_title == "Rick Astley"
        assert metadata.published_at == "2009-10-25T06:57:33Z"
        assert metadata.tags == ["rick astley", "never gonna give you up"]
        assert metadata.category_id == "10"
        assert metadata.view_count == "1500000000"
        assert metadata.like_count == "17000000"
        assert metadata.comment_count == "2300000"
        assert metadata.duration == "PT3M33S"
        assert "default" in metadata.thumbnails

    @pytest.mark.asyncio
    async def test_missing_optional_fields(self):
        item = {"id": VIDEO_ID, "snippet": {"title": "Untagged"}}
        youtube, _ = fake_youtube({"items": [item]})

        metadata = await make_fetcher(youtube).fetch_metadata(VIDEO_ID)

        assert metadata.title == "Untagged"
        assert metadata.tags == []
        assert metadata.like_count is None
        assert metadata.thumbnails == {}

    @pytest.mark.asyncio
    async def test_video_not_found(self):
        youtube, _ = fake_youtube({"items": []})

        with pytest.raises(VideoNotFoundError) as exc_info:
            await make_fetcher(youtube).fetch_metadata(VIDEO_ID)

        assert exc_info.value.message == "Video not found"
        assert exc_info.value.details["video_id"] == VIDEO_ID

    @pytest.mark.asyncio
    async def test_http_error(self):
        error = HttpError(
            httplib2.Response({"status": 403}),
            b'{"error": {"message": "The request cannot be completed because you have exceeded your quota."}}'
        )
        youtube, _ = fake_youtube(error=error)

        with pytest.raises(ProviderError) as exc_info:
            await make_fetcher(youtube).fetch_metadata(VIDEO_ID)

        assert exc_info.value.message == "YouTube Data API request failed"
        assert exc_info.value.details["reason"].startswith("HTTP 403")
        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_transport_error(self):
        youtube, _ = fake_youtube(error=TimeoutError("timed out"))

        with pytest.raises(ProviderError) as exc_info:
            await make_fetcher(youtube).fetch_metadata(VIDEO_ID)

        assert exc_info.value.details["reason"] == "timed out"

    def test_default_http_factory_uses_timeout(self):
        fetcher = MetadataFetcher(Mock(), timeout=7)
        http = fetcher.http_factory()

        assert isinstance(http, httplib2.Http)
        assert http.timeout == 7

    def test_build_client_requires_key(self, monkeypatch):
        from app.core.config import settings
        monkeypatch.setattr(settings, "youtube_api_key", None)

        with pytest.raises(ConfigurationError):
            build_youtube_client()

    @pytest.mark.asyncio
    async def test_client_built_on_first_fetch(self, monkeypatch):
        from app.core.config import settings
        monkeypatch.setattr(settings, "youtube_api_key", None)

        fetcher = MetadataFetcher(http_factory=lambda: None)

        with pytest.raises(ConfigurationError) as exc_info:
            await fetcher.fetch_metadata(VIDEO_ID)
        assert exc_info.value.details["setting"] == "YOUTUBE_API_KEY"
