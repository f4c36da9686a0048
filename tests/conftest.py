"""Shared fixtures: provider fakes and an app client wired to them."""
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient

from app.main import app
from app.core.dependencies import (
    get_metadata_fetcher, get_transcript_fetcher, get_optimization_client,
    get_batch_processor, get_video_service, get_rate_limiter
)
from app.models.transcript import Transcript
from app.models.video import VideoMetadata
from app.services import BatchProcessor, OptimizationClient, VideoService

VIDEO_ID = "dQw4w9WgXcQ"
VIDEO_URL = f"https://www.youtube.com/watch?v={VIDEO_ID}"

SEO_RESULT = {
    "optimizedTitle": "Never Gonna Give You Up - Official Video",
    "optimizedDescription": "The official music video.",
    "tags": ["rick astley", "80s music"],
    "chapters": ["0:00 Intro", "0:45 Verse", "1:30 Chorus", "2:30 Bridge", "3:00 Outro"],
    "keywords": ["rickroll", "80s pop"],
    "thumbnailText": "NEVER GONNA",
}

SUMMARY_RESULT = {
    "executiveSummary": "A classic pop song.",
    "keyPoints": ["Commitment", "Loyalty"],
    "topics": ["music"],
    "targetAudience": "Pop fans",
    "callToAction": "Subscribe for more",
}

HASHTAGS_RESULT = {
    "primary": ["#rickastley"],
    "secondary": ["#80smusic"],
    "trending": ["#rickroll"],
}

KEYWORDS_RESULT = {
    "shortTail": ["easy recipes", "meal prep"],
    "longTail": ["easy weeknight dinner recipes for beginners"],
}


def make_api_item(**snippet_overrides):
    """A ``videos.list`` resource item."""
    snippet = {
        "title": "Rick Astley - Never Gonna Give You Up",
        "description": "The official video",
        "channelTitle": "Rick Astley",
        "publishedAt": "2009-10-25T06:57:33Z",
        "tags": ["rick astley", "never gonna give you up"],
        "categoryId": "10",
        "thumbnails": {"default": {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/default.jpg"}},
    }
    snippet.update(snippet_overrides)
    return {
        "id": VIDEO_ID,
        "snippet": snippet,
        "statistics": {"viewCount": "1500000000", "likeCount": "17000000", "commentCount": "2300000"},
        "contentDetails": {"duration": "PT3M33S"},
    }


def make_chat_response(content):
    """Mimic the shape of an OpenAI chat completion."""
    if not isinstance(content, str) and content is not None:
        content = json.dumps(content)
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )


@pytest.fixture
def sample_metadata():
    return VideoMetadata.from_api_item(make_api_item())


@pytest.fixture
def sample_transcript():
    return Transcript.from_fragments(["never gonna give you up", "never gonna let you down"])


@pytest.fixture
def metadata_fetcher(sample_metadata):
    fetcher = Mock()
    fetcher.fetch_metadata = AsyncMock(return_value=sample_metadata)
    return fetcher


@pytest.fixture
def transcript_fetcher(sample_transcript):
    fetcher = Mock()
    fetcher.fetch_transcript = AsyncMock(return_value=sample_transcript)
    return fetcher


@pytest.fixture
def openai_client():
    """Fake OpenAI client; returns the SEO result unless reconfigured."""
    client = Mock()
    client.chat.completions.create = Mock(return_value=make_chat_response(SEO_RESULT))
    return client


@pytest.fixture
def optimization_client(openai_client):
    return OptimizationClient(openai_client, model="gpt-4")


@pytest.fixture
def sleep():
    return AsyncMock()


@pytest.fixture
def client(metadata_fetcher, transcript_fetcher, optimization_client, sleep):
    """Test client with every provider replaced by a fake."""
    def batch_processor_override(video_service: VideoService = Depends(get_video_service)):
        return BatchProcessor(video_service, delay_seconds=1.0, sleep=sleep)

    app.dependency_overrides[get_metadata_fetcher] = lambda: metadata_fetcher
    app.dependency_overrides[get_transcript_fetcher] = lambda: transcript_fetcher
    app.dependency_overrides[get_optimization_client] = lambda: optimization_client
    app.dependency_overrides[get_batch_processor] = batch_processor_override

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Each test starts with a fresh rate limit window."""
    get_rate_limiter().reset()
    yield
    get_rate_limiter().reset()
