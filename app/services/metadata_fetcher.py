"""Video metadata service using the YouTube Data API v3."""
import asyncio
from typing import Any, Callable, Optional

import httplib2
from googleapiclient.discovery import build
from googleapiclient.errors import Error as GoogleAPIError, HttpError

from app.core.config import settings
from app.core.exceptions import ConfigurationError, ProviderError, VideoNotFoundError
from app.models.video import VideoMetadata
from app.utils.logging import CorrelatedLogger

PROVIDER_NAME = "YouTube Data API"
VIDEO_PARTS = "snippet,statistics,contentDetails"


def build_youtube_client(api_key: Optional[str] = None) -> Any:
    """Build the read-only ``youtube`` v3 discovery resource."""
    api_key = api_key or settings.youtube_api_key
    if not api_key:
        raise ConfigurationError("YOUTUBE_API_KEY", "not set")

    return build("youtube", "v3", developerKey=api_key, cache_discovery=False)


class MetadataFetcher:
    """Fetches and normalizes video metadata for a single video ID.

    Without an injected client the discovery resource is built on first
    use, so requests rejected by validation never need an API key.
    """

    def __init__(
        self,
        youtube_client: Optional[Any] = None,
        timeout: Optional[int] = None,
        http_factory: Optional[Callable[[], Any]] = None
    ):
        self._youtube = youtube_client
        self.timeout = timeout or settings.provider_timeout
        # A fresh Http per call: httplib2 connections are not thread-safe.
        self.http_factory = http_factory or (lambda: httplib2.Http(timeout=self.timeout))
        self.logger = CorrelatedLogger(__name__)

    @property
    def youtube(self) -> Any:
        if self._youtube is None:
            self._youtube = build_youtube_client()
        return self._youtube

    async def fetch_metadata(self, video_id: str, request_id: Optional[str] = None) -> VideoMetadata:
        """Fetch metadata for a video.

        Raises:
            VideoNotFoundError: The provider returned no items.
            ProviderError: Transport, auth or quota failure.
        """
        logger = self.logger.bind(request_id)
        logger.info(f"Fetching metadata for video: {video_id}")

        request = self.youtube.videos().list(part=VIDEO_PARTS, id=video_id)

        try:
            response = await asyncio.to_thread(request.execute, http=self.http_factory())
        except HttpError as e:
            status = getattr(e.resp, "status", "unknown")
            logger.error(f"YouTube Data API error for {video_id}: HTTP {status} {str(e)}")
            raise ProviderError(PROVIDER_NAME, f"HTTP {status}: {getattr(e, 'reason', None) or str(e)}") from e
        except (GoogleAPIError, httplib2.HttpLib2Error, OSError) as e:
            logger.error(f"YouTube Data API transport error for {video_id}: {str(e)}")
            raise ProviderError(PROVIDER_NAME, str(e)) from e

        items = (response or {}).get("items") or []
        if not items:
            logger.warning(f"Video not found: {video_id}")
            raise VideoNotFoundError(video_id)

        metadata = VideoMetadata.from_api_item(items[0])
        logger.info(f"Fetched metadata for {video_id}: {metadata.title!r}")
        return metadata
