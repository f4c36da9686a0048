"""Transcript service using youtube-transcript-api."""
import asyncio
from typing import Any, List, Optional

from youtube_transcript_api import NoTranscriptFound, YouTubeTranscriptApi

from app.core.config import settings
from app.core.exceptions import TranscriptUnavailableError
from app.models.transcript import Transcript
from app.utils.logging import CorrelatedLogger


class TranscriptFetcher:
    """Fetches captions for a video and flattens them into one text blob.

    Preferred languages are tried first. A video with captions only in
    other languages falls back to the first track YouTube lists for it.
    """

    def __init__(self, transcript_api: Optional[Any] = None, languages: Optional[List[str]] = None):
        self.api = transcript_api or YouTubeTranscriptApi()
        self.languages = languages or settings.transcript_languages
        self.logger = CorrelatedLogger(__name__)

    async def fetch_transcript(self, video_id: str, request_id: Optional[str] = None) -> Transcript:
        """Fetch the transcript for a video.

        Every provider failure (captions disabled, private video, network
        error) is reported as TranscriptUnavailableError with a fixed message.
        """
        logger = self.logger.bind(request_id)
        logger.info(f"Fetching transcript for video: {video_id}")

        try:
            snippets = await asyncio.to_thread(self._fetch_snippets, video_id, logger)
            fragments = [self._snippet_text(snippet) for snippet in snippets]
        except Exception as e:
            logger.warning(f"Transcript unavailable for {video_id}: {type(e).__name__}: {str(e)[:200]}")
            raise TranscriptUnavailableError(video_id, type(e).__name__) from e

        transcript = Transcript.from_fragments(fragments)
        logger.info(f"Fetched transcript for {video_id} ({transcript.word_count} words)")
        return transcript

    def _fetch_snippets(self, video_id: str, logger: CorrelatedLogger) -> Any:
        """Blocking fetch: preferred languages, then any listed track."""
        try:
            return self.api.fetch(video_id, languages=self.languages)
        except NoTranscriptFound:
            logger.info(f"No {', '.join(self.languages)} captions for {video_id}, using first available track")

        for transcript in self.api.list(video_id):
            return transcript.fetch()

        raise NoTranscriptFound(video_id, self.languages, [])

    @staticmethod
    def _snippet_text(snippet: Any) -> str:
        """Caption text of a snippet object or raw dict."""
        if isinstance(snippet, dict):
            return snippet.get("text", "")
        return getattr(snippet, "text", "")
