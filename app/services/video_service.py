"""Video optimization service: the single-video request pipeline."""
import asyncio
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from app.core.exceptions import OptimizerBaseException, ValidationError
from app.models.transcript import Transcript
from app.models.video import VideoMetadata
from app.services.metadata_fetcher import MetadataFetcher
from app.services.optimization_client import OptimizationClient
from app.services.prompt_composer import PromptComposer
from app.services.transcript_fetcher import TranscriptFetcher
from app.utils.logging import CorrelatedLogger, MetricsLogger
from app.utils.validators import URLValidator


class ItemStage(str, Enum):
    """Pipeline stages of one video. FAILED is terminal; there are no retries."""
    PENDING = "pending"
    PARSING = "parsing"
    FETCHING = "fetching"
    COMPOSING = "composing"
    CALLING = "calling"
    DONE = "done"
    FAILED = "failed"


@dataclass
class OptimizationOutcome:
    """Merged result of one optimized video."""
    video_id: str
    metadata: VideoMetadata
    transcript: Transcript
    optimization: Dict[str, Any]


class VideoService:
    """Service for video operations.

    All provider collaborators are injected; see ``app.core.dependencies``
    for the default wiring. Lookups that need only one provider may be
    built with the others left out.
    """

    def __init__(
        self,
        metadata_fetcher: Optional[MetadataFetcher] = None,
        transcript_fetcher: Optional[TranscriptFetcher] = None,
        composer: Optional[PromptComposer] = None,
        optimization_client: Optional[OptimizationClient] = None,
        metrics: Optional[MetricsLogger] = None
    ):
        self.metadata_fetcher = metadata_fetcher
        self.transcript_fetcher = transcript_fetcher
        self.composer = composer
        self.optimization_client = optimization_client
        self.metrics = metrics or MetricsLogger()
        self.logger = CorrelatedLogger(__name__)

    async def get_metadata(self, url: Any, request_id: Optional[str] = None) -> Tuple[str, VideoMetadata]:
        """Validate the URL and fetch metadata only."""
        URLValidator.require_url(url)
        video_id = URLValidator.require_video_id(url)
        metadata = await self.metadata_fetcher.fetch_metadata(video_id, request_id)
        return video_id, metadata

    async def get_transcript(self, url: Any, request_id: Optional[str] = None) -> Tuple[str, Transcript]:
        """Validate the URL and fetch the transcript only."""
        URLValidator.require_url(url)
        video_id = URLValidator.require_video_id(url)
        transcript = await self.transcript_fetcher.fetch_transcript(video_id, request_id)
        return video_id, transcript

    async def optimize_video(
        self,
        url: Any,
        mode: str = "seo",
        request_id: Optional[str] = None
    ) -> OptimizationOutcome:
        """Run the full pipeline for one URL."""
        URLValidator.require_url(url)
        PromptComposer.validate_mode(mode)
        video_id = URLValidator.require_video_id(url)
        return await self.optimize_video_id(video_id, mode, request_id)

    async def optimize_video_id(
        self,
        video_id: str,
        mode: str = "seo",
        request_id: Optional[str] = None
    ) -> OptimizationOutcome:
        """Fetch, compose and call the model for an already parsed video ID."""
        logger = self.logger.bind(request_id)
        start_time = datetime.now()
        stage = ItemStage.FETCHING

        try:
            logger.debug(f"{video_id}: {stage.value}")
            metadata, transcript = await asyncio.gather(
                self.metadata_fetcher.fetch_metadata(video_id, request_id),
                self.transcript_fetcher.fetch_transcript(video_id, request_id)
            )

            stage = ItemStage.COMPOSING
            logger.debug(f"{video_id}: {stage.value}")
            prompt = self.composer.compose(mode, metadata, transcript)

            stage = ItemStage.CALLING
            logger.debug(f"{video_id}: {stage.value}")
            optimization = await self.optimization_client.optimize(prompt, request_id)

        except OptimizerBaseException as e:
            logger.warning(f"{video_id}: {ItemStage.FAILED.value} during {stage.value}: {e.message}")
            self._log_metrics(request_id, video_id, mode, False, start_time, e.error_code)
            raise

        logger.debug(f"{video_id}: {ItemStage.DONE.value}")
        self._log_metrics(request_id, video_id, mode, True, start_time)

        return OptimizationOutcome(
            video_id=video_id,
            metadata=metadata,
            transcript=transcript,
            optimization=optimization
        )

    async def trending_keywords(
        self,
        topic: Optional[str],
        category: Optional[str] = None,
        request_id: Optional[str] = None
    ) -> Tuple[str, str, Dict[str, Any]]:
        """Generate trending keywords for a topic. Category defaults to 'general'."""
        if not topic or not isinstance(topic, str) or not topic.strip():
            raise ValidationError("Topic is required")

        category = category or "general"
        prompt = self.composer.compose_trending_keywords(topic, category)
        keywords = await self.optimization_client.optimize(prompt, request_id)
        return topic, category, keywords

    def _log_metrics(
        self,
        request_id: Optional[str],
        video_id: str,
        mode: str,
        success: bool,
        start_time: datetime,
        error_code: Optional[str] = None
    ) -> None:
        processing_time = int((datetime.now() - start_time).total_seconds() * 1000)
        self.metrics.log_optimization_metrics(
            request_id, video_id, mode, success, processing_time, error_code
        )
