"""Bulk optimization service."""
import asyncio
from datetime import datetime
from typing import Any, Awaitable, Callable, List, Optional, Tuple, Union

from app.services.video_service import VideoService
from app.services.prompt_composer import PromptComposer
from app.models.responses import BulkItemFailure, BulkItemSuccess, BulkOptimizeData
from app.core.exceptions import InvalidVideoURLError, OptimizerBaseException, ValidationError
from app.core.config import settings
from app.utils.logging import CorrelatedLogger, MetricsLogger
from app.utils.validators import URLValidator

BulkItem = Union[BulkItemSuccess, BulkItemFailure]


class BatchProcessor:
    """Optimizes several videos one at a time, in input order.

    A failure is recorded in that item's slot and never stops the loop.
    Items are paced with a fixed pause to ease provider rate limits.
    """

    def __init__(
        self,
        video_service: VideoService,
        max_urls: Optional[int] = None,
        delay_seconds: Optional[float] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        metrics: Optional[MetricsLogger] = None
    ):
        self.video_service = video_service
        self.max_urls = max_urls if max_urls is not None else settings.max_urls_per_batch
        self.delay_seconds = delay_seconds if delay_seconds is not None else settings.bulk_delay_seconds
        self.sleep = sleep
        self.metrics = metrics or MetricsLogger()
        self.logger = CorrelatedLogger(__name__)

    async def process_batch(
        self,
        urls: Any,
        mode: str = "seo",
        request_id: Optional[str] = None
    ) -> BulkOptimizeData:
        """Process multiple videos."""
        # Validate request before any network call
        self._validate_request(urls)
        PromptComposer.validate_mode(mode)

        logger = self.logger.bind(request_id)
        logger.info(f"Starting bulk {mode} optimization for {len(urls)} URL(s)")
        start_time = datetime.now()

        results: List[BulkItem] = []
        for index, url in enumerate(urls):
            result, reached_providers = await self._process_single_url(url, mode, request_id)
            results.append(result)

            is_last = index == len(urls) - 1
            if reached_providers and not is_last and self.delay_seconds > 0:
                await self.sleep(self.delay_seconds)

        successful = sum(1 for result in results if isinstance(result, BulkItemSuccess))
        logger.info(f"Bulk optimization finished: {successful}/{len(results)} successful")

        processing_time = int((datetime.now() - start_time).total_seconds() * 1000)
        self.metrics.log_batch_metrics(request_id, mode, len(results), successful, processing_time)

        return BulkOptimizeData(
            results=results,
            processed=len(results),
            successful=successful
        )

    def _validate_request(self, urls: Any) -> None:
        """Validate batch request."""
        if not urls or not isinstance(urls, list):
            raise ValidationError("Array of YouTube URLs is required")

        if len(urls) > self.max_urls:
            raise ValidationError(f"Maximum {self.max_urls} URLs allowed per request")

    async def _process_single_url(
        self,
        url: Any,
        mode: str,
        request_id: Optional[str]
    ) -> Tuple[BulkItem, bool]:
        """Process single URL. Returns the entry and whether providers were called."""
        video_id = URLValidator.extract_video_id(url)
        if video_id is None:
            return BulkItemFailure(url=url, error=InvalidVideoURLError(None).message), False

        try:
            outcome = await self.video_service.optimize_video_id(video_id, mode, request_id)
        except OptimizerBaseException as e:
            return BulkItemFailure(url=url, error=e.message), True
        except Exception:
            self.logger.bind(request_id).exception(f"Unexpected error optimizing {video_id}")
            return BulkItemFailure(url=url, error="Failed to optimize video"), True

        return BulkItemSuccess(
            url=url,
            video_id=outcome.video_id,
            metadata=outcome.metadata.summary(),
            optimization=outcome.optimization
        ), True
