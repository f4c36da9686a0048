"""Dependency injection setup for FastAPI."""
from functools import lru_cache
from fastapi import Depends, Request

from .config import settings
from .exceptions import RateLimitExceededError
from app.services import (
    MetadataFetcher, TranscriptFetcher, PromptComposer, OptimizationClient,
    VideoService, BatchProcessor, RateLimiter
)

# Provider clients are built on first use, after request validation, so a
# missing credential only fails requests that reach a provider.

@lru_cache()
def get_metadata_fetcher() -> MetadataFetcher:
    """Get MetadataFetcher service instance."""
    return MetadataFetcher()

@lru_cache()
def get_transcript_fetcher() -> TranscriptFetcher:
    """Get TranscriptFetcher service instance."""
    return TranscriptFetcher()

@lru_cache()
def get_prompt_composer() -> PromptComposer:
    """Get PromptComposer instance."""
    return PromptComposer()

@lru_cache()
def get_optimization_client() -> OptimizationClient:
    """Get OptimizationClient service instance."""
    return OptimizationClient()

@lru_cache()
def get_rate_limiter() -> RateLimiter:
    """Get RateLimiter instance shared by all /api routes."""
    return RateLimiter(
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds
    )

# Service dependencies
def get_video_service(
    metadata_fetcher: MetadataFetcher = Depends(get_metadata_fetcher),
    transcript_fetcher: TranscriptFetcher = Depends(get_transcript_fetcher),
    composer: PromptComposer = Depends(get_prompt_composer),
    optimization_client: OptimizationClient = Depends(get_optimization_client)
) -> VideoService:
    """Dependency for VideoService."""
    return VideoService(metadata_fetcher, transcript_fetcher, composer, optimization_client)

def get_metadata_service(
    metadata_fetcher: MetadataFetcher = Depends(get_metadata_fetcher)
) -> VideoService:
    """VideoService for metadata lookups only."""
    return VideoService(metadata_fetcher=metadata_fetcher)

def get_transcript_service(
    transcript_fetcher: TranscriptFetcher = Depends(get_transcript_fetcher)
) -> VideoService:
    """VideoService for transcript lookups only."""
    return VideoService(transcript_fetcher=transcript_fetcher)

def get_keyword_service(
    composer: PromptComposer = Depends(get_prompt_composer),
    optimization_client: OptimizationClient = Depends(get_optimization_client)
) -> VideoService:
    """VideoService for trending keywords; no video providers needed."""
    return VideoService(composer=composer, optimization_client=optimization_client)

def get_batch_processor(
    video_service: VideoService = Depends(get_video_service)
) -> BatchProcessor:
    """Dependency for BatchProcessor service."""
    return BatchProcessor(video_service)

# Rate limiting dependency
async def enforce_rate_limit(
    request: Request,
    limiter: RateLimiter = Depends(get_rate_limiter)
) -> None:
    """Count the request against the caller's window."""
    client_id = request.client.host if request.client else "unknown"
    decision = limiter.hit(client_id)

    if not decision.allowed:
        raise RateLimitExceededError(
            settings.rate_limit_message,
            limit=decision.limit,
            retry_after=decision.retry_after
        )

    # Copied onto the response by the request middleware
    request.state.rate_limit = decision
