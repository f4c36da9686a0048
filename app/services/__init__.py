"""Service layer modules for the YouTube SEO Optimizer."""
from .metadata_fetcher import MetadataFetcher
from .transcript_fetcher import TranscriptFetcher
from .prompt_composer import ComposedPrompt, PromptComposer
from .optimization_client import OptimizationClient
from .video_service import VideoService, OptimizationOutcome, ItemStage
from .batch_processor import BatchProcessor
from .rate_limiter import RateLimiter, RateLimitDecision

__all__ = [
    "MetadataFetcher", "TranscriptFetcher", "ComposedPrompt", "PromptComposer",
    "OptimizationClient", "VideoService", "OptimizationOutcome", "ItemStage",
    "BatchProcessor", "RateLimiter", "RateLimitDecision"
]
