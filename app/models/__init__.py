"""Data models for the YouTube SEO Optimizer."""
from .requests import VideoURLRequest, OptimizeRequest, BulkOptimizeRequest, TrendingKeywordsRequest
from .video import VideoMetadata, VideoSummary
from .transcript import Transcript
from .responses import (
    ErrorResponse, DependencyStatus, HealthData,
    MetadataResponse, TranscriptResponse, TranscriptPayload, OptimizeResponse,
    BulkItemSuccess, BulkItemFailure, BulkOptimizeData, TrendingKeywordsResponse
)

__all__ = [
    "VideoURLRequest", "OptimizeRequest", "BulkOptimizeRequest", "TrendingKeywordsRequest",
    "VideoMetadata", "VideoSummary", "Transcript",
    "ErrorResponse", "DependencyStatus", "HealthData",
    "MetadataResponse", "TranscriptResponse", "TranscriptPayload", "OptimizeResponse",
    "BulkItemSuccess", "BulkItemFailure", "BulkOptimizeData", "TrendingKeywordsResponse"
]
