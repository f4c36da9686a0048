"""Response models for the YouTube SEO Optimizer."""
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from .video import VideoMetadata, VideoSummary


class ErrorResponse(BaseModel):
    """Standard error body. ``details`` is only present for upstream failures."""
    error: str
    details: Optional[str] = None


class DependencyStatus(BaseModel):
    """Service dependency status."""
    youtube_data_api: str
    openai: str


class HealthData(BaseModel):
    """Health check response."""
    status: str
    timestamp: str
    version: str
    dependencies: DependencyStatus


class MetadataResponse(BaseModel):
    """Response for /api/metadata."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    video_id: str = Field(..., alias="videoId")
    metadata: VideoMetadata


class TranscriptResponse(BaseModel):
    """Response for /api/transcript."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    video_id: str = Field(..., alias="videoId")
    transcript: str
    word_count: int = Field(..., alias="wordCount")


class TranscriptPayload(BaseModel):
    """Transcript section of the optimize response."""
    model_config = ConfigDict(populate_by_name=True)

    text: str
    word_count: int = Field(..., alias="wordCount")


class OptimizeResponse(BaseModel):
    """Response for /api/optimize."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    video_id: str = Field(..., alias="videoId")
    metadata: VideoMetadata
    transcript: TranscriptPayload
    optimization: Dict[str, Any]


class BulkItemSuccess(BaseModel):
    """Successful bulk entry."""
    model_config = ConfigDict(populate_by_name=True)

    url: Any
    success: bool = True
    video_id: str = Field(..., alias="videoId")
    metadata: VideoSummary
    optimization: Dict[str, Any]


class BulkItemFailure(BaseModel):
    """Failed bulk entry."""
    url: Any
    error: str


class BulkOptimizeData(BaseModel):
    """Bulk optimization results in input order."""
    success: bool = True
    results: List[Union[BulkItemSuccess, BulkItemFailure]]
    processed: int
    successful: int


class TrendingKeywordsResponse(BaseModel):
    """Response for /api/trending-keywords."""
    success: bool = True
    topic: str
    category: str
    keywords: Dict[str, Any]
