"""Request models for the YouTube SEO Optimizer.

Fields are optional so that missing input is reported with the service's own
400 error envelope instead of FastAPI's 422.
"""
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class VideoURLRequest(BaseModel):
    """Request model for metadata and transcript lookups."""
    url: Optional[str] = None


class OptimizeRequest(BaseModel):
    """Request model for single video optimization."""
    model_config = ConfigDict(populate_by_name=True)

    url: Optional[str] = None
    optimization_type: str = Field("seo", alias="optimizationType")


class BulkOptimizeRequest(BaseModel):
    """Request model for bulk optimization.

    ``urls`` is left untyped so that a non-list value reaches the service
    validation and gets the documented error message.
    """
    model_config = ConfigDict(populate_by_name=True)

    urls: Optional[Any] = None
    optimization_type: str = Field("seo", alias="optimizationType")


class TrendingKeywordsRequest(BaseModel):
    """Request model for trending keyword generation."""
    topic: Optional[str] = None
    category: Optional[str] = None
