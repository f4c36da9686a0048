"""Video-related data models."""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class VideoMetadata(BaseModel):
    """Normalized video metadata from the YouTube Data API.

    Counts are kept exactly as the provider returns them (strings).
    """
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    channel_title: Optional[str] = Field(None, alias="channelTitle")
    published_at: Optional[str] = Field(None, alias="publishedAt")
    tags: List[str] = Field(default_factory=list)
    category_id: Optional[str] = Field(None, alias="categoryId")
    view_count: Optional[str] = Field(None, alias="viewCount")
    like_count: Optional[str] = Field(None, alias="likeCount")
    comment_count: Optional[str] = Field(None, alias="commentCount")
    duration: Optional[str] = None
    thumbnails: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_api_item(cls, item: Dict[str, Any]) -> "VideoMetadata":
        """Build metadata from a ``videos.list`` resource item."""
        snippet = item.get("snippet") or {}
        statistics = item.get("statistics") or {}
        content_details = item.get("contentDetails") or {}

        return cls(
            title=snippet.get("title"),
            description=snippet.get("description"),
            channel_title=snippet.get("channelTitle"),
            published_at=snippet.get("publishedAt"),
            tags=snippet.get("tags") or [],
            category_id=snippet.get("categoryId"),
            view_count=statistics.get("viewCount"),
            like_count=statistics.get("likeCount"),
            comment_count=statistics.get("commentCount"),
            duration=content_details.get("duration"),
            thumbnails=snippet.get("thumbnails") or {},
        )

    def summary(self) -> "VideoSummary":
        """Abbreviated form used in bulk results."""
        return VideoSummary(
            title=self.title,
            view_count=self.view_count,
            published_at=self.published_at,
        )


class VideoSummary(BaseModel):
    """Abbreviated metadata attached to bulk success entries."""
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    view_count: Optional[str] = Field(None, alias="viewCount")
    published_at: Optional[str] = Field(None, alias="publishedAt")
