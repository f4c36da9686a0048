"""URL validation utilities."""
import re
from typing import Any, Optional

from app.core.exceptions import InvalidVideoURLError, ValidationError

class URLValidator:
    """Video identifier parsing for YouTube URLs."""

    # watch?v=, &v=, youtu.be/, embed/, v/, e/ and /user/.../ style links
    VIDEO_ID_PATTERN = re.compile(
        r'(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)'
        r'([^"&?/\s]{11})'
    )

    @staticmethod
    def extract_video_id(url: Any) -> Optional[str]:
        """Extract the 11-character video ID, or None when the URL is not recognised."""
        if not isinstance(url, str):
            return None

        match = URLValidator.VIDEO_ID_PATTERN.search(url)
        return match.group(1) if match else None

    @staticmethod
    def require_url(url: Any) -> str:
        """Ensure a URL was supplied at all."""
        if not url or not isinstance(url, str):
            raise ValidationError("YouTube URL is required")
        return url

    @staticmethod
    def require_video_id(url: Any) -> str:
        """Extract the video ID or raise InvalidVideoURLError."""
        video_id = URLValidator.extract_video_id(url)
        if video_id is None:
            raise InvalidVideoURLError(url if isinstance(url, str) else None)
        return video_id
