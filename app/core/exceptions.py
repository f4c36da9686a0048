"""Custom exceptions for the YouTube SEO Optimizer."""
from typing import Optional


class OptimizerBaseException(Exception):
    """Base exception for the optimizer service.

    ``message`` is always written by this service and is safe to show to
    clients. Provider-specific text belongs in ``details["reason"]``.
    """

    def __init__(self, message: str, error_code: str, details: Optional[dict] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(OptimizerBaseException):
    """Exception raised for input validation errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, "VALIDATION_ERROR", details)


class InvalidVideoURLError(OptimizerBaseException):
    """Exception raised when no video identifier can be parsed from a URL."""

    def __init__(self, url: Optional[str] = None):
        super().__init__("Invalid YouTube URL", "INVALID_VIDEO_URL", {"url": url})


class UnsupportedModeError(OptimizerBaseException):
    """Exception raised for an optimization type outside the registry."""

    def __init__(self, mode: str, supported: Optional[list] = None):
        supported = supported or []
        message = f"Unsupported optimization type: {mode}"
        if supported:
            message += f" (expected one of: {', '.join(supported)})"
        super().__init__(message, "UNSUPPORTED_MODE", {"mode": mode, "supported": supported})


class VideoNotFoundError(OptimizerBaseException):
    """Exception raised when the video data provider returns no items."""

    def __init__(self, video_id: str):
        super().__init__("Video not found", "VIDEO_NOT_FOUND", {"video_id": video_id})


class TranscriptUnavailableError(OptimizerBaseException):
    """Exception raised when captions cannot be fetched for a video."""

    def __init__(self, video_id: str, reason: Optional[str] = None):
        message = "Could not fetch transcript. Video may not have captions or may be private."
        super().__init__(message, "TRANSCRIPT_UNAVAILABLE", {"video_id": video_id, "reason": reason})


class ProviderError(OptimizerBaseException):
    """Exception raised on transport, auth or quota failures of an external provider."""

    def __init__(self, service: str, reason: str = "Request failed"):
        self.service = service
        message = f"{service} request failed"
        super().__init__(message, "PROVIDER_ERROR", {"service": service, "reason": reason})


class OptimizationParseError(OptimizerBaseException):
    """Exception raised when the model response is not the expected structured data."""

    def __init__(self, mode: str, reason: str = "Response is not valid JSON"):
        message = "AI response could not be parsed"
        super().__init__(message, "OPTIMIZATION_PARSE_ERROR", {"mode": mode, "reason": reason})


class RateLimitExceededError(OptimizerBaseException):
    """Exception raised when rate limit is exceeded."""

    def __init__(self, message: str, limit: int, retry_after: int):
        details = {"limit": limit, "retry_after": retry_after}
        super().__init__(message, "RATE_LIMIT_EXCEEDED", details)


class ConfigurationError(OptimizerBaseException):
    """Exception raised for configuration errors.

    The setting name stays in ``details`` and out of the client-facing message.
    """

    def __init__(self, setting: str, reason: str):
        message = "Server configuration error"
        details = {"setting": setting, "reason": reason}
        super().__init__(message, "CONFIGURATION_ERROR", details)
