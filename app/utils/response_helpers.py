"""Response creation utilities."""
import uuid
from typing import Any, Dict, Optional
from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..models.responses import ErrorResponse
from ..core.exceptions import OptimizerBaseException, RateLimitExceededError

class ResponseHelper:
    """Utilities for creating standardized API responses."""

    # Map error codes to HTTP status codes
    STATUS_MAPPING = {
        "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
        "INVALID_VIDEO_URL": status.HTTP_400_BAD_REQUEST,
        "UNSUPPORTED_MODE": status.HTTP_400_BAD_REQUEST,
        "VIDEO_NOT_FOUND": status.HTTP_404_NOT_FOUND,
        "TRANSCRIPT_UNAVAILABLE": status.HTTP_500_INTERNAL_SERVER_ERROR,
        "PROVIDER_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
        "OPTIMIZATION_PARSE_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
        "RATE_LIMIT_EXCEEDED": status.HTTP_429_TOO_MANY_REQUESTS,
        "CONFIGURATION_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    }

    @staticmethod
    def generate_request_id() -> str:
        """Generate unique request ID."""
        return f"req_{uuid.uuid4().hex[:8]}"

    @staticmethod
    def create_success_response(data: Any) -> JSONResponse:
        """Create success response from a model or plain dict."""
        if isinstance(data, BaseModel):
            data = data.model_dump(by_alias=True)

        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content=data
        )

    @staticmethod
    def create_error_response(
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> JSONResponse:
        """Create standardized error response."""
        response = ErrorResponse(error=message, details=details)
        return JSONResponse(
            status_code=status_code,
            content=response.model_dump(exclude_none=True),
            headers=headers
        )

    @staticmethod
    def status_for(exc: OptimizerBaseException) -> int:
        """HTTP status for a service exception."""
        return ResponseHelper.STATUS_MAPPING.get(exc.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    @staticmethod
    def create_error_from_exception(
        exc: OptimizerBaseException,
        failure_message: Optional[str] = None
    ) -> JSONResponse:
        """Create error response from custom exception.

        Client errors carry the exception message as ``error``. Server-side
        failures carry ``failure_message`` as ``error`` and the exception
        message as ``details``.
        """
        http_status = ResponseHelper.status_for(exc)

        headers = None
        if isinstance(exc, RateLimitExceededError):
            headers = {
                "Retry-After": str(exc.details.get("retry_after", 0)),
                "X-RateLimit-Limit": str(exc.details.get("limit", 0)),
                "X-RateLimit-Remaining": "0",
            }

        if http_status < status.HTTP_500_INTERNAL_SERVER_ERROR or not failure_message:
            return ResponseHelper.create_error_response(exc.message, http_status, headers=headers)

        return ResponseHelper.create_error_response(
            failure_message,
            http_status,
            details=exc.message,
            headers=headers
        )
