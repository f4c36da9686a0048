"""Logging configuration and utilities."""
import logging
import sys
from typing import Optional
from ..core.config import settings

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = {
    "googleapiclient": logging.WARNING,
    "googleapiclient.discovery_cache": logging.ERROR,
    "youtube_transcript_api": logging.WARNING,
    "openai": logging.WARNING,
    "httpx": logging.WARNING,
}

class LoggerSetup:
    """Centralized logging configuration."""

    @staticmethod
    def setup_logging(
        level: Optional[str] = None,
        format_string: Optional[str] = None
    ) -> None:
        """Setup application logging."""
        log_level = level or settings.log_level
        log_format = format_string or settings.log_format

        # Configure root logger
        logging.basicConfig(
            level=getattr(logging, log_level.upper(), logging.INFO),
            format=log_format,
            handlers=[
                logging.StreamHandler(sys.stdout)
            ]
        )

        logging.getLogger("uvicorn").setLevel(logging.INFO)
        logging.getLogger("fastapi").setLevel(logging.INFO)
        for name, quiet_level in QUIET_LOGGERS.items():
            logging.getLogger(name).setLevel(quiet_level)

class CorrelatedLogger:
    """Logger that prefixes every line with the request ID it belongs to.

    Services hold one unbound instance and call ``bind(request_id)`` per
    request, so the same video can be traced across fetchers and the model
    call.
    """

    def __init__(self, name: str, request_id: Optional[str] = None):
        self.logger = logging.getLogger(name)
        self.request_id = request_id

    def bind(self, request_id: Optional[str]) -> "CorrelatedLogger":
        """Return a logger for the same channel tagged with another request ID."""
        return CorrelatedLogger(self.logger.name, request_id)

    def log(self, level: int, message: str, **kwargs) -> None:
        if self.request_id:
            message = f"[{self.request_id}] {message}"
        self.logger.log(level, message, **kwargs)

    def debug(self, message: str, **kwargs) -> None:
        self.log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self.log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self.log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self.log(logging.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs) -> None:
        """Log at ERROR level with the current traceback."""
        kwargs.setdefault("exc_info", True)
        self.log(logging.ERROR, message, **kwargs)

class MetricsLogger:
    """Writes one ``key=value`` line per request, video and batch to the ``metrics`` logger."""

    def __init__(self):
        self.logger = logging.getLogger("metrics")

    def _emit(self, event: str, **fields) -> None:
        parts = [f"{key}={value}" for key, value in fields.items() if value is not None]
        self.logger.info(f"{event} " + " ".join(parts))

    def log_request_metrics(
        self,
        request_id: str,
        endpoint: str,
        method: str,
        processing_time_ms: int,
        status_code: int
    ) -> None:
        """Log request processing metrics."""
        self._emit(
            "REQUEST_METRICS",
            request_id=request_id,
            endpoint=endpoint,
            method=method,
            processing_time_ms=processing_time_ms,
            status_code=status_code
        )

    def log_optimization_metrics(
        self,
        request_id: Optional[str],
        video_id: Optional[str],
        mode: str,
        success: bool,
        processing_time_ms: int,
        error_code: Optional[str] = None
    ) -> None:
        """Log per-video optimization metrics."""
        self._emit(
            "OPTIMIZATION_METRICS",
            request_id=request_id,
            video_id=video_id,
            mode=mode,
            status="success" if success else "failed",
            processing_time_ms=processing_time_ms,
            error_code=error_code
        )

    def log_batch_metrics(
        self,
        request_id: Optional[str],
        mode: str,
        processed: int,
        successful: int,
        processing_time_ms: int
    ) -> None:
        """Log bulk optimization totals."""
        self._emit(
            "BATCH_METRICS",
            request_id=request_id,
            mode=mode,
            processed=processed,
            successful=successful,
            failed=processed - successful,
            processing_time_ms=processing_time_ms
        )
