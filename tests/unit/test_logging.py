"""Unit tests for logging utilities."""
import logging
from app.utils.logging import CorrelatedLogger, MetricsLogger

class TestCorrelatedLogger:
    """Test request ID prefixing."""

    def test_bound_logger_prefixes_request_id(self, caplog):
        logger = CorrelatedLogger("app.test").bind("req_1234abcd")

        with caplog.at_level(logging.INFO, logger="app.test"):
            logger.info("Fetching metadata")

        assert "[req_1234abcd] Fetching metadata" in caplog.text

    def test_unbound_logger_has_no_prefix(self, caplog):
        with caplog.at_level(logging.WARNING, logger="app.test"):
            CorrelatedLogger("app.test").warning("Video not found")

        assert caplog.records[-1].getMessage() == "Video not found"

    def test_bind_keeps_channel(self):
        base = CorrelatedLogger("app.services.video_service")
        bound = base.bind("req_1")

        assert bound.logger is base.logger
        assert base.request_id is None


class TestMetricsLogger:
    """Test metrics lines."""

    def test_optimization_metrics_line(self, caplog):
        with caplog.at_level(logging.INFO, logger="metrics"):
            MetricsLogger().log_optimization_metrics(
                "req_1", "dQw4w9WgXcQ", "seo", False, 120, "PROVIDER_ERROR"
            )

        line = caplog.records[-1].getMessage()
        assert line.startswith("OPTIMIZATION_METRICS ")
        assert "video_id=dQw4w9WgXcQ" in line
        assert "status=failed" in line
        assert "error_code=PROVIDER_ERROR" in line

    def test_none_fields_are_omitted(self, caplog):
        with caplog.at_level(logging.INFO, logger="metrics"):
            MetricsLogger().log_optimization_metrics(None, "dQw4w9WgXcQ", "seo", True, 5)

        line = caplog.records[-1].getMessage()
        assert "request_id" not in line
        assert "error_code" not in line

    def test_batch_metrics_line(self, caplog):
        with caplog.at_level(logging.INFO, logger="metrics"):
            MetricsLogger().log_batch_metrics("req_1", "seo", 3, 2, 2500)

        line = caplog.records[-1].getMessage()
        assert "processed=3 successful=2 failed=1" in line
