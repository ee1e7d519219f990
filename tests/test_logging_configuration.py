"""
Tests for logging configuration and the log lines emitted while triaging feedback.
"""
import logging
from unittest.mock import Mock
from feedback_triage.api.main import configure_logging
from feedback_triage.models.schemas import FeedbackSubmission
from feedback_triage.services.feedback_service import FeedbackService


class TestLoggingConfiguration:
    """Test logging setup and service log output."""

    def test_http_loggers_suppressed(self):
        """Test that httpx, httpcore and uvicorn access logs are lowered to WARNING."""
        configure_logging("INFO")

        for name in ("httpx", "httpcore", "uvicorn.access"):
            noisy = logging.getLogger(name)
            assert noisy.level == logging.WARNING
            assert not noisy.isEnabledFor(logging.INFO)
            assert noisy.isEnabledFor(logging.WARNING)

    def test_submission_logged(self, caplog, mock_config, fixed_now):
        """Test that a stored submission is logged with its priority."""
        sql_client = Mock()
        sql_client.get_history.return_value = []
        sql_client.save_feedback.side_effect = lambda record: record
        service = FeedbackService(mock_config, sql_client=sql_client)

        with caplog.at_level(logging.INFO, logger="feedback_triage.services.feedback_service"):
            record = service.submit(
                FeedbackSubmission(name="Ada", email="ada@example.com", feedback="urgent: data lost"),
                now=fixed_now,
            )

        assert f"Feedback {record.id} stored: priority=High Impact" in caplog.text
        assert "Loaded 0 history items from the last 30 days" in caplog.text

    def test_analysis_debug_line(self, caplog):
        """Test that the analyzer logs its result at DEBUG."""
        from feedback_triage.analysis.analyzer import analyze_feedback

        with caplog.at_level(logging.DEBUG, logger="feedback_triage.analysis.analyzer"):
            analyze_feedback("How do I reset my password?")

        assert "tone=Inquisitive" in caplog.text
