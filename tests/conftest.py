"""Shared fixtures for feedback triage tests."""
import pytest
from unittest.mock import Mock
from datetime import datetime, timezone
from feedback_triage.config.settings import Settings
from feedback_triage.models.schemas import FeedbackRecord, Keyword, RepeatAnalysis


@pytest.fixture
def fixed_now():
    """A fixed analysis time."""
    return datetime(2024, 3, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_config():
    """Create a mock configuration."""
    config = Mock(spec=Settings)
    config.sql_server_host = "test-server"
    config.sql_server_port = 1433
    config.sql_server_username = "test-user"
    config.sql_server_password = "test-pass"
    config.sql_server_database = "test-db"
    config.feedback_table = "customer_insights.feedback_triage"
    config.repeat_window_days = 30
    config.similarity_threshold = 0.4
    config.cors_origins_list = ["http://localhost:5173"]
    config.log_level = "INFO"
    return config


@pytest.fixture
def make_record(fixed_now):
    """Factory for stored feedback records."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        fields = dict(
            id=f"fb{counter['n']:03d}",
            name="Ada Lovelace",
            email="ada@example.com",
            service_type="General",
            rating=4,
            feedback="The dashboard is great",
            sentiment="positive",
            sentiment_score=100,
            keywords=[Keyword(word="dashboard", count=1), Keyword(word="great", count=1)],
            priority="Low Impact",
            tone="Appreciative",
            issue_type="General Feedback",
            repeat_analysis=RepeatAnalysis(),
            analyzed_at=fixed_now,
            created_at=fixed_now,
            updated_at=fixed_now,
        )
        fields.update(overrides)
        return FeedbackRecord(**fields)

    return _make
