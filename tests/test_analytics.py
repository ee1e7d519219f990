"""Unit tests for feedback analytics."""
import pytest
from unittest.mock import patch
from datetime import timedelta
from feedback_triage.models.schemas import Keyword
from feedback_triage.pipelines.analytics import AnalyticsPipeline, summarize, trends


@pytest.fixture
def sample_records(make_record, fixed_now):
    return [
        make_record(
            rating=5,
            keywords=[Keyword(word="login", count=2), Keyword(word="great", count=1)],
        ),
        make_record(
            rating=2,
            sentiment="negative",
            tone="Critical",
            priority="High Impact",
            issue_type="Bug",
            status="In Progress",
            keywords=[Keyword(word="login", count=1), Keyword(word="crash", count=1)],
            created_at=fixed_now - timedelta(days=1),
        ),
        make_record(
            rating=4,
            sentiment="neutral",
            tone="Neutral",
            keywords=[],
            created_at=fixed_now - timedelta(days=1, hours=2),
        ),
    ]


class TestSummarize:
    """Test summarize."""

    def test_distributions(self, sample_records):
        """Test totals and zero-filled distributions."""
        summary = summarize(sample_records)

        assert summary.total == 3
        assert summary.average_rating == pytest.approx(3.67)
        assert summary.sentiment_distribution == {"positive": 1, "neutral": 1, "negative": 1}
        assert summary.tone_distribution == {
            "Constructive": 0,
            "Appreciative": 1,
            "Critical": 1,
            "Inquisitive": 0,
            "Neutral": 1,
        }
        assert summary.priority_distribution == {
            "High Impact": 1,
            "Medium Impact": 0,
            "Low Impact": 2,
        }
        assert summary.status_distribution == {
            "New": 2,
            "In Progress": 1,
            "Resolved": 0,
            "Closed": 0,
        }
        assert summary.issue_type_distribution == {"General Feedback": 2, "Bug": 1}

    def test_top_keywords_sum_counts(self, sample_records):
        """Test that keyword counts are summed across records."""
        summary = summarize(sample_records)

        assert summary.top_keywords[0] == Keyword(word="login", count=3)
        assert {k.word for k in summary.top_keywords} == {"login", "great", "crash"}

        assert len(summarize(sample_records, top=1).top_keywords) == 1

    def test_empty(self):
        """Test analytics with no feedback."""
        summary = summarize([])

        assert summary.total == 0
        assert summary.average_rating == 0.0
        assert summary.sentiment_distribution == {"positive": 0, "neutral": 0, "negative": 0}
        assert summary.issue_type_distribution == {}
        assert summary.top_keywords == []


class TestTrends:
    """Test trends."""

    def test_daily_counts(self, sample_records, fixed_now):
        """Test one point per day with sentiment counts."""
        points = trends(sample_records, days=3, now=fixed_now)

        assert [p.date for p in points] == ["2024-03-13", "2024-03-14", "2024-03-15"]
        assert points[0].total == 0
        assert (points[1].total, points[1].negative, points[1].neutral) == (2, 1, 1)
        assert (points[2].total, points[2].positive) == (1, 1)

    def test_empty(self, fixed_now):
        """Test trends with no feedback."""
        points = trends([], days=7, now=fixed_now)

        assert len(points) == 7
        assert all(p.total == 0 for p in points)


class TestAnalyticsPipeline:
    """Test AnalyticsPipeline class."""

    @patch('feedback_triage.pipelines.analytics.SQLClient')
    def test_run(self, mock_sql_client, mock_config, sample_records):
        """Test that the pipeline loads records and always closes the store."""
        mock_sql_instance = mock_sql_client.return_value
        mock_sql_instance.get_all_feedback.return_value = sample_records

        results = AnalyticsPipeline(mock_config).run(days=5)

        assert results["summary"].total == 3
        assert len(results["trends"]) == 5
        mock_sql_instance.connect.assert_called_once()
        mock_sql_instance.close.assert_called_once()

    @patch('feedback_triage.pipelines.analytics.SQLClient')
    def test_run_closes_on_error(self, mock_sql_client, mock_config):
        """Test that the connection is closed when loading fails."""
        mock_sql_instance = mock_sql_client.return_value
        mock_sql_instance.get_all_feedback.side_effect = RuntimeError("timeout")

        with pytest.raises(RuntimeError):
            AnalyticsPipeline(mock_config).run()

        mock_sql_instance.close.assert_called_once()
