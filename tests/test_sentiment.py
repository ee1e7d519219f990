"""Unit tests for the sentiment scorer."""
import pytest
from feedback_triage.analysis.sentiment import analyze_sentiment
from feedback_triage.models.schemas import Sentiment


class TestAnalyzeSentiment:
    """Test analyze_sentiment."""

    def test_positive(self):
        """Test a clearly positive text."""
        result = analyze_sentiment("This is a great product, love it!")

        assert result.label == Sentiment.POSITIVE
        assert result.positive_count == 2
        assert result.negative_count == 0
        assert result.score == 100

    def test_negative_share(self):
        """Test the score is the winning side's share of hits."""
        result = analyze_sentiment("bad support, bad docs, good price")

        assert result.label == Sentiment.NEGATIVE
        assert result.negative_count == 2
        assert result.positive_count == 1
        assert result.score == 67

    def test_half_rounds_up(self):
        """Test that a 62.5 share scores 63."""
        result = analyze_sentiment("good great love best happy bad poor awful")

        assert result.positive_count == 5
        assert result.negative_count == 3
        assert result.score == 63

    @pytest.mark.parametrize("text", [
        "",
        "The invoice arrived on Tuesday",
        "good but bad",
    ])
    def test_ties_are_neutral_at_fifty(self, text):
        """Test that equal hit counts, including none, are neutral at 50."""
        result = analyze_sentiment(text)

        assert result.label == Sentiment.NEUTRAL
        assert result.score == 50
        assert result.positive_count == result.negative_count

    def test_whole_word_matching(self):
        """Test that terms do not match inside longer words."""
        result = analyze_sentiment("An unbroken record of issues")

        assert result.negative_count == 0
        assert result.label == Sentiment.NEUTRAL

    def test_repeated_terms_count_each_time(self):
        """Test that every occurrence of a term is counted."""
        result = analyze_sentiment("Love love LOVE")

        assert result.positive_count == 3
        assert result.label == Sentiment.POSITIVE
