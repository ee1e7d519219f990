"""Unit tests for keyword extraction."""
from feedback_triage.analysis.keywords import extract_keywords, keyword_words
from feedback_triage.models.schemas import Keyword


class TestExtractKeywords:
    """Test extract_keywords."""

    def test_counts_and_drops_stop_words(self):
        """Test the ranked output for a text with repeated words."""
        keywords = extract_keywords("the quick quick brown fox the fox")

        assert [(k.word, k.count) for k in keywords] == [
            ("quick", 2),
            ("fox", 2),
            ("brown", 1),
        ]

    def test_ties_keep_first_appearance_order(self):
        """Test that equal counts are ordered by first appearance."""
        keywords = extract_keywords("zebra apple mango apple zebra mango")

        assert [k.word for k in keywords] == ["zebra", "apple", "mango"]

    def test_short_words_and_digits_are_ignored(self):
        """Test that tokens under three letters and digits are discarded."""
        keywords = extract_keywords("UI is ok 123 abc x1")

        assert [k.word for k in keywords] == ["abc"]

    def test_text_is_lowercased(self):
        """Test that extraction is case-insensitive."""
        keywords = extract_keywords("Login LOGIN login")

        assert keywords == [Keyword(word="login", count=3)]

    def test_output_is_capped_at_ten(self):
        """Test that at most ten keywords are returned."""
        text = ("alpha bravo charlie delta echo foxtrot golf hotel "
                "india juliet kilo lima")

        keywords = extract_keywords(text)

        assert len(keywords) == 10
        assert keywords[0].word == "alpha"
        assert "lima" not in [k.word for k in keywords]

    def test_empty_text(self):
        """Test that empty input yields no keywords."""
        assert extract_keywords("") == []
        assert extract_keywords(None) == []

    def test_only_stop_words(self):
        """Test that a text of stop words yields no keywords."""
        assert extract_keywords("The and with this, that those!") == []


class TestKeywordWords:
    """Test keyword normalization."""

    def test_mixed_keyword_shapes(self):
        """Test strings, mappings and Keyword objects normalize to words."""
        words = keyword_words([
            "dark",
            {"word": "mode", "count": 2},
            Keyword(word="theme", count=1),
        ])

        assert words == ["dark", "mode", "theme"]

    def test_entries_without_word_skipped(self):
        """Test that mappings without a word are not passed through."""
        assert keyword_words([{"count": 1}, "dark"]) == ["dark"]

    def test_none(self):
        """Test that a missing keyword list normalizes to empty."""
        assert keyword_words(None) == []
