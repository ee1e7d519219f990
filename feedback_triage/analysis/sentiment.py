from typing import Iterable
import math
import re

from feedback_triage.analysis.lexicons import NEGATIVE_TERMS, POSITIVE_TERMS
from feedback_triage.models.schemas import Sentiment, SentimentResult

NEUTRAL_SCORE = 50


def _term_patterns(terms: Iterable[str]):
    return tuple(re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE) for term in terms)


_POSITIVE_PATTERNS = _term_patterns(POSITIVE_TERMS)
_NEGATIVE_PATTERNS = _term_patterns(NEGATIVE_TERMS)


def _count_hits(text: str, patterns) -> int:
    return sum(len(pattern.findall(text)) for pattern in patterns)


def _vote_share(winner: int, loser: int) -> int:
    # Half-up rounding: 62.5 scores 63.
    return int(math.floor(min(winner / (winner + loser) * 100, 100) + 0.5))


def analyze_sentiment(text: str) -> SentimentResult:
    """
    Score the polarity of a feedback text by counting lexicon hits.

    Each positive and negative term is matched as a whole word, and every
    occurrence counts. The side with strictly more hits wins and its score is
    its share of all hits; a tie, including no hits at all, is neutral at 50.

    Args:
        text: Raw feedback text

    Returns:
        Sentiment label, score (0-100) and the raw hit counts
    """
    lower_text = (text or "").lower()
    positive_count = _count_hits(lower_text, _POSITIVE_PATTERNS)
    negative_count = _count_hits(lower_text, _NEGATIVE_PATTERNS)

    if positive_count > negative_count:
        label = Sentiment.POSITIVE
        score = _vote_share(positive_count, negative_count)
    elif negative_count > positive_count:
        label = Sentiment.NEGATIVE
        score = _vote_share(negative_count, positive_count)
    else:
        label = Sentiment.NEUTRAL
        score = NEUTRAL_SCORE

    return SentimentResult(
        label=label,
        score=score,
        positive_count=positive_count,
        negative_count=negative_count,
    )
