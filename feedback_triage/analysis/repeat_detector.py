"""
Repeat-issue detection over a recent window of stored feedback.
"""

from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional, Sequence
import logging

from feedback_triage.models.schemas import HistoryItem, Priority, RepeatAnalysis, SimilarIssue

logger = logging.getLogger(__name__)

WINDOW_DAYS = 30
SIMILARITY_THRESHOLD = 0.4
MAX_SIMILAR_ISSUES = 3

# The weights sum to 0.9, so no pair of texts scores above 0.9.
KEYWORD_WEIGHT = 0.7
TEXT_WEIGHT = 0.2
MIN_TEXT_WORD_LENGTH = 4


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _ratio(numerator: int, denominator: int) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator


def common_keywords(current_keywords: Sequence[str], history_keywords: Sequence[str]) -> List[str]:
    history_set = set(history_keywords)
    return [word for word in current_keywords if word in history_set]


def similarity_score(
    current_text: str,
    current_keywords: Sequence[str],
    history_text: str,
    history_keywords: Sequence[str],
) -> float:
    """
    Weighted similarity between two feedback texts.

    0.7 times the keyword overlap (shared keywords over the longer keyword
    list) plus 0.2 times the word overlap (current words longer than three
    characters found in the other text, over the longer word list).

    Args:
        current_text: Text being analyzed
        current_keywords: Keyword words of the text being analyzed
        history_text: Text of the stored item
        history_keywords: Keyword words of the stored item

    Returns:
        Score between 0 and 0.9
    """
    shared = common_keywords(current_keywords, history_keywords)
    keyword_overlap = _ratio(len(shared), max(len(current_keywords), len(history_keywords)))

    current_words = (current_text or "").lower().split()
    history_words = (history_text or "").lower().split()
    history_vocabulary = set(history_words)
    shared_words = [
        word for word in current_words
        if word in history_vocabulary and len(word) >= MIN_TEXT_WORD_LENGTH
    ]
    text_overlap = _ratio(len(shared_words), max(len(current_words), len(history_words)))

    return keyword_overlap * KEYWORD_WEIGHT + text_overlap * TEXT_WEIGHT


def repeat_priority(repeat_count: int) -> Priority:
    if repeat_count >= 5:
        return Priority.HIGH
    if repeat_count >= 3:
        return Priority.MEDIUM
    return Priority.LOW


def detect_repeat_issue(
    text: str,
    keywords: Sequence[str],
    history: Iterable[HistoryItem],
    now: Optional[datetime] = None,
    window_days: int = WINDOW_DAYS,
    threshold: float = SIMILARITY_THRESHOLD,
) -> RepeatAnalysis:
    """
    Decide whether feedback repeats an issue reported in the recent window.

    Every history item newer than ``now - window_days`` is scored with
    ``similarity_score``; items scoring above ``threshold`` are similar. All
    similar items count toward ``repeat_count`` but only the best three are
    returned in ``similar_issues``.

    Args:
        text: Feedback text being analyzed
        keywords: Keyword words extracted from that text
        history: Previously stored feedback
        now: Reference time (defaults to the current UTC time)
        window_days: Size of the look-back window in days
        threshold: Minimum score (exclusive) for an item to count as similar

    Returns:
        RepeatAnalysis with repeat flag, count, top matches and derived priority
    """
    history = list(history or [])
    if not history:
        return RepeatAnalysis()

    now = _as_utc(now or datetime.now(timezone.utc))
    cutoff = now - timedelta(days=window_days)
    current_keywords = list(keywords)

    similar: List[SimilarIssue] = []
    for item in history:
        if _as_utc(item.created_at) <= cutoff:
            continue

        score = similarity_score(text, current_keywords, item.feedback, item.keywords)
        if score > threshold:
            similar.append(SimilarIssue(
                id=item.id,
                text=item.feedback,
                created_at=item.created_at,
                similarity_score=score,
                common_keywords=common_keywords(current_keywords, item.keywords),
            ))

    similar.sort(key=lambda issue: issue.similarity_score, reverse=True)
    repeat_count = len(similar)

    if repeat_count:
        logger.debug(
            f"Found {repeat_count} similar items in the last {window_days} days "
            f"(best score {similar[0].similarity_score:.2f})"
        )

    return RepeatAnalysis(
        is_repeat=repeat_count > 0,
        repeat_count=repeat_count,
        similar_issues=similar[:MAX_SIMILAR_ISSUES],
        priority=repeat_priority(repeat_count),
        confidence=similar[0].similarity_score if similar else 0.0,
    )
