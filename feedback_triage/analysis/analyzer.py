"""
Complete analysis of one feedback item: sentiment, tone, impact, issue type,
keywords and repeat detection, merged into a single AnalysisRecord.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional
import logging

from feedback_triage.analysis.classifiers import classify_issue_type, detect_tone, determine_impact
from feedback_triage.analysis.keywords import extract_keywords
from feedback_triage.analysis.repeat_detector import (
    SIMILARITY_THRESHOLD,
    WINDOW_DAYS,
    detect_repeat_issue,
)
from feedback_triage.analysis.sentiment import analyze_sentiment
from feedback_triage.models.schemas import AnalysisRecord, HistoryItem, Priority

logger = logging.getLogger(__name__)


def higher_priority(first: Priority, second: Priority) -> Priority:
    """Return the more urgent of two priorities; ``first`` wins ties."""
    return first if first.rank >= second.rank else second


def analyze_feedback(
    text: str,
    history: Iterable[HistoryItem] = (),
    now: Optional[datetime] = None,
    window_days: int = WINDOW_DAYS,
    threshold: float = SIMILARITY_THRESHOLD,
) -> AnalysisRecord:
    """
    Run the full analysis for a feedback text.

    The history must be read before the item itself is stored, otherwise it
    matches against itself. The final priority is the higher of the impact
    classification and the repeat-detection priority.

    Args:
        text: Raw feedback text
        history: Previously stored feedback items
        now: Analysis time (defaults to the current UTC time)
        window_days: Repeat-detection look-back window in days
        threshold: Repeat-detection similarity threshold

    Returns:
        AnalysisRecord for the feedback
    """
    text = text or ""
    now = now or datetime.now(timezone.utc)

    sentiment = analyze_sentiment(text)
    keywords = extract_keywords(text)
    tone = detect_tone(text)
    impact = determine_impact(text, tone)
    issue_type = classify_issue_type(text, sentiment)
    repeat_analysis = detect_repeat_issue(
        text,
        [k.word for k in keywords],
        history,
        now=now,
        window_days=window_days,
        threshold=threshold,
    )

    priority = higher_priority(impact, repeat_analysis.priority)

    logger.debug(
        f"Analyzed feedback: sentiment={sentiment.label.value}, tone={tone.value}, "
        f"issue_type={issue_type.value}, priority={priority.value}, "
        f"repeats={repeat_analysis.repeat_count}"
    )

    return AnalysisRecord(
        sentiment=sentiment.label,
        sentiment_score=sentiment.score,
        keywords=keywords,
        priority=priority,
        tone=tone,
        issue_type=issue_type,
        repeat_analysis=repeat_analysis,
        analyzed_at=now,
    )
