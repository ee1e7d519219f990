"""
First-match keyword classifiers for tone, impact and issue type.

Each classifier lowercases the text and checks its tables in a fixed order;
the first table with any substring hit decides the label.
"""

from typing import Iterable

from feedback_triage.analysis.lexicons import (
    BUG_TERMS,
    FEATURE_TERMS,
    HIGH_IMPACT_TERMS,
    MEDIUM_IMPACT_TERMS,
    TONE_CUES,
)
from feedback_triage.models.schemas import IssueType, Priority, Sentiment, SentimentResult, Tone


def _mentions_any(lower_text: str, terms: Iterable[str]) -> bool:
    return any(term in lower_text for term in terms)


def detect_tone(text: str) -> Tone:
    """
    Detect the rhetorical stance of feedback.

    Checks constructive, appreciative, critical and inquisitive cues in that
    order, so a suggestion that also names a defect stays Constructive.
    """
    lower_text = (text or "").lower()
    for tone, cues in TONE_CUES:
        if _mentions_any(lower_text, cues):
            return Tone(tone)
    return Tone.NEUTRAL


def determine_impact(text: str, tone: Tone) -> Priority:
    """
    Assign a base impact level from urgency terms and tone.

    Critical feedback is never rated below Medium, even with no urgency terms.
    """
    lower_text = (text or "").lower()

    if _mentions_any(lower_text, HIGH_IMPACT_TERMS):
        return Priority.HIGH

    if _mentions_any(lower_text, MEDIUM_IMPACT_TERMS) or tone == Tone.CRITICAL:
        return Priority.MEDIUM

    return Priority.LOW


def classify_issue_type(text: str, sentiment: SentimentResult) -> IssueType:
    """Classify feedback as Bug, Feature Request, Praise, Complaint or General Feedback."""
    lower_text = (text or "").lower()

    if _mentions_any(lower_text, BUG_TERMS):
        return IssueType.BUG

    if _mentions_any(lower_text, FEATURE_TERMS):
        return IssueType.FEATURE_REQUEST

    if sentiment.label == Sentiment.POSITIVE and sentiment.positive_count >= 2:
        return IssueType.PRAISE

    if sentiment.label == Sentiment.NEGATIVE:
        return IssueType.COMPLAINT

    return IssueType.GENERAL
