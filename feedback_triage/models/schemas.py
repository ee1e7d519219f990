from pydantic import AliasChoices, BaseModel, Field, field_validator
from datetime import datetime
from typing import Any, Dict, List, Optional
from enum import Enum


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class Tone(str, Enum):
    CONSTRUCTIVE = "Constructive"
    APPRECIATIVE = "Appreciative"
    CRITICAL = "Critical"
    INQUISITIVE = "Inquisitive"
    NEUTRAL = "Neutral"


class Priority(str, Enum):
    """Impact level of a feedback item, ordered Low < Medium < High."""
    LOW = "Low Impact"
    MEDIUM = "Medium Impact"
    HIGH = "High Impact"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANKS[self]


_PRIORITY_RANKS = {Priority.LOW: 1, Priority.MEDIUM: 2, Priority.HIGH: 3}


class IssueType(str, Enum):
    BUG = "Bug"
    FEATURE_REQUEST = "Feature Request"
    PRAISE = "Praise"
    COMPLAINT = "Complaint"
    GENERAL = "General Feedback"


class FeedbackStatus(str, Enum):
    NEW = "New"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


class Keyword(BaseModel):
    """A significant term and how often it occurs in a feedback text."""
    word: str
    count: int = Field(..., ge=1)


def keyword_word(value: Any) -> Optional[str]:
    """Read the word out of a keyword given as a string, mapping or Keyword.

    Returns None when no string word can be found.
    """
    if isinstance(value, dict):
        word = value.get("word")
    else:
        word = getattr(value, "word", value)
    return word if isinstance(word, str) else None


def keyword_list(values: Any) -> List[str]:
    """Plain words of a keyword list, skipping entries without a usable word."""
    words = (keyword_word(v) for v in values or [])
    return [w for w in words if w is not None]


class SentimentResult(BaseModel):
    """Frequency-vote sentiment of a feedback text."""
    label: Sentiment
    score: int = Field(..., ge=0, le=100)
    positive_count: int = Field(0, ge=0)
    negative_count: int = Field(0, ge=0)


class SimilarIssue(BaseModel):
    """Earlier feedback item judged similar to the one being analyzed."""
    id: str
    text: Optional[str] = None
    created_at: datetime
    similarity_score: float = Field(..., ge=0.0, le=1.0)
    common_keywords: List[str] = Field(default_factory=list)


class RepeatAnalysis(BaseModel):
    """Outcome of comparing feedback against the recent-history window."""
    is_repeat: bool = False
    repeat_count: int = Field(0, ge=0)
    similar_issues: List[SimilarIssue] = Field(default_factory=list, max_length=3)
    priority: Priority = Priority.LOW
    confidence: float = Field(0.0, ge=0.0, le=1.0)


class AnalysisRecord(BaseModel):
    """Everything the analyzer attaches to a feedback item at creation time."""
    sentiment: Sentiment = Sentiment.NEUTRAL
    sentiment_score: int = Field(50, ge=0, le=100)
    keywords: List[Keyword] = Field(default_factory=list)
    priority: Priority = Priority.LOW
    tone: Tone = Tone.NEUTRAL
    issue_type: IssueType = IssueType.GENERAL
    repeat_analysis: RepeatAnalysis = Field(default_factory=RepeatAnalysis)
    analyzed_at: datetime


class HistoryItem(BaseModel):
    """Previously stored feedback, as seen by the repeat-issue detector."""
    id: str
    feedback: Optional[str] = None
    created_at: datetime = Field(validation_alias=AliasChoices("created_at", "createdAt"))
    keywords: List[str] = Field(default_factory=list)

    @field_validator("keywords", mode="before")
    @classmethod
    def _normalize_keywords(cls, value):
        if value is None:
            return []
        return keyword_list(value)


class FeedbackSubmission(BaseModel):
    """Payload posted by a customer. Required fields are checked by the service."""
    name: Optional[str] = None
    email: Optional[str] = None
    service_type: Optional[str] = Field(None, validation_alias=AliasChoices("service_type", "serviceType"))
    rating: Optional[Any] = None
    feedback: Optional[str] = None


class FeedbackRecord(AnalysisRecord):
    """Persisted feedback item with its analysis merged in."""
    id: str
    name: str
    email: str
    service_type: str = "General"
    rating: int = 0
    feedback: str
    status: FeedbackStatus = FeedbackStatus.NEW
    created_at: datetime
    updated_at: datetime

    def to_history_item(self) -> HistoryItem:
        return HistoryItem(
            id=self.id,
            feedback=self.feedback,
            created_at=self.created_at,
            keywords=[k.word for k in self.keywords],
        )


class FeedbackUpdate(BaseModel):
    """Fields an admin may edit after submission."""
    status: Optional[FeedbackStatus] = None
    priority: Optional[Priority] = None
    name: Optional[str] = None
    email: Optional[str] = None
    service_type: Optional[str] = None
    rating: Optional[int] = None


class TrendPoint(BaseModel):
    """Feedback volume and sentiment mix for one calendar day."""
    date: str
    total: int = 0
    positive: int = 0
    neutral: int = 0
    negative: int = 0


class AnalyticsSummary(BaseModel):
    """Aggregates shown on the admin dashboard."""
    total: int = 0
    average_rating: float = 0.0
    sentiment_distribution: Dict[str, int] = Field(default_factory=dict)
    tone_distribution: Dict[str, int] = Field(default_factory=dict)
    priority_distribution: Dict[str, int] = Field(default_factory=dict)
    status_distribution: Dict[str, int] = Field(default_factory=dict)
    issue_type_distribution: Dict[str, int] = Field(default_factory=dict)
    top_keywords: List[Keyword] = Field(default_factory=list)
