"""
Feedback intake: validation, repeat-aware analysis and persistence.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional
import logging
import re
import uuid

from feedback_triage.analysis.analyzer import analyze_feedback
from feedback_triage.config.settings import Settings
from feedback_triage.data_access.sql_client import SQLClient
from feedback_triage.models.schemas import FeedbackRecord, FeedbackSubmission, FeedbackUpdate


logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Name, email, and feedback are required"

LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


def _parse_rating(value) -> int:
    """Leading integer of the submitted rating ("4.5" -> 4, "5 stars" -> 5), else 0."""
    if value is None or isinstance(value, bool):
        return 0
    match = LEADING_INTEGER.match(str(value))
    return int(match.group(1)) if match else 0


class FeedbackService:
    """Creates, queries and edits feedback records on top of the SQL store."""

    def __init__(self, config: Settings, sql_client: Optional[SQLClient] = None):
        """
        Initialize the service.

        Args:
            config: Application settings
            sql_client: Store to use. If None, a SQLClient is built from config.
        """
        self.config = config
        self.sql_client = sql_client or SQLClient(config)

    def submit(self, submission: FeedbackSubmission, now: Optional[datetime] = None) -> FeedbackRecord:
        """
        Analyze and store a new piece of feedback.

        History is read before the new record is saved so it never matches
        itself.

        Args:
            submission: Payload received from the customer
            now: Submission time (defaults to the current UTC time)

        Returns:
            The stored record, analysis included

        Raises:
            ValueError: If name, email or feedback is missing or blank
        """
        required = (submission.name, submission.email, submission.feedback)
        if not all(value and value.strip() for value in required):
            raise ValueError(REQUIRED_FIELDS_MESSAGE)

        now = now or datetime.now(timezone.utc)
        window_days = self.config.repeat_window_days

        history = self.sql_client.get_history(since=now - timedelta(days=window_days))
        logger.info(f"Loaded {len(history)} history items from the last {window_days} days")

        analysis = analyze_feedback(
            submission.feedback,
            history,
            now=now,
            window_days=window_days,
            threshold=self.config.similarity_threshold,
        )

        record = FeedbackRecord(
            id=str(uuid.uuid4()),
            name=submission.name,
            email=submission.email,
            service_type=submission.service_type or "General",
            rating=_parse_rating(submission.rating),
            feedback=submission.feedback,
            created_at=now,
            updated_at=now,
            **analysis.model_dump(),
        )

        saved = self.sql_client.save_feedback(record)
        logger.info(
            f"Feedback {saved.id} stored: priority={saved.priority.value}, "
            f"issue_type={saved.issue_type.value}, "
            f"repeats={saved.repeat_analysis.repeat_count}"
        )
        return saved

    def list_feedback(
        self,
        sentiment: Optional[str] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[FeedbackRecord]:
        """
        List stored feedback, newest first.

        Args:
            sentiment: Keep only this sentiment label
            status: Keep only this status
            priority: Keep only this priority
            search: Case-insensitive text matched against feedback, name and email

        Returns:
            Matching feedback records
        """
        records = self.sql_client.get_all_feedback()

        if sentiment:
            records = [r for r in records if r.sentiment.value == sentiment]
        if status:
            records = [r for r in records if r.status.value == status]
        if priority:
            records = [r for r in records if r.priority.value == priority]
        if search:
            needle = search.lower()
            records = [
                r for r in records
                if needle in r.feedback.lower()
                or needle in r.name.lower()
                or needle in r.email.lower()
            ]

        records.sort(key=lambda r: r.created_at, reverse=True)
        return records

    def get_feedback(self, feedback_id: str) -> Optional[FeedbackRecord]:
        return self.sql_client.get_feedback_by_id(feedback_id)

    def update_feedback(self, feedback_id: str, updates: FeedbackUpdate) -> Optional[FeedbackRecord]:
        updated = self.sql_client.update_feedback(feedback_id, updates)
        if updated:
            logger.info(f"Feedback {feedback_id} updated: {updates.model_dump(exclude_none=True)}")
        return updated

    def delete_feedback(self, feedback_id: str) -> bool:
        deleted = self.sql_client.delete_feedback(feedback_id)
        if deleted:
            logger.info(f"Feedback {feedback_id} deleted")
        return deleted
