import json
import threading
import pymssql
from typing import List, Optional
from datetime import datetime, timezone
from feedback_triage.config.settings import Settings
from feedback_triage.models.schemas import FeedbackRecord, FeedbackUpdate, HistoryItem

FEEDBACK_COLUMNS = (
    "id, name, email, service_type, rating, feedback_text, status, "
    "sentiment, sentiment_score, tone, issue_type, priority, keywords, "
    "repeat_analysis, analyzed_at, created_at, updated_at"
)

# FeedbackUpdate field -> column
UPDATABLE_COLUMNS = {
    "status": "status",
    "priority": "priority",
    "name": "name",
    "email": "email",
    "service_type": "service_type",
    "rating": "rating",
}


class SQLClient:
    """SQL Server client for submitted feedback and its analysis."""

    def __init__(self, config: Settings):
        self.config = config
        self.table = config.feedback_table
        self.conn = None
        self._lock = threading.Lock()

    def connect(self) -> None:
        """Establish database connection."""
        self.conn = pymssql.connect(
            server=self.config.sql_server_host,
            port=self.config.sql_server_port,
            user=self.config.sql_server_username,
            password=self.config.sql_server_password,
            database=self.config.sql_server_database
        )

    def close(self) -> None:
        """Close database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None

    def _ensure_connected(self) -> None:
        # One connection per client, even when first used from several threads
        with self._lock:
            if not self.conn:
                self.connect()

    def initialize_schema(self) -> None:
        """Create the feedback table if it doesn't exist."""
        self._ensure_connected()

        schema_sql = f"""
            IF OBJECT_ID(N'{self.table}', N'U') IS NULL
            CREATE TABLE {self.table} (
                id VARCHAR(64) PRIMARY KEY,
                name NVARCHAR(255) NOT NULL,
                email NVARCHAR(255) NOT NULL,
                service_type NVARCHAR(100) NOT NULL,
                rating INT NOT NULL,
                feedback_text NVARCHAR(MAX) NOT NULL,
                status VARCHAR(32) NOT NULL,
                sentiment VARCHAR(16) NOT NULL,
                sentiment_score INT NOT NULL,
                tone VARCHAR(32) NOT NULL,
                issue_type VARCHAR(32) NOT NULL,
                priority VARCHAR(32) NOT NULL,
                keywords NVARCHAR(MAX),
                repeat_analysis NVARCHAR(MAX),
                analyzed_at DATETIMEOFFSET NOT NULL,
                created_at DATETIMEOFFSET NOT NULL,
                updated_at DATETIMEOFFSET NOT NULL
            );
        """

        with self.conn.cursor() as cursor:
            cursor.execute(schema_sql)
            self.conn.commit()

    def get_all_feedback(self) -> List[FeedbackRecord]:
        """
        Retrieve every stored feedback record.
        """
        self._ensure_connected()

        query = f"SELECT {FEEDBACK_COLUMNS} FROM {self.table}"

        with self.conn.cursor(as_dict=True) as cursor:
            cursor.execute(query)
            rows = cursor.fetchall()

            return [self._row_to_record(row) for row in rows]

    def get_history(self, since: Optional[datetime] = None) -> List[HistoryItem]:
        """
        Retrieve the fields repeat detection needs, optionally only for
        feedback created after ``since``.
        """
        self._ensure_connected()

        query = f"SELECT id, feedback_text, created_at, keywords FROM {self.table} WHERE 1=1"
        params = []

        if since:
            query += " AND created_at > %s"
            params.append(since)

        with self.conn.cursor(as_dict=True) as cursor:
            cursor.execute(query, tuple(params))
            rows = cursor.fetchall()

            return [
                HistoryItem(
                    id=row['id'],
                    feedback=row['feedback_text'],
                    created_at=row['created_at'],
                    keywords=json.loads(row['keywords'] or '[]')
                )
                for row in rows
            ]

    def get_feedback_by_id(self, feedback_id: str) -> Optional[FeedbackRecord]:
        """
        Retrieve a single feedback record, or None if it doesn't exist.
        """
        self._ensure_connected()

        query = f"SELECT {FEEDBACK_COLUMNS} FROM {self.table} WHERE id = %s"

        with self.conn.cursor(as_dict=True) as cursor:
            cursor.execute(query, (feedback_id,))
            row = cursor.fetchone()

            return self._row_to_record(row) if row else None

    def save_feedback(self, record: FeedbackRecord) -> FeedbackRecord:
        """
        Insert a new feedback record with its analysis.
        """
        self._ensure_connected()

        query = f"""
            INSERT INTO {self.table} ({FEEDBACK_COLUMNS})
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
        """

        keywords = json.dumps([k.model_dump() for k in record.keywords])
        repeat_analysis = record.repeat_analysis.model_dump_json()

        with self.conn.cursor() as cursor:
            cursor.execute(
                query,
                (record.id, record.name, record.email, record.service_type, record.rating,
                 record.feedback, record.status.value, record.sentiment.value,
                 record.sentiment_score, record.tone.value, record.issue_type.value,
                 record.priority.value, keywords, repeat_analysis, record.analyzed_at,
                 record.created_at, record.updated_at)
            )
            self.conn.commit()

        return record

    def update_feedback(
        self,
        feedback_id: str,
        updates: FeedbackUpdate,
        now: Optional[datetime] = None
    ) -> Optional[FeedbackRecord]:
        """
        Apply admin edits to a feedback record. The stored analysis is not
        recomputed.

        Returns:
            The updated record, or None if it doesn't exist
        """
        existing = self.get_feedback_by_id(feedback_id)
        if existing is None:
            return None

        changes = updates.model_dump(exclude_none=True)
        changes["updated_at"] = now or datetime.now(timezone.utc)

        assignments = []
        params = []
        for field, value in changes.items():
            column = UPDATABLE_COLUMNS.get(field, field)
            assignments.append(f"{column} = %s")
            params.append(value.value if hasattr(value, "value") else value)
        params.append(feedback_id)

        query = f"UPDATE {self.table} SET {', '.join(assignments)} WHERE id = %s"

        with self.conn.cursor() as cursor:
            cursor.execute(query, tuple(params))
            self.conn.commit()

        return existing.model_copy(update=changes)

    def delete_feedback(self, feedback_id: str) -> bool:
        """
        Delete a feedback record.

        Returns:
            True if a record was deleted, False if it doesn't exist
        """
        self._ensure_connected()

        query = f"DELETE FROM {self.table} WHERE id = %s"

        with self.conn.cursor() as cursor:
            cursor.execute(query, (feedback_id,))
            deleted = cursor.rowcount
            self.conn.commit()

        return deleted > 0

    @staticmethod
    def _row_to_record(row: dict) -> FeedbackRecord:
        return FeedbackRecord(
            id=row['id'],
            name=row['name'],
            email=row['email'],
            service_type=row['service_type'],
            rating=row['rating'],
            feedback=row['feedback_text'],
            status=row['status'],
            sentiment=row['sentiment'],
            sentiment_score=row['sentiment_score'],
            tone=row['tone'],
            issue_type=row['issue_type'],
            priority=row['priority'],
            keywords=json.loads(row['keywords'] or '[]'),
            repeat_analysis=json.loads(row['repeat_analysis'] or '{}'),
            analyzed_at=row['analyzed_at'],
            created_at=row['created_at'],
            updated_at=row['updated_at']
        )
