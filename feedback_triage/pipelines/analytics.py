"""
Analytics over stored feedback: dashboard distributions and daily sentiment trends.
Can be run from the command line to print a report.
"""

from typing import List, Optional
from datetime import datetime, timedelta, timezone
import logging
import argparse

import pandas as pd

from feedback_triage.config.settings import Settings
from feedback_triage.data_access.sql_client import SQLClient
from feedback_triage.models.schemas import (
    AnalyticsSummary,
    FeedbackRecord,
    FeedbackStatus,
    Keyword,
    Priority,
    Sentiment,
    Tone,
    TrendPoint,
)


logger = logging.getLogger(__name__)

TOP_KEYWORDS = 20


def _to_frame(records: List[FeedbackRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "sentiment": r.sentiment.value,
                "tone": r.tone.value,
                "priority": r.priority.value,
                "status": r.status.value,
                "issue_type": r.issue_type.value,
                "rating": r.rating,
                "created_at": r.created_at,
            }
            for r in records
        ],
        columns=["sentiment", "tone", "priority", "status", "issue_type", "rating", "created_at"],
    )


def _distribution(df: pd.DataFrame, column: str, labels: Optional[List[str]] = None) -> dict:
    counts = df[column].value_counts().to_dict()
    if labels is None:
        return {label: int(count) for label, count in counts.items()}
    distribution = {label: 0 for label in labels}
    for label, count in counts.items():
        distribution[label] = int(count)
    return distribution


def summarize(records: List[FeedbackRecord], top: int = TOP_KEYWORDS) -> AnalyticsSummary:
    """
    Aggregate feedback for the dashboard.

    Args:
        records: Stored feedback records
        top: Number of keywords to report

    Returns:
        Totals, average rating, per-label distributions and top keywords
    """
    df = _to_frame(records)

    keyword_rows = [(k.word, k.count) for r in records for k in r.keywords]
    keywords = pd.DataFrame(keyword_rows, columns=["word", "count"])
    top_keywords = (
        keywords.groupby("word", sort=False)["count"].sum()
        .sort_values(ascending=False, kind="stable")
        .head(top)
    )

    average_rating = round(float(df["rating"].mean()), 2) if len(df) > 0 else 0.0

    return AnalyticsSummary(
        total=len(df),
        average_rating=average_rating,
        sentiment_distribution=_distribution(df, "sentiment", [s.value for s in Sentiment]),
        tone_distribution=_distribution(df, "tone", [t.value for t in Tone]),
        priority_distribution=_distribution(
            df, "priority", [p.value for p in sorted(Priority, key=lambda p: p.rank, reverse=True)]
        ),
        status_distribution=_distribution(df, "status", [s.value for s in FeedbackStatus]),
        issue_type_distribution=_distribution(df, "issue_type"),
        top_keywords=[Keyword(word=word, count=int(count)) for word, count in top_keywords.items()],
    )


def trends(records: List[FeedbackRecord], days: int = 30, now: Optional[datetime] = None) -> List[TrendPoint]:
    """
    Daily feedback volume and sentiment mix, oldest day first.

    Args:
        records: Stored feedback records
        days: Number of calendar days (UTC) to report, ending today
        now: Reference time (defaults to the current UTC time)

    Returns:
        One TrendPoint per day, including days without feedback
    """
    now = now or datetime.now(timezone.utc)
    dates = [(now - timedelta(days=offset)).date() for offset in range(days - 1, -1, -1)]

    df = _to_frame(records)
    if len(df) > 0:
        df["date"] = pd.to_datetime(df["created_at"], utc=True).dt.date
        counts = pd.crosstab(df["date"], df["sentiment"])
    else:
        counts = pd.DataFrame()

    points = []
    for day in dates:
        row = counts.loc[day] if day in counts.index else {}
        by_sentiment = {s.value: int(row.get(s.value, 0)) for s in Sentiment}
        points.append(TrendPoint(
            date=day.isoformat(),
            total=sum(by_sentiment.values()),
            **by_sentiment,
        ))
    return points


class AnalyticsPipeline:
    """Loads stored feedback and computes dashboard analytics."""

    def __init__(self, config: Settings):
        self.config = config
        self.sql_client = SQLClient(config)

    def run(self, days: int = 30, top: int = TOP_KEYWORDS) -> dict:
        """
        Execute the analytics pipeline.

        Args:
            days: Number of days of trend data
            top: Number of keywords to report

        Returns:
            Dictionary with the summary and the trend points
        """
        try:
            self.sql_client.connect()

            logger.info("Fetching feedback records from SQL database")
            records = self.sql_client.get_all_feedback()
            logger.info(f"Found {len(records)} feedback records")

            return {
                "summary": summarize(records, top=top),
                "trends": trends(records, days=days),
            }

        finally:
            self.sql_client.close()


def main():
    """Main entry point for printing an analytics report."""
    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    parser = argparse.ArgumentParser(
        description='Print feedback triage analytics: distributions, top keywords and daily trends.'
    )
    parser.add_argument(
        '--days',
        type=int,
        default=30,
        help='Number of days of trend data (default: 30)'
    )
    parser.add_argument(
        '--top',
        type=int,
        default=TOP_KEYWORDS,
        help='Number of top keywords to show'
    )
    args = parser.parse_args()

    if args.days < 1:
        parser.error("--days must be at least 1")

    config = Settings()
    logging.getLogger().setLevel(config.log_level.upper())

    results = AnalyticsPipeline(config).run(days=args.days, top=args.top)
    summary = results["summary"]

    print("\n" + "="*60)
    print("FEEDBACK ANALYTICS")
    print("="*60)
    print(f"Total feedback: {summary.total}")
    print(f"Average rating: {summary.average_rating:.2f}")
    print(f"Sentiment: {summary.sentiment_distribution}")
    print(f"Tone: {summary.tone_distribution}")
    print(f"Priority: {summary.priority_distribution}")
    print(f"Status: {summary.status_distribution}")
    print(f"Issue types: {summary.issue_type_distribution}")
    print("Top keywords: " + ", ".join(f"{k.word} ({k.count})" for k in summary.top_keywords))
    print("-"*60)
    for point in results["trends"]:
        if point.total:
            print(f"{point.date}: {point.total} total "
                  f"(+{point.positive} / ={point.neutral} / -{point.negative})")
    print("="*60)


if __name__ == "__main__":
    main()
