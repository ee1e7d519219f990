"""
Query triaged feedback with various filters.

Usage:
    python read_feedback.py --priority "High Impact" --limit 50
    python read_feedback.py --issue-type Bug --repeats-only
    python read_feedback.py --sentiment negative --start-date 2024-03-01 --export negative.csv
"""

import os
import json
import argparse
import pymssql
import pandas as pd
from dotenv import load_dotenv

load_dotenv()


def get_connection():
    """Create SQL Server connection."""
    return pymssql.connect(
        server=os.getenv("SQL_SERVER_HOST"),
        port=int(os.getenv("SQL_SERVER_PORT", 1433)),
        database=os.getenv("SQL_SERVER_DATABASE"),
        user=os.getenv("SQL_SERVER_USERNAME"),
        password=os.getenv("SQL_SERVER_PASSWORD"),
    )


def get_feedback(
    conn,
    priority=None,
    sentiment=None,
    issue_type=None,
    status=None,
    start_date=None,
    end_date=None,
    limit=1000,
):
    """Query feedback with filters."""
    table = os.getenv("FEEDBACK_TABLE", "customer_insights.feedback_triage")
    query = f"""
        SELECT
            id, name, email, service_type, rating, feedback_text, status,
            sentiment, sentiment_score, tone, issue_type, priority,
            keywords, repeat_analysis, created_at
        FROM {table}
        WHERE 1=1
    """
    params = []

    if priority:
        query += " AND priority = %s"
        params.append(priority)

    if sentiment:
        query += " AND sentiment = %s"
        params.append(sentiment)

    if issue_type:
        query += " AND issue_type = %s"
        params.append(issue_type)

    if status:
        query += " AND status = %s"
        params.append(status)

    if start_date:
        query += " AND created_at >= %s"
        params.append(start_date)

    if end_date:
        query += " AND created_at <= %s"
        params.append(end_date)

    if limit:
        query = f"SELECT TOP {limit} * FROM ({query}) AS subquery ORDER BY created_at DESC"

    return pd.read_sql(query, conn, params=params if params else None)


def add_repeat_columns(df):
    """Unpack the stored repeat analysis into flat columns."""
    analysis = df["repeat_analysis"].fillna("{}").map(json.loads)
    df["repeat_count"] = analysis.map(lambda a: a.get("repeat_count", 0))
    df["repeat_confidence"] = analysis.map(lambda a: a.get("confidence", 0.0))
    return df


def main():
    parser = argparse.ArgumentParser(description="Query triaged feedback")
    parser.add_argument("--priority", help="Filter by priority (Low Impact/Medium Impact/High Impact)")
    parser.add_argument("--sentiment", help="Filter by sentiment (positive/neutral/negative)")
    parser.add_argument("--issue-type", help="Filter by issue type")
    parser.add_argument("--status", help="Filter by status")
    parser.add_argument("--start-date", help="Filter by start date (YYYY-MM-DD)")
    parser.add_argument("--end-date", help="Filter by end date (YYYY-MM-DD)")
    parser.add_argument("--limit", type=int, default=100, help="Max records to return")
    parser.add_argument("--repeats-only", action="store_true", help="Only show repeat issues")
    parser.add_argument("--export", help="Export to CSV file")
    args = parser.parse_args()

    conn = get_connection()

    print("Fetching feedback...")
    df = get_feedback(
        conn,
        priority=args.priority,
        sentiment=args.sentiment,
        issue_type=args.issue_type,
        status=args.status,
        start_date=args.start_date,
        end_date=args.end_date,
        limit=args.limit,
    )
    df = add_repeat_columns(df)

    if args.repeats_only:
        df = df[df["repeat_count"] > 0]

    print(f"\nFound {len(df)} feedback records\n")
    print("=" * 80)

    # Summary
    if len(df) > 0:
        print(f"Priority: {df['priority'].value_counts().to_dict()}")
        print(f"Issue types: {df['issue_type'].value_counts().to_dict()}")
        print(f"Date range: {df['created_at'].min()} to {df['created_at'].max()}")
        if df["rating"].notna().any():
            print(f"Avg rating: {df['rating'].mean():.2f}")
        print("=" * 80)

        # Show sample records
        print("\nSample Feedback:\n")
        for _, row in df.head(10).iterrows():
            print(f"[{row['priority']} / {row['tone']}] {row['feedback_text'][:100]}...")
            if row["repeat_count"]:
                print(f"  Repeats: {row['repeat_count']} (confidence {row['repeat_confidence']:.2f})")
            print()

    # Export if requested
    if args.export:
        df.to_csv(args.export, index=False)
        print(f"\nExported to {args.export}")

    conn.close()


if __name__ == "__main__":
    main()
