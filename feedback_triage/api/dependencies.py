from typing import Iterator

from fastapi import Request

from feedback_triage.services.feedback_service import FeedbackService


def get_feedback_service(request: Request) -> Iterator[FeedbackService]:
    """
    FeedbackService for one request.

    Each request gets its own SQL connection, closed once the response is
    sent. A service passed to create_app is shared instead.
    """
    shared = request.app.state.feedback_service
    if shared is not None:
        yield shared
        return

    service = FeedbackService(request.app.state.config)
    try:
        yield service
    finally:
        service.sql_client.close()
