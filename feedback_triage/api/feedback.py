"""
Feedback API: submission with automatic analysis, listing, editing and deletion.
"""
from typing import Optional
import logging

from fastapi import APIRouter, Depends, HTTPException

from feedback_triage.api.dependencies import get_feedback_service
from feedback_triage.models.schemas import FeedbackSubmission, FeedbackUpdate
from feedback_triage.services.feedback_service import FeedbackService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["feedback"])


@router.post("/feedback", status_code=201)
def submit_feedback(
    submission: FeedbackSubmission,
    service: FeedbackService = Depends(get_feedback_service),
):
    """
    Submit new feedback. It is analyzed against recent history before it
    is stored.
    """
    try:
        record = service.submit(submission)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error submitting feedback: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to submit feedback")

    return {
        "success": True,
        "data": record,
        "message": "Feedback submitted successfully",
    }


@router.get("/feedback")
def list_feedback(
    sentiment: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    search: Optional[str] = None,
    service: FeedbackService = Depends(get_feedback_service),
):
    """List feedback, newest first, with optional filters."""
    try:
        records = service.list_feedback(
            sentiment=sentiment,
            status=status,
            priority=priority,
            search=search,
        )
    except Exception as e:
        logger.error(f"Error retrieving feedback: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to retrieve feedback")

    return {
        "success": True,
        "data": records,
        "count": len(records),
    }


@router.get("/feedback/{feedback_id}")
def get_feedback(
    feedback_id: str,
    service: FeedbackService = Depends(get_feedback_service),
):
    try:
        record = service.get_feedback(feedback_id)
    except Exception as e:
        logger.error(f"Error retrieving feedback {feedback_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to retrieve feedback")

    if record is None:
        raise HTTPException(status_code=404, detail="Feedback not found")

    return {"success": True, "data": record}


@router.put("/feedback/{feedback_id}")
def update_feedback(
    feedback_id: str,
    updates: FeedbackUpdate,
    service: FeedbackService = Depends(get_feedback_service),
):
    """
    Update status, priority or contact details. The stored analysis is
    left as it was at submission.
    """
    try:
        record = service.update_feedback(feedback_id, updates)
    except Exception as e:
        logger.error(f"Error updating feedback {feedback_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to update feedback")

    if record is None:
        raise HTTPException(status_code=404, detail="Feedback not found")

    return {
        "success": True,
        "data": record,
        "message": "Feedback updated successfully",
    }


@router.delete("/feedback/{feedback_id}")
def delete_feedback(
    feedback_id: str,
    service: FeedbackService = Depends(get_feedback_service),
):
    try:
        deleted = service.delete_feedback(feedback_id)
    except Exception as e:
        logger.error(f"Error deleting feedback {feedback_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to delete feedback")

    if not deleted:
        raise HTTPException(status_code=404, detail="Feedback not found")

    return {"success": True, "message": "Feedback deleted successfully"}
