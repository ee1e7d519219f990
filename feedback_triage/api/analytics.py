"""
Analytics API for the admin dashboard.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from feedback_triage.api.dependencies import get_feedback_service
from feedback_triage.pipelines.analytics import summarize, trends
from feedback_triage.services.feedback_service import FeedbackService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analytics"])


@router.get("/analytics")
def get_analytics(service: FeedbackService = Depends(get_feedback_service)):
    """Distributions of sentiment, tone, priority, status and issue type, plus top keywords."""
    try:
        summary = summarize(service.list_feedback())
    except Exception as e:
        logger.error(f"Analytics failed: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to compute analytics")

    return {"success": True, "data": summary}


@router.get("/analytics/trends")
def get_trends(
    days: int = Query(30, ge=1, le=365),
    service: FeedbackService = Depends(get_feedback_service),
):
    """Daily feedback counts by sentiment for the last ``days`` days."""
    try:
        points = trends(service.list_feedback(), days=days)
    except Exception as e:
        logger.error(f"Trend analysis failed: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to compute trends")

    return {"success": True, "data": points}
