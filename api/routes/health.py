"""Health check routes"""

from fastapi import APIRouter, Request
import logging

router = APIRouter(tags=["Health"])
logger = logging.getLogger("supplement_tracker.api.health")


@router.get("/health-check")
def health_check(request: Request):
    """Basic health check endpoint, including which document store is active"""
    store = getattr(request.app.state, "document_store", None)
    scheduler = getattr(request.app.state, "rollover_scheduler", None)
    return {
        "status": "ok",
        "service": "SupplementTracker",
        "document_store": type(store).__name__ if store is not None else None,
        "tracked_users": len(scheduler.tracked_users) if scheduler is not None else 0,
    }
