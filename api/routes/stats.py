"""Adherence statistics routes"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from adapters.document_store import DocumentStore
from api.dependencies import get_clock, get_current_user_id, get_document_store
from app.clock import Clock
from domain.schemas.stats_schemas import HistorySummary, WeeklyOverview
from services.stats_service import StatsService

router = APIRouter(prefix="/stats", tags=["Stats"])


@router.get("/history", response_model=HistorySummary)
def get_history(
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
):
    return StatsService.history_summary(store, user_id)


@router.get("/weekly", response_model=WeeklyOverview)
def get_weekly(
    reference_date: Optional[date] = Query(
        None, description="Any date in the wanted week (defaults to today)"
    ),
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
    clock: Clock = Depends(get_clock),
):
    """Sunday-to-Saturday completion grid for the week containing reference_date"""
    return StatsService.weekly_overview(store, user_id, reference_date, clock)
