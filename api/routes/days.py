"""Daily supplement tracking routes"""

from datetime import date

from fastapi import APIRouter, Depends, status
import logging

from adapters.document_store import DocumentStore
from api.dependencies import (
    get_clock,
    get_current_user_id,
    get_document_store,
    get_rollover_scheduler,
)
from app.clock import Clock
from domain.schemas.tracker_schemas import (
    DayData,
    SupplementCreate,
    SupplementFromLibraryCreate,
)
from services.rollover_service import RolloverScheduler
from services.tracker_service import TrackerService

router = APIRouter(prefix="/days", tags=["Days"])
logger = logging.getLogger("supplement_tracker.api.days")


@router.get("/today", response_model=DayData)
def get_today(
    user_id: str = Depends(get_current_user_id),
    scheduler: RolloverScheduler = Depends(get_rollover_scheduler),
):
    """
    Today's supplements.

    The first call registers the user with the rollover loop; every call
    checks the date first, so a day change since the last view is handled
    (template applied, or a fresh day started) before the list is returned.
    """
    controller = scheduler.track(user_id)
    return controller.refresh()


@router.get("/{day}", response_model=DayData)
def get_day(
    day: date,
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
):
    return TrackerService.get_day(store, user_id, day)


@router.post(
    "/{day}/supplements", response_model=DayData, status_code=status.HTTP_201_CREATED
)
def add_supplement(
    day: date,
    payload: SupplementCreate,
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
    clock: Clock = Depends(get_clock),
):
    return TrackerService.add_supplement(store, user_id, day, payload, clock)


@router.post(
    "/{day}/supplements/from-library",
    response_model=DayData,
    status_code=status.HTTP_201_CREATED,
)
def add_supplement_from_library(
    day: date,
    payload: SupplementFromLibraryCreate,
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
    clock: Clock = Depends(get_clock),
):
    """Add a library item (name and default dosage) to the day"""
    return TrackerService.add_from_library(store, user_id, day, payload, clock)


@router.patch("/{day}/supplements/{supplement_id}/toggle", response_model=DayData)
def toggle_supplement(
    day: date,
    supplement_id: str,
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
):
    return TrackerService.toggle_supplement(store, user_id, day, supplement_id)


@router.delete("/{day}/supplements/{supplement_id}", response_model=DayData)
def remove_supplement(
    day: date,
    supplement_id: str,
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
):
    return TrackerService.remove_supplement(store, user_id, day, supplement_id)


@router.delete("/{day}")
def clear_day(
    day: date,
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
):
    cleared = TrackerService.clear_day(store, user_id, day)
    return {"status": "ok", "date": day.isoformat(), "cleared": cleared}
