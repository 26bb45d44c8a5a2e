"""Daily template routes"""

from datetime import date

from fastapi import APIRouter, Depends
import logging

from adapters.document_store import DocumentStore
from api.dependencies import (
    get_clock,
    get_current_user_id,
    get_document_store,
    get_rollover_scheduler,
)
from app.clock import Clock
from app.config import settings
from app.exceptions import NotFoundError, StorageError
from domain.schemas.template_schemas import (
    DailyTemplate,
    OperationResult,
    RangeApplyRequest,
    RangeApplyResponse,
    TemplateSaveRequest,
)
from services.rollover_service import RolloverScheduler
from services.template_service import NO_TEMPLATE, TemplateService

router = APIRouter(prefix="/templates", tags=["Templates"])
logger = logging.getLogger("supplement_tracker.api.templates")


def _raise_for_result(result: OperationResult) -> OperationResult:
    if result.success:
        return result
    if result.code == NO_TEMPLATE:
        raise NotFoundError(result.error, code=NO_TEMPLATE)
    raise StorageError(result.error, code=result.code)


def _refresh_today(scheduler: RolloverScheduler, user_id: str) -> None:
    """Re-read the tracked today list after a write that may have touched it"""
    controller = scheduler.get(user_id)
    if controller is None:
        return
    try:
        controller.refresh()
    except StorageError as exc:
        logger.warning(f"Refreshing today for user {user_id} failed: {exc}")


@router.get("", response_model=DailyTemplate)
def get_template(
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
):
    template = TemplateService.get_template(store, user_id)
    if template is None:
        raise NotFoundError("No daily template saved", code=NO_TEMPLATE)
    return template


@router.put("", response_model=OperationResult)
def save_template(
    payload: TemplateSaveRequest,
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
    clock: Clock = Depends(get_clock),
):
    """Overwrite the template with the given entries (must not be empty)"""
    result = TemplateService.save_template(store, user_id, payload.supplements, clock)
    return _raise_for_result(result)


@router.post("/from-day/{day}", response_model=OperationResult)
def save_template_from_day(
    day: date,
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
    clock: Clock = Depends(get_clock),
):
    """Save the supplements tracked on a day as the template"""
    result = TemplateService.save_from_day(store, user_id, day, clock)
    return _raise_for_result(result)


@router.delete("")
def delete_template(
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
):
    deleted = TemplateService.delete_template(store, user_id)
    return {"status": "ok", "deleted": deleted}


@router.post("/apply/{day}", response_model=OperationResult)
def apply_template(
    day: date,
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
    scheduler: RolloverScheduler = Depends(get_rollover_scheduler),
    clock: Clock = Depends(get_clock),
):
    """Replace the day's supplements with a fresh copy of the template"""
    result = TemplateService.apply_to_date(store, user_id, day, clock)
    _raise_for_result(result)
    _refresh_today(scheduler, user_id)
    return result


@router.post("/apply-range", response_model=RangeApplyResponse)
def apply_template_range(
    payload: RangeApplyRequest,
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_document_store),
    scheduler: RolloverScheduler = Depends(get_rollover_scheduler),
    clock: Clock = Depends(get_clock),
):
    """
    Apply the template to every date from start_date to end_date inclusive.

    The range is validated before anything is written:
    - 400 INVALID_RANGE: end_date before start_date
    - 400 RANGE_TOO_LONG: more than 90 days

    Dates are applied one at a time and a failing date does not stop the
    run; the response carries success and error counts with status
    success, partial or failed. When displayed_start and displayed_end are
    given, that window is re-read and returned as displayed_days, and
    outside_displayed_window tells whether any applied date fell outside it.
    """
    result = TemplateService.apply_to_range(
        store,
        user_id,
        payload.start_date,
        payload.end_date,
        clock,
        max_days=settings.template_range_max_days,
        displayed_start=payload.displayed_start,
        displayed_end=payload.displayed_end,
    )

    displayed_days = []
    if payload.displayed_start is not None and payload.displayed_end is not None:
        displayed_days = TemplateService.reload_window(
            store, user_id, payload.displayed_start, payload.displayed_end
        )
    _refresh_today(scheduler, user_id)

    return RangeApplyResponse(**result.model_dump(), displayed_days=displayed_days)
