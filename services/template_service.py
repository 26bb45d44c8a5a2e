from datetime import date, timedelta
from typing import Iterable, List, Optional
import logging
import uuid

from adapters.document_store import DocumentStore
from app.clock import Clock, system_clock
from app.config import settings
from app.exceptions import ServiceValidationError, StorageError
from domain.enums import RangeApplyStatus
from domain.schemas.template_schemas import (
    DailyTemplate,
    OperationResult,
    RangeApplyResult,
)
from domain.schemas.tracker_schemas import DayData, Supplement
from repositories import DailyDataRepository, TemplateRepository
from repositories.template_repository import TemplateSource

logger = logging.getLogger("supplement_tracker.templates")

NO_TEMPLATE = "NO_TEMPLATE"
STORAGE_ERROR = "STORAGE_ERROR"


class TemplateService:
    @staticmethod
    def get_template(store: DocumentStore, user_id: str) -> Optional[DailyTemplate]:
        return TemplateRepository(store).get(user_id)

    @staticmethod
    def save_template(
        store: DocumentStore,
        user_id: str,
        supplements: Iterable[TemplateSource],
        clock: Clock = system_clock,
    ) -> OperationResult:
        """
        Save a list of supplements as the user's daily template.

        Only name, dosage and time_category are kept; any existing template is
        overwritten.

        Raises:
            ServiceValidationError: If the list is empty
        """
        supplements = list(supplements)
        if not supplements:
            raise ServiceValidationError(
                "Cannot save an empty template", code="EMPTY_TEMPLATE"
            )

        try:
            TemplateRepository(store).save(user_id, supplements, updated_at=clock.now())
        except StorageError as exc:
            logger.error(f"Saving template for user {user_id} failed: {exc}")
            return OperationResult(
                success=False, error="Failed to save template", code=STORAGE_ERROR
            )

        logger.info(
            f"Saved daily template for user {user_id} ({len(supplements)} entries)"
        )
        return OperationResult(success=True)

    @staticmethod
    def save_from_day(
        store: DocumentStore, user_id: str, day: date, clock: Clock = system_clock
    ) -> OperationResult:
        """Save the supplements tracked on `day` as the template"""
        try:
            day_data = DailyDataRepository(store).read(user_id, day)
        except StorageError as exc:
            logger.error(f"Reading {day} for user {user_id} failed: {exc}")
            return OperationResult(
                success=False, error="Failed to save template", code=STORAGE_ERROR
            )
        return TemplateService.save_template(store, user_id, day_data.supplements, clock)

    @staticmethod
    def delete_template(store: DocumentStore, user_id: str) -> bool:
        return TemplateRepository(store).delete(user_id)

    @staticmethod
    def build_supplements(template: DailyTemplate, clock: Clock = system_clock) -> List[Supplement]:
        """Materialize template entries as new, unchecked supplements"""
        now = clock.now()
        return [
            Supplement(
                id=uuid.uuid4().hex,
                name=entry.name,
                dosage=entry.dosage,
                time_category=entry.time_category,
                taken_at=now,
                completed=False,
            )
            for entry in template.supplements
        ]

    @staticmethod
    def apply_to_date(
        store: DocumentStore,
        user_id: str,
        target_date: date,
        clock: Clock = system_clock,
    ) -> OperationResult:
        """
        Replace the supplements on target_date with a fresh copy of the template.

        Anything already tracked for that date is overwritten, not merged.
        Storage failures are logged and reported in the result, never raised.
        """
        try:
            template = TemplateRepository(store).get(user_id)
            if template is None or not template.supplements:
                return OperationResult(
                    success=False, error="No daily template saved", code=NO_TEMPLATE
                )

            supplements = TemplateService.build_supplements(template, clock)
            DailyDataRepository(store).write(user_id, target_date, supplements)
        except StorageError as exc:
            logger.error(
                f"Applying template to {target_date} for user {user_id} failed: {exc}"
            )
            return OperationResult(
                success=False, error="Failed to apply template", code=STORAGE_ERROR
            )

        logger.debug(f"Applied template to {target_date} for user {user_id}")
        return OperationResult(success=True)

    @staticmethod
    def validate_range(start: date, end: date, max_days: int) -> int:
        """
        Check a range before any write and return its inclusive length in days.

        Raises:
            ServiceValidationError: If end is before start or the span is too long
        """
        if end < start:
            raise ServiceValidationError(
                "End date must be on or after the start date", code="INVALID_RANGE"
            )
        span = (end - start).days + 1
        if span > max_days:
            raise ServiceValidationError(
                f"Date range cannot exceed {max_days} days (got {span})",
                code="RANGE_TOO_LONG",
            )
        return span

    @staticmethod
    def enumerate_dates(start: date, end: date) -> List[date]:
        return [start + timedelta(days=i) for i in range((end - start).days + 1)]

    @staticmethod
    def apply_to_range(
        store: DocumentStore,
        user_id: str,
        start: date,
        end: date,
        clock: Clock = system_clock,
        max_days: Optional[int] = None,
        displayed_start: Optional[date] = None,
        displayed_end: Optional[date] = None,
    ) -> RangeApplyResult:
        """
        Apply the template to every date in [start, end], one date at a time.

        A failed date does not stop the run; every date is attempted and the
        successes and failures are counted.

        Args:
            store: Document store
            user_id: Owner of the template and days
            start: First date (inclusive)
            end: Last date (inclusive)
            clock: Time source for taken_at stamps
            max_days: Largest accepted span (defaults to settings)
            displayed_start: First date of the caller's visible window
            displayed_end: Last date of the caller's visible window

        Returns:
            RangeApplyResult with counts, the attempted dates in order, and
            whether any applied date lies outside the visible window

        Raises:
            ServiceValidationError: If the range is reversed or too long
        """
        max_days = max_days or settings.template_range_max_days
        TemplateService.validate_range(start, end, max_days)

        attempted: List[date] = []
        failed: List[date] = []
        failure_codes = set()
        for day in TemplateService.enumerate_dates(start, end):
            attempted.append(day)
            result = TemplateService.apply_to_date(store, user_id, day, clock)
            if not result.success:
                failed.append(day)
                failure_codes.add(result.code)

        error_count = len(failed)
        success_count = len(attempted) - error_count

        if error_count == 0:
            status = RangeApplyStatus.SUCCESS
            message = f"Template applied to {success_count} day(s)"
        elif success_count == 0:
            status = RangeApplyStatus.FAILED
            if failure_codes == {NO_TEMPLATE}:
                message = "No daily template saved"
            else:
                message = f"Failed to apply template to all {error_count} day(s)"
        else:
            status = RangeApplyStatus.PARTIAL
            message = (
                f"Template applied to {success_count} of {len(attempted)} day(s); "
                f"{error_count} failed"
            )

        outside_window = False
        if displayed_start is not None and displayed_end is not None:
            applied = [d for d in attempted if d not in failed]
            outside_window = any(
                d < displayed_start or d > displayed_end for d in applied
            )

        logger.info(
            f"Range apply {start}..{end} for user {user_id}: "
            f"success={success_count} errors={error_count}"
        )
        return RangeApplyResult(
            start_date=start,
            end_date=end,
            status=status,
            success_count=success_count,
            error_count=error_count,
            attempted_dates=attempted,
            failed_dates=failed,
            message=message,
            outside_displayed_window=outside_window,
        )

    @staticmethod
    def reload_window(
        store: DocumentStore, user_id: str, start: date, end: date
    ) -> List[DayData]:
        """
        Re-read the caller's visible window after a bulk run.

        Returns an empty list (and logs) when the store cannot be read, so the
        bulk result still reaches the caller.
        """
        try:
            return DailyDataRepository(store).list_range(user_id, start, end)
        except StorageError as exc:
            logger.error(f"Reloading {start}..{end} for user {user_id} failed: {exc}")
            return []
