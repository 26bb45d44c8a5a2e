"""
Day rollover detection.

A DayRolloverController remembers the date a user's "today" view was built
for. Each check compares it with the clock; when the calendar day has moved
on, the controller applies the saved template to the new day or, without one,
starts the day per the carry-forward policy. The RolloverScheduler owns one
controller per active user and drives them from a background loop.
"""

from datetime import date
from typing import Dict, List, Optional
import logging
import threading

import anyio

from adapters.document_store import DocumentStore
from app.clock import Clock, system_clock
from app.config import settings
from app.exceptions import StorageError
from domain.enums import RolloverOutcome
from domain.schemas.tracker_schemas import DayData, Supplement
from repositories import DailyDataRepository
from services.template_service import NO_TEMPLATE, TemplateService

logger = logging.getLogger("supplement_tracker.rollover")


class DayRolloverController:
    """Per-user day state machine; state is current_date."""

    def __init__(
        self,
        store: DocumentStore,
        user_id: str,
        clock: Clock = system_clock,
        carry_forward: Optional[bool] = None,
        current_date: Optional[date] = None,
    ):
        self.store = store
        self.user_id = user_id
        self.clock = clock
        self.carry_forward = (
            settings.rollover_carry_forward if carry_forward is None else carry_forward
        )
        self.current_date = current_date
        self.supplements: List[Supplement] = []
        self.transitions = 0
        self._lock = threading.Lock()

    def check_day(self) -> RolloverOutcome:
        """
        Compare the remembered date with today and transition if it changed.

        The compare-and-swap runs under a lock so concurrent ticks fire a
        given change once. An unchanged day touches no store.
        """
        today = self.clock.today()
        with self._lock:
            if today == self.current_date:
                return RolloverOutcome.UNCHANGED
            previous, self.current_date = self.current_date, today
            self.transitions += 1

        if previous is None:
            outcome = self._load(today)
        else:
            logger.info(f"Day changed for user {self.user_id}: {previous} -> {today}")
            outcome = self._transition(previous, today)

        if outcome == RolloverOutcome.FAILED:
            # let the next tick retry this change
            with self._lock:
                if self.current_date == today:
                    self.current_date = previous
        return outcome

    def refresh(self) -> DayData:
        """Re-read the current day from the store into the displayed list"""
        day = self.current_date or self.clock.today()
        day_data = DailyDataRepository(self.store).read(self.user_id, day)
        self.supplements = day_data.supplements
        return day_data

    def _load(self, today: date) -> RolloverOutcome:
        try:
            self.supplements = (
                DailyDataRepository(self.store).read(self.user_id, today).supplements
            )
        except StorageError as exc:
            logger.error(f"Loading {today} for user {self.user_id} failed: {exc}")
            return RolloverOutcome.FAILED
        return RolloverOutcome.INITIALIZED

    def _transition(self, previous: date, today: date) -> RolloverOutcome:
        repo = DailyDataRepository(self.store)

        result = TemplateService.apply_to_date(
            self.store, self.user_id, today, self.clock
        )
        if result.success:
            try:
                self.supplements = repo.read(self.user_id, today).supplements
            except StorageError as exc:
                logger.error(f"Re-reading {today} for user {self.user_id} failed: {exc}")
            return RolloverOutcome.TEMPLATE_APPLIED
        if result.code != NO_TEMPLATE:
            logger.warning(
                f"Template apply on rollover failed for user {self.user_id}; "
                "falling back to the no-template policy"
            )

        try:
            if self.carry_forward:
                carried = [
                    s.model_copy(update={"completed": False})
                    for s in repo.read(self.user_id, previous).supplements
                ]
                repo.write(self.user_id, today, carried)
                self.supplements = carried
                return RolloverOutcome.CARRIED_FORWARD

            self.supplements = repo.read(self.user_id, today).supplements
            return RolloverOutcome.FRESH_DAY
        except StorageError as exc:
            logger.error(f"Rollover to {today} for user {self.user_id} failed: {exc}")
            return RolloverOutcome.FAILED


class RolloverScheduler:
    """Registry of per-user controllers plus the periodic check loop."""

    def __init__(
        self,
        store: DocumentStore,
        clock: Clock = system_clock,
        interval_sec: Optional[float] = None,
        carry_forward: Optional[bool] = None,
    ):
        self.store = store
        self.clock = clock
        self.interval_sec = interval_sec or settings.rollover_check_interval_sec
        self.carry_forward = carry_forward
        self._controllers: Dict[str, DayRolloverController] = {}
        self._lock = threading.Lock()

    @property
    def tracked_users(self) -> List[str]:
        with self._lock:
            return list(self._controllers)

    def get(self, user_id: str) -> Optional[DayRolloverController]:
        with self._lock:
            return self._controllers.get(user_id)

    def track(self, user_id: str) -> DayRolloverController:
        """Return the user's controller, creating it if needed, after a day check"""
        with self._lock:
            controller = self._controllers.get(user_id)
            if controller is None:
                controller = DayRolloverController(
                    self.store, user_id, self.clock, carry_forward=self.carry_forward
                )
                self._controllers[user_id] = controller
                logger.debug(f"Tracking day rollover for user {user_id}")
        controller.check_day()
        return controller

    def untrack(self, user_id: str) -> bool:
        with self._lock:
            return self._controllers.pop(user_id, None) is not None

    def check_all(self) -> Dict[str, RolloverOutcome]:
        outcomes = {}
        for user_id in self.tracked_users:
            controller = self.get(user_id)
            if controller is None:
                continue
            try:
                outcomes[user_id] = controller.check_day()
            except Exception:
                logger.exception(f"Rollover check crashed for user {user_id}")
                outcomes[user_id] = RolloverOutcome.FAILED
        return outcomes

    async def run(self) -> None:
        """Check every tracked user now and then every interval until cancelled"""
        logger.info(f"Rollover loop started (interval={self.interval_sec}s)")
        try:
            while True:
                await anyio.to_thread.run_sync(self.check_all)
                await anyio.sleep(self.interval_sec)
        finally:
            logger.info("Rollover loop stopped")
