from datetime import date
import logging
import uuid

from adapters.document_store import DocumentStore
from app.clock import Clock, system_clock
from app.exceptions import NotFoundError
from domain.schemas.tracker_schemas import (
    DayData,
    Supplement,
    SupplementCreate,
    SupplementFromLibraryCreate,
)
from repositories import DailyDataRepository
from services.library_service import LibraryService

logger = logging.getLogger("supplement_tracker.tracker")


class TrackerService:
    @staticmethod
    def get_day(store: DocumentStore, user_id: str, day: date) -> DayData:
        return DailyDataRepository(store).read(user_id, day)

    @staticmethod
    def _append(
        store: DocumentStore, user_id: str, day: date, supplement: Supplement
    ) -> DayData:
        repo = DailyDataRepository(store)
        day_data = repo.read(user_id, day)
        supplements = day_data.supplements + [supplement]
        repo.write(user_id, day, supplements)
        logger.info(f"Added '{supplement.name}' to {day} for user {user_id}")
        return DayData(date=day, supplements=supplements)

    @staticmethod
    def add_supplement(
        store: DocumentStore,
        user_id: str,
        day: date,
        payload: SupplementCreate,
        clock: Clock = system_clock,
    ) -> DayData:
        supplement = Supplement(
            id=uuid.uuid4().hex,
            name=payload.name,
            dosage=payload.dosage,
            time_category=payload.time_category,
            taken_at=clock.now(),
            completed=False,
        )
        return TrackerService._append(store, user_id, day, supplement)

    @staticmethod
    def add_from_library(
        store: DocumentStore,
        user_id: str,
        day: date,
        payload: SupplementFromLibraryCreate,
        clock: Clock = system_clock,
    ) -> DayData:
        """
        Add a supplement built from a library item's name and default dosage.

        Raises:
            NotFoundError: If the library item does not exist
        """
        item = LibraryService.get_item(store, user_id, payload.library_item_id)
        supplement = Supplement(
            id=uuid.uuid4().hex,
            name=item.name,
            dosage=item.default_dosage,
            time_category=payload.time_category,
            taken_at=clock.now(),
            completed=False,
        )
        return TrackerService._append(store, user_id, day, supplement)

    @staticmethod
    def toggle_supplement(
        store: DocumentStore, user_id: str, day: date, supplement_id: str
    ) -> DayData:
        """
        Flip the completed flag of one supplement.

        Raises:
            NotFoundError: If no supplement with that id is tracked on the day
        """
        repo = DailyDataRepository(store)
        day_data = repo.read(user_id, day)

        found = False
        supplements = []
        for s in day_data.supplements:
            if s.id == supplement_id:
                s = s.model_copy(update={"completed": not s.completed})
                found = True
            supplements.append(s)
        if not found:
            raise NotFoundError(f"Supplement {supplement_id} not found on {day}")

        repo.write(user_id, day, supplements)
        return DayData(date=day, supplements=supplements)

    @staticmethod
    def remove_supplement(
        store: DocumentStore, user_id: str, day: date, supplement_id: str
    ) -> DayData:
        repo = DailyDataRepository(store)
        day_data = repo.read(user_id, day)
        supplements = [s for s in day_data.supplements if s.id != supplement_id]
        if len(supplements) == len(day_data.supplements):
            raise NotFoundError(f"Supplement {supplement_id} not found on {day}")

        repo.write(user_id, day, supplements)
        logger.info(f"Removed supplement {supplement_id} from {day} for user {user_id}")
        return DayData(date=day, supplements=supplements)

    @staticmethod
    def clear_day(store: DocumentStore, user_id: str, day: date) -> bool:
        return DailyDataRepository(store).delete(user_id, day)
