"""
Daily Data Repository - per-user, per-date supplement intake records
"""

from datetime import date, timedelta
from typing import Iterable, List

from repositories.base import DocumentRepository
from domain.mappers import DayDataMapper
from domain.schemas.tracker_schemas import DayData, Supplement


class DailyDataRepository(DocumentRepository):
    """Repository for DayData documents keyed by (user_id, date)"""

    collection = "daily_data"

    def read(self, user_id: str, day: date) -> DayData:
        """
        Get the day's record, or an empty DayData when none exists.

        Raises:
            StorageError: If the store cannot be read
        """
        doc = self.store.get(self.collection, DayDataMapper.document_key(user_id, day))
        if doc is None:
            return DayData(date=day, supplements=[])
        return DayDataMapper.from_document(doc)

    def write(self, user_id: str, day: date, supplements: Iterable[Supplement]) -> None:
        """
        Replace the whole supplement list for the day (no merge).

        Raises:
            StorageError: If the store cannot be written
        """
        self.store.put(
            self.collection,
            DayDataMapper.document_key(user_id, day),
            DayDataMapper.to_document(user_id, day, supplements),
        )

    def delete(self, user_id: str, day: date) -> bool:
        return self.store.delete(
            self.collection, DayDataMapper.document_key(user_id, day)
        )

    def list_for_user(self, user_id: str) -> List[DayData]:
        """All stored days for a user, oldest first"""
        docs = self.store.find(self.collection, {"user_id": user_id})
        days = [DayDataMapper.from_document(d) for d in docs if d.get("date")]
        return sorted(days, key=lambda d: d.date)

    def list_range(self, user_id: str, start: date, end: date) -> List[DayData]:
        """Every date in [start, end], filling missing days with empty records"""
        stored = {
            d.date: d
            for d in self.list_for_user(user_id)
            if start <= d.date <= end
        }
        days = []
        current = start
        while current <= end:
            days.append(stored.get(current) or DayData(date=current, supplements=[]))
            current += timedelta(days=1)
        return days

    def has_any(self, user_id: str) -> bool:
        return bool(self.store.find(self.collection, {"user_id": user_id}))
