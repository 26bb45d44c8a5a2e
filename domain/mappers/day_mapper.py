"""
Day data mappers.
Handles transformation between stored documents and DayData DTOs.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, List

from pydantic import ValidationError

from domain.schemas.tracker_schemas import DayData, Supplement

logger = logging.getLogger("supplement_tracker.mappers.day")


class DayDataMapper:
    """Mapper for daily_data documents."""

    @staticmethod
    def document_key(user_id: str, day: date) -> str:
        return f"{user_id}_{day.isoformat()}"

    @staticmethod
    def to_document(
        user_id: str, day: date, supplements: Iterable[Supplement]
    ) -> Dict[str, Any]:
        return {
            "user_id": user_id,
            "date": day.isoformat(),
            "supplements": [s.model_dump(mode="json") for s in supplements],
        }

    @staticmethod
    def parse_supplements(raw: Iterable[Dict[str, Any]]) -> List[Supplement]:
        """
        Parse stored supplement entries.

        Entries written by older clients may lack taken_at or carry a
        non-boolean completed flag; both are normalized. Entries that still
        fail validation are skipped with a warning.
        """
        supplements = []
        for entry in raw or []:
            data = dict(entry)
            if not data.get("taken_at"):
                data["taken_at"] = datetime.now().astimezone()
            data["completed"] = bool(data.get("completed"))
            try:
                supplements.append(Supplement.model_validate(data))
            except ValidationError as exc:
                logger.warning(f"Skipping invalid stored supplement {entry!r}: {exc}")
        return supplements

    @staticmethod
    def from_document(doc: Dict[str, Any]) -> DayData:
        """
        Convert a daily_data document to DayData.

        Args:
            doc: Stored document with date and supplements

        Returns:
            DayData DTO
        """
        return DayData(
            date=date.fromisoformat(doc["date"]),
            supplements=DayDataMapper.parse_supplements(doc.get("supplements")),
        )
