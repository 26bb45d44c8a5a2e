"""
Template Repository - one saved daily template per user
"""

from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, Union

from pydantic import BaseModel

from repositories.base import DocumentRepository
from domain.schemas.template_schemas import DailyTemplate, TemplateEntry

TemplateSource = Union[BaseModel, Mapping[str, Any]]


def to_template_entry(source: TemplateSource) -> TemplateEntry:
    """Keep only name, dosage and time_category from a supplement-like value"""
    data = source.model_dump() if isinstance(source, BaseModel) else dict(source)
    return TemplateEntry(
        name=data["name"],
        dosage=data.get("dosage") or "",
        time_category=data["time_category"],
    )


class TemplateRepository(DocumentRepository):
    """Repository for daily_templates documents keyed by user_id"""

    collection = "daily_templates"

    def get(self, user_id: str) -> Optional[DailyTemplate]:
        doc = self.store.get(self.collection, user_id)
        if doc is None:
            return None
        return DailyTemplate.model_validate(doc)

    def save(
        self,
        user_id: str,
        supplements: Iterable[TemplateSource],
        updated_at: Optional[datetime] = None,
    ) -> DailyTemplate:
        """
        Overwrite the user's template.

        Per-instance fields (id, completed, taken_at) are stripped before
        persisting.
        """
        template = DailyTemplate(
            user_id=user_id,
            supplements=[to_template_entry(s) for s in supplements],
            updated_at=updated_at,
        )
        self.store.put(self.collection, user_id, template.model_dump(mode="json"))
        return template

    def delete(self, user_id: str) -> bool:
        return self.store.delete(self.collection, user_id)
