from pydantic import BaseModel, Field, field_validator
from typing import List
from datetime import date, datetime

from domain.enums import TimeCategory


class Supplement(BaseModel):
    """One supplement entry within a day"""

    id: str
    name: str
    dosage: str = ""
    time_category: TimeCategory
    taken_at: datetime
    completed: bool = False

    model_config = {"from_attributes": True}


class DayData(BaseModel):
    """Supplements tracked for one user on one calendar date"""

    date: date
    supplements: List[Supplement] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class SupplementCreate(BaseModel):
    """Schema for adding a supplement to a day by hand"""

    name: str = Field(..., min_length=1, max_length=200)
    dosage: str = Field(default="", max_length=100)
    time_category: TimeCategory

    @field_validator("name", "dosage")
    def strip_text(cls, v):
        return v.strip()


class SupplementFromLibraryCreate(BaseModel):
    """Schema for adding a library item to a day"""

    library_item_id: str
    time_category: TimeCategory
