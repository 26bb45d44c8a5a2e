from pydantic import BaseModel, Field
from typing import List
from datetime import date

from domain.enums import TimeCategory
from domain.schemas.tracker_schemas import DayData


class CategoryCompletion(BaseModel):
    time_category: TimeCategory
    total: int
    completed: int
    all_done: bool


class DayCompletion(BaseModel):
    """Adherence for a single day"""

    date: date
    total: int
    completed: int
    completion_percent: int
    is_today: bool = False
    by_category: List[CategoryCompletion] = Field(default_factory=list)


class HistorySummary(BaseModel):
    """All tracked days (newest first) with aggregate adherence"""

    days: List[DayData]
    days_tracked: int
    total_supplements: int
    total_completed: int
    average_daily_supplements: int
    completion_rate: int


class WeeklyOverview(BaseModel):
    """Sunday-to-Saturday adherence grid"""

    week_start: date
    week_end: date
    is_current_week: bool
    completion_percent: int
    days: List[DayCompletion]
