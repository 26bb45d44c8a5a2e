from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime

from domain.enums import RangeApplyStatus, TimeCategory
from domain.schemas.tracker_schemas import DayData


class TemplateEntry(BaseModel):
    """Instance-free shape of one supplement; extra fields are dropped on validation"""

    name: str = Field(..., min_length=1, max_length=200)
    dosage: str = ""
    time_category: TimeCategory


class DailyTemplate(BaseModel):
    """The user's saved daily template (one per user)"""

    user_id: str
    supplements: List[TemplateEntry] = Field(default_factory=list)
    updated_at: Optional[datetime] = None


class TemplateSaveRequest(BaseModel):
    supplements: List[TemplateEntry]


class OperationResult(BaseModel):
    """Outcome of a single template operation"""

    success: bool
    error: Optional[str] = None
    code: Optional[str] = None


class RangeApplyRequest(BaseModel):
    """Apply the template to every date in [start_date, end_date].

    displayed_start/displayed_end describe the window the caller is showing;
    it is re-read after the run.
    """

    start_date: date
    end_date: date
    displayed_start: Optional[date] = None
    displayed_end: Optional[date] = None


class RangeApplyResult(BaseModel):
    start_date: date
    end_date: date
    status: RangeApplyStatus
    success_count: int
    error_count: int
    attempted_dates: List[date]
    failed_dates: List[date] = Field(default_factory=list)
    message: str
    outside_displayed_window: bool = False


class RangeApplyResponse(RangeApplyResult):
    displayed_days: List[DayData] = Field(default_factory=list)
