"""
Domain schemas package - Pydantic models for documents and API payloads.
"""

from domain.schemas.tracker_schemas import (
    Supplement,
    DayData,
    SupplementCreate,
    SupplementFromLibraryCreate,
)
from domain.schemas.library_schemas import (
    SupplementLibraryItem,
    LibraryItemCreate,
    LibraryItemUpdate,
)
from domain.schemas.template_schemas import (
    TemplateEntry,
    DailyTemplate,
    TemplateSaveRequest,
    OperationResult,
    RangeApplyRequest,
    RangeApplyResult,
    RangeApplyResponse,
)
from domain.schemas.stats_schemas import (
    CategoryCompletion,
    DayCompletion,
    HistorySummary,
    WeeklyOverview,
)
from domain.schemas.auth_schemas import (
    RegisterRequest,
    LoginRequest,
    UserResponse,
    SessionResponse,
)
from domain.schemas.migration_schemas import MigrationResult

__all__ = [
    "Supplement",
    "DayData",
    "SupplementCreate",
    "SupplementFromLibraryCreate",
    "SupplementLibraryItem",
    "LibraryItemCreate",
    "LibraryItemUpdate",
    "TemplateEntry",
    "DailyTemplate",
    "TemplateSaveRequest",
    "OperationResult",
    "RangeApplyRequest",
    "RangeApplyResult",
    "RangeApplyResponse",
    "CategoryCompletion",
    "DayCompletion",
    "HistorySummary",
    "WeeklyOverview",
    "RegisterRequest",
    "LoginRequest",
    "UserResponse",
    "SessionResponse",
    "MigrationResult",
]
