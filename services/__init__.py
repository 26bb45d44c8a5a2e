"""Services package - Business logic layer"""

from services.template_service import TemplateService
from services.rollover_service import DayRolloverController, RolloverScheduler
from services.tracker_service import TrackerService
from services.library_service import LibraryService
from services.stats_service import StatsService
from services.auth_service import AuthService
from services.migration_service import MigrationService

__all__ = [
    "TemplateService",
    "DayRolloverController",
    "RolloverScheduler",
    "TrackerService",
    "LibraryService",
    "StatsService",
    "AuthService",
    "MigrationService",
]
