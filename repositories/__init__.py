"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository, DocumentRepository
from repositories.user_repository import UserRepository, AuthSessionRepository
from repositories.day_data_repository import DailyDataRepository
from repositories.template_repository import TemplateRepository
from repositories.library_repository import SupplementLibraryRepository

__all__ = [
    "BaseRepository",
    "DocumentRepository",
    "UserRepository",
    "AuthSessionRepository",
    "DailyDataRepository",
    "TemplateRepository",
    "SupplementLibraryRepository",
]
