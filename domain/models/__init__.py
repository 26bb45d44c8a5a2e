"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    build_engine,
    init_database,
    get_db_session,
)
from domain.models.user import AppUser, AuthSession

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "build_engine",
    "init_database",
    "get_db_session",
    # User models
    "AppUser",
    "AuthSession",
]
