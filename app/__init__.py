"""
App package - Application configuration and core utilities.
Contains settings, exceptions, the clock, and foundational application code.
"""

from app.config import settings
from app.clock import Clock, system_clock
from app.exceptions import (
    AppError,
    ServiceValidationError,
    NotFoundError,
    ConflictError,
    UnauthorizedError,
    StorageError,
)

__all__ = [
    "settings",
    "Clock",
    "system_clock",
    "AppError",
    "ServiceValidationError",
    "NotFoundError",
    "ConflictError",
    "UnauthorizedError",
    "StorageError",
]
