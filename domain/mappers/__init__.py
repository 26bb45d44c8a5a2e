"""
Domain mappers package.
Handles transformation between ORM models, stored documents and DTOs.
"""

from domain.mappers.user_mapper import UserMapper
from domain.mappers.day_mapper import DayDataMapper

__all__ = ["UserMapper", "DayDataMapper"]
