"""API routes package"""

from . import auth, days, health, library, stats, templates

__all__ = ["auth", "days", "health", "library", "stats", "templates"]
