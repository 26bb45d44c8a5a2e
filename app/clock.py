"""
Wall-clock access for the tracker.

Day boundaries come from the user's local calendar. Services take a Clock
instead of calling datetime directly so tests can move "today" forward.
"""

from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from app.config import settings


class Clock:
    """Returns the current calendar date and timestamp, optionally in a fixed zone."""

    def __init__(self, tz_name: Optional[str] = None):
        self.tz = ZoneInfo(tz_name) if tz_name else None

    def now(self) -> datetime:
        if self.tz is None:
            return datetime.now().astimezone()
        return datetime.now(self.tz)

    def today(self) -> date:
        return self.now().date()


system_clock = Clock(settings.timezone)
