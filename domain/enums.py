"""
Domain enums for the supplement tracker.
"""

import enum


class TimeCategory(str, enum.Enum):
    """Time-of-day slot a supplement is taken in"""

    MORNING = "Morning (Wake + Breakfast)"
    MIDDAY = "Midday (Lunch + Afternoon)"
    PRE_WORKOUT = "Pre-Workout (Workout days)"
    EVENING = "Evening (Dinner)"
    BEFORE_BED = "Before Bed"


class RolloverOutcome(str, enum.Enum):
    """What a day check did"""

    UNCHANGED = "unchanged"
    INITIALIZED = "initialized"
    TEMPLATE_APPLIED = "template_applied"
    FRESH_DAY = "fresh_day"
    CARRIED_FORWARD = "carried_forward"
    FAILED = "failed"


class RangeApplyStatus(str, enum.Enum):
    """Aggregate result of applying a template over a date range"""

    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"
