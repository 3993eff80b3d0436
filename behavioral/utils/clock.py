"""
Time helpers: weekday names and day parts used by peak windows and session context.
"""

from datetime import datetime, timezone
from typing import Optional

WEEKDAYS = ("MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", "SATURDAY", "SUNDAY")
ALL_DAYS = "ALL"

MORNING = "morning"
AFTERNOON = "afternoon"
EVENING = "evening"
NIGHT = "night"


def ensure_utc(when: Optional[datetime] = None) -> datetime:
    """Return when as an aware UTC datetime (now if None). Naive values are taken as UTC."""
    if when is None:
        return datetime.now(timezone.utc)
    if when.tzinfo is None:
        return when.replace(tzinfo=timezone.utc)
    return when


def weekday_name(when: datetime) -> str:
    return WEEKDAYS[when.weekday()]


def day_part(hour: int) -> str:
    """6-12 morning, 12-18 afternoon, 18-22 evening, otherwise night."""
    if 6 <= hour < 12:
        return MORNING
    if 12 <= hour < 18:
        return AFTERNOON
    if 18 <= hour < 22:
        return EVENING
    return NIGHT


def whole_days_between(earlier: datetime, later: datetime) -> int:
    """Whole days elapsed, floored; never negative."""
    delta = ensure_utc(later) - ensure_utc(earlier)
    return max(0, delta.days)
