"""Shared utilities: bounded LRU state, striped locks, and time helpers."""

from .clock import (
    ALL_DAYS,
    WEEKDAYS,
    day_part,
    ensure_utc,
    weekday_name,
    whole_days_between,
)
from .lru import BoundedLRU, StripedLock

__all__ = [
    "ALL_DAYS",
    "WEEKDAYS",
    "BoundedLRU",
    "StripedLock",
    "day_part",
    "ensure_utc",
    "weekday_name",
    "whole_days_between",
]
