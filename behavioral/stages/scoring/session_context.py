"""
Session context scoring: fit between an item and the moment it would be shown.

session = w_time*time_score + w_energy*energy_score + w_pattern*pattern_score

time_score:    score of a peak window on this day (or ALL) within +-1 hour, else day-part default
energy_score:  closeness of duration (minutes) to energy_level * 30, floored at 0.2
pattern_score: 1.0 when now falls in one of the user's peak windows, else 0.6
"""

from datetime import datetime
from typing import Optional

from ...models.config import BehavioralConfig, DEFAULT_CONFIG
from ...models.content import Content
from ...models.profile import BehavioralProfile
from ...utils.clock import AFTERNOON, ALL_DAYS, EVENING, MORNING, day_part, ensure_utc, weekday_name

DEFAULT_TIME_SCORES = {MORNING: 0.7, AFTERNOON: 0.9, EVENING: 1.0}
ENERGY_LEVELS = {MORNING: 0.9, AFTERNOON: 0.8, EVENING: 0.6}
NIGHT_TIME_SCORE = 0.5
NIGHT_ENERGY = 0.3
MAX_OPTIMAL_MINUTES = 30.0

SESSION_REASONS = {
    MORNING: "Good for morning learning",
    AFTERNOON: "Great for afternoon sessions",
    EVENING: "Perfect for evening learning",
}
NIGHT_REASON = "Quick content for late night"


def default_time_score(hour: int) -> float:
    return DEFAULT_TIME_SCORES.get(day_part(hour), NIGHT_TIME_SCORE)


def energy_level(hour: int) -> float:
    return ENERGY_LEVELS.get(day_part(hour), NIGHT_ENERGY)


def time_score(profile: Optional[BehavioralProfile], now: datetime) -> float:
    if profile is None:
        return default_time_score(now.hour)
    day = weekday_name(now)
    for window in profile.peak_windows:
        day_matches = window.day.upper() == day or window.day.upper() == ALL_DAYS
        if day_matches and abs(window.hour - now.hour) <= 1:
            return window.score
    return default_time_score(now.hour)


def energy_score(content: Content, now: datetime) -> float:
    duration = content.estimated_duration_minutes
    if duration is None:
        return 0.8
    optimal = energy_level(now.hour) * MAX_OPTIMAL_MINUTES
    return max(0.2, 1.0 - abs(duration - optimal) / MAX_OPTIMAL_MINUTES)


def pattern_score(profile: Optional[BehavioralProfile], now: datetime) -> float:
    if profile is None or profile.engagement is None:
        return 0.5
    day = weekday_name(now)
    in_peak = any(
        w.day.upper() == day and abs(w.hour - now.hour) <= 1
        for w in profile.peak_windows
    )
    return 1.0 if in_peak else 0.6


def session_context_score(
    content: Content,
    profile: Optional[BehavioralProfile] = None,
    now: Optional[datetime] = None,
    config: BehavioralConfig = DEFAULT_CONFIG,
) -> float:
    now = ensure_utc(now)
    return (
        config.weight_session_time * time_score(profile, now)
        + config.weight_session_energy * energy_score(content, now)
        + config.weight_session_pattern * pattern_score(profile, now)
    )


def session_reason(now: Optional[datetime] = None) -> str:
    """Human-readable explanation of the current session context."""
    return SESSION_REASONS.get(day_part(ensure_utc(now).hour), NIGHT_REASON)
