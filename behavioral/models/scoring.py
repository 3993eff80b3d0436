"""
Scoring model: ScoredCandidate, Recommendation and score/time helpers.

Contains:
- ScoredCandidate: a content item with its composite score and reason
- Recommendation: a persisted, emitted recommendation
- FeedbackType: feedback a user can give on a recommendation
- days_since, clamp
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .content import Content

ALGORITHM_HYBRID = "HYBRID"


def days_since(when: datetime, now: Optional[datetime] = None) -> float:
    """Fractional days between when and now (UTC). Naive datetimes are treated as UTC."""
    now = now or datetime.now(timezone.utc)
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (now - when).total_seconds() / 86400.0


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


class FeedbackType(str, Enum):
    CLICKED = "clicked"
    DISMISSED = "dismissed"
    BOOKMARKED = "bookmarked"


class ScoredCandidate(BaseModel):
    """A candidate with its composite score (0-1)."""

    content: Content
    score: float
    reason: str = ""


class Recommendation(BaseModel):
    """A recommendation emitted to a user."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    content_id: str
    score: float
    reason: str = ""
    algorithm: str = ALGORITHM_HYBRID
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    shown_at: Optional[datetime] = None
    clicked_at: Optional[datetime] = None
    feedback: Optional[FeedbackType] = None
