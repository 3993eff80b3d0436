"""
Behavioral profile model: per-user state derived from the event stream.

Contains:
- BehavioralProfile: interests, engagement pattern, peak windows, common paths, counters
- InterestScore, EngagementPattern, PeakWindow, ContentTransition
- EngagementClassification: labels produced by the engagement classifier
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EngagementClassification(str, Enum):
    UNKNOWN = "unknown"
    BINGE_CONSUMER = "binge_consumer"
    CASUAL_BROWSER = "casual_browser"
    DEEP_LEARNER = "deep_learner"
    EXPLORER = "explorer"
    SPECIALIST = "specialist"


class InterestScore(BaseModel):
    """Decaying interest in one topic."""

    topic: str
    score: float = Field(ge=0.0)
    last_updated: datetime = Field(default_factory=utc_now)


class EngagementPattern(BaseModel):
    """How a user engages per session, with a confidence for the label."""

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)

    classification: EngagementClassification = EngagementClassification.UNKNOWN
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    avg_session_duration: float = 0.0
    avg_content_per_session: float = 0.0
    time_per_content_ratio: float = 0.0
    unique_topic_ratio: float = Field(default=0.0, ge=0.0, le=1.0)

    @classmethod
    def unknown(cls) -> "EngagementPattern":
        return cls()


class PeakWindow(BaseModel):
    """A (day, hour) slot where the user is most active. day is a weekday name or ALL."""

    day: str = "ALL"
    hour: int = Field(ge=0, le=23)
    score: float = Field(ge=0.0, le=1.0)


class ContentTransition(BaseModel):
    """An observed from -> to content step with its global frequency."""

    from_content: str
    to_content: str
    frequency: int
    probability: float


class BehavioralProfile(BaseModel):
    """A user's behavioral profile. Mutated only by the profiling components."""

    user_id: str
    timestamp: datetime = Field(default_factory=utc_now)
    interests: Dict[str, InterestScore] = Field(default_factory=dict)
    engagement: Optional[EngagementPattern] = None
    peak_windows: List[PeakWindow] = Field(default_factory=list)
    common_paths: List[ContentTransition] = Field(default_factory=list)
    total_sessions: int = 0
    total_content_consumed: int = 0

    @classmethod
    def new(cls, user_id: str) -> "BehavioralProfile":
        """Fresh profile with an unknown engagement pattern."""
        return cls(user_id=user_id, engagement=EngagementPattern.unknown())

    @property
    def classification(self) -> Optional[str]:
        if self.engagement is None:
            return None
        return self.engagement.classification

    def snapshot(self) -> "BehavioralProfile":
        """Deep copy for read-only use by scoring and ranking."""
        return self.model_copy(deep=True)
