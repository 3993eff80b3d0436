"""Data models for behavioral profiling and recommendation."""

from .config import DEFAULT_CONFIG, BehavioralConfig, resolve_config
from .content import (
    Content,
    ContentStatus,
    ContentType,
    SkillLevel,
    UserPreferences,
)
from .events import (
    SESSION_END,
    TOPIC_CONTENT_JOURNEY,
    TOPIC_SESSION_LIFECYCLE,
    EventEnvelope,
    RawJourneyEvent,
    SessionEndEvent,
    SessionMetrics,
    journey_event_from,
    parse_envelope,
    session_event_from,
)
from .profile import (
    BehavioralProfile,
    ContentTransition,
    EngagementClassification,
    EngagementPattern,
    InterestScore,
    PeakWindow,
)
from .scoring import FeedbackType, Recommendation, ScoredCandidate

__all__ = [
    "DEFAULT_CONFIG",
    "BehavioralConfig",
    "BehavioralProfile",
    "Content",
    "ContentStatus",
    "ContentTransition",
    "ContentType",
    "EngagementClassification",
    "EngagementPattern",
    "EventEnvelope",
    "FeedbackType",
    "InterestScore",
    "PeakWindow",
    "RawJourneyEvent",
    "Recommendation",
    "SESSION_END",
    "ScoredCandidate",
    "SessionEndEvent",
    "SessionMetrics",
    "SkillLevel",
    "TOPIC_CONTENT_JOURNEY",
    "TOPIC_SESSION_LIFECYCLE",
    "UserPreferences",
    "journey_event_from",
    "parse_envelope",
    "resolve_config",
    "session_event_from",
]
