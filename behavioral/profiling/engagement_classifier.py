"""
Engagement Classifier: labels a user's session behavior from recent sessions.

Keeps the most recent sessions per user (FIFO) for a bounded set of users
(LRU by touch). With enough sessions, ordered rules pick the first match:

    avg_duration > 1800s and avg_content > 10   -> binge_consumer (0.70)
    avg_duration < 600s  and avg_content < 5    -> casual_browser (0.70)
    seconds per content > 120                   -> deep_learner   (0.75)
    seconds per content < 30                    -> explorer       (0.65)
    otherwise                                   -> casual_browser (0.50)
"""

import logging
from collections import deque
from typing import Deque, Optional, Tuple

from ..models.config import BehavioralConfig, resolve_config
from ..models.events import SessionMetrics
from ..models.profile import BehavioralProfile, EngagementClassification, EngagementPattern
from ..utils.lru import BoundedLRU, StripedLock

logger = logging.getLogger(__name__)

BINGE_MIN_DURATION = 1800.0
BINGE_MIN_CONTENT = 10.0
CASUAL_MAX_DURATION = 600.0
CASUAL_MAX_CONTENT = 5.0
DEEP_MIN_SECONDS_PER_CONTENT = 120.0
EXPLORER_MAX_SECONDS_PER_CONTENT = 30.0

DIVERSITY_EXPLORER_RATIO = 0.6
DIVERSITY_SPECIALIST_RATIO = 0.3
DIVERSITY_SPECIALIST_MIN_CONSUMED = 10
DIVERSITY_MIN_CONFIDENCE = 0.6


def classify(avg_duration: float, avg_content: float) -> Tuple[EngagementClassification, float]:
    """Apply the ordered rule table to session averages."""
    time_per_content = avg_duration / max(avg_content, 1.0)
    if avg_duration > BINGE_MIN_DURATION and avg_content > BINGE_MIN_CONTENT:
        return EngagementClassification.BINGE_CONSUMER, 0.70
    if avg_duration < CASUAL_MAX_DURATION and avg_content < CASUAL_MAX_CONTENT:
        return EngagementClassification.CASUAL_BROWSER, 0.70
    if time_per_content > DEEP_MIN_SECONDS_PER_CONTENT:
        return EngagementClassification.DEEP_LEARNER, 0.75
    if time_per_content < EXPLORER_MAX_SECONDS_PER_CONTENT:
        return EngagementClassification.EXPLORER, 0.65
    return EngagementClassification.CASUAL_BROWSER, 0.50


class EngagementClassifier:
    def __init__(self, config: Optional[BehavioralConfig] = None):
        self.config = resolve_config(config)
        self._sessions: BoundedLRU[str, Deque[SessionMetrics]] = BoundedLRU(
            self.config.engagement_max_users
        )
        self._user_locks = StripedLock(self.config.lock_stripes)

    def _record(self, user_id: str, metrics: SessionMetrics) -> Tuple[SessionMetrics, ...]:
        max_sessions = self.config.engagement_max_sessions
        history = self._sessions.get_or_create(user_id, lambda: deque(maxlen=max_sessions))
        with self._user_locks.for_key(user_id):
            history.append(metrics)
            return tuple(history)

    def update_engagement(self, profile: BehavioralProfile, metrics: SessionMetrics) -> EngagementPattern:
        """Record a finished session and reclassify the profile's engagement."""
        sessions = self._record(profile.user_id, metrics)

        if len(sessions) < self.config.engagement_min_sessions:
            profile.engagement = EngagementPattern.unknown()
            return profile.engagement

        avg_duration = sum(s.duration for s in sessions) / len(sessions)
        avg_content = sum(s.content_count for s in sessions) / len(sessions)
        label, confidence = classify(avg_duration, avg_content)

        profile.engagement = EngagementPattern(
            classification=label,
            confidence=confidence,
            avg_session_duration=avg_duration,
            avg_content_per_session=avg_content,
            time_per_content_ratio=avg_duration / max(avg_content, 1.0),
            unique_topic_ratio=0.0,
        )
        logger.debug(
            "Engagement for %s: %s (%.2f) over %d sessions",
            profile.user_id, profile.engagement.classification, confidence, len(sessions),
        )
        return profile.engagement

    def update_based_on_topic_diversity(self, profile: BehavioralProfile, unique_topic_ratio: float) -> None:
        """Refine the label using topic diversity. No-op without an engagement pattern."""
        engagement = profile.engagement
        if engagement is None:
            return
        engagement.unique_topic_ratio = min(1.0, max(0.0, unique_topic_ratio))
        if unique_topic_ratio > DIVERSITY_EXPLORER_RATIO:
            engagement.classification = EngagementClassification.EXPLORER
            engagement.confidence = max(engagement.confidence, DIVERSITY_MIN_CONFIDENCE)
        elif (
            unique_topic_ratio < DIVERSITY_SPECIALIST_RATIO
            and profile.total_content_consumed > DIVERSITY_SPECIALIST_MIN_CONSUMED
        ):
            engagement.classification = EngagementClassification.SPECIALIST
            engagement.confidence = max(engagement.confidence, DIVERSITY_MIN_CONFIDENCE)

    def get_user_sessions(self, user_id: str) -> Tuple[SessionMetrics, ...]:
        history = self._sessions.peek(user_id)
        return tuple(history) if history else ()

    def tracked_users(self) -> int:
        return len(self._sessions)

    def clear(self) -> None:
        self._sessions.clear()
