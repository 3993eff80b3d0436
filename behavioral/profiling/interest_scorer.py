"""
Interest Model: per-topic interest with EMA smoothing and half-life decay.

For each topic tag on a journey event:
    added = base_value * action_multiplier(action) * min(seconds / 60, max_time_weight)
    existing topic: score = score * (1 - alpha) + added * alpha
    new topic:      score = added
Then every interest on the profile decays by 0.5 ** (whole_days / half_life)
and interests below the removal threshold are dropped.
"""

import logging
from datetime import datetime
from typing import Optional

from ..models.config import BehavioralConfig, resolve_config
from ..models.events import RawJourneyEvent
from ..models.profile import BehavioralProfile, InterestScore
from ..utils.clock import ensure_utc, whole_days_between

logger = logging.getLogger(__name__)


class InterestScorer:
    def __init__(self, config: Optional[BehavioralConfig] = None):
        self.config = resolve_config(config)

    def action_multiplier(self, action: Optional[str]) -> float:
        """Case-insensitive multiplier; unknown or missing actions count as 1.0."""
        if not action:
            return 1.0
        return self.config.action_multipliers.get(action.lower(), 1.0)

    def time_weight(self, seconds: Optional[float]) -> float:
        return min((seconds or 0.0) / 60.0, self.config.interest_max_time_weight)

    def added_score(self, event: RawJourneyEvent) -> float:
        return (
            self.config.interest_base_value
            * self.action_multiplier(event.action)
            * self.time_weight(event.time_in_content_seconds)
        )

    def decay_factor(self, days: float) -> float:
        return 0.5 ** (days / self.config.interest_half_life_days)

    def update_interests(
        self,
        profile: BehavioralProfile,
        event: RawJourneyEvent,
        now: Optional[datetime] = None,
    ) -> None:
        """Apply one journey event to profile.interests in place."""
        if not event.topic_tags:
            return
        now = ensure_utc(now)
        added = self.added_score(event)
        alpha = self.config.interest_ema_alpha

        for topic in event.topic_tags:
            existing = profile.interests.get(topic)
            if existing is not None:
                existing.score = existing.score * (1 - alpha) + added * alpha
                existing.last_updated = now
            else:
                profile.interests[topic] = InterestScore(topic=topic, score=added, last_updated=now)

        self.apply_decay(profile, now)

    def apply_decay(self, profile: BehavioralProfile, now: Optional[datetime] = None) -> None:
        """Decay every interest by elapsed whole days and prune those below threshold."""
        now = ensure_utc(now)
        threshold = self.config.interest_removal_threshold
        for topic in list(profile.interests):
            interest = profile.interests[topic]
            days = whole_days_between(interest.last_updated, now)
            if days:
                interest.score *= self.decay_factor(days)
            if interest.score < threshold:
                del profile.interests[topic]
                logger.debug("Pruned interest %s for user %s", topic, profile.user_id)
