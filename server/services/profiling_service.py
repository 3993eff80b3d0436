"""
Profiling service: routes inbound behavioral events to the profiling components,
then saves and publishes the updated profile.

Events for one user are processed one at a time (striped asyncio locks keyed by
user id); different users proceed concurrently. Failures are logged and never
stop event processing.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Union

from behavioral.models import (
    SESSION_END,
    TOPIC_CONTENT_JOURNEY,
    TOPIC_SESSION_LIFECYCLE,
    BehavioralConfig,
    BehavioralProfile,
    EngagementClassification,
    RawJourneyEvent,
    SessionEndEvent,
    journey_event_from,
    parse_envelope,
    resolve_config,
    session_event_from,
)
from behavioral.profiling import EngagementClassifier, InterestScorer, JourneyAnalyzer, PeakWindowTracker

from .profile_store import ProfileCache, ProfileStore
from .publisher import LoggingProfilePublisher, ProfileUpdatePublisher

logger = logging.getLogger(__name__)


def _log(msg: str, *args) -> None:
    logger.info("[profiling] " + msg, *args)


class ProfilingService:
    def __init__(
        self,
        store: ProfileStore,
        publisher: Optional[ProfileUpdatePublisher] = None,
        config: Optional[BehavioralConfig] = None,
        cache: Optional[ProfileCache] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.config = resolve_config(config)
        self.store = store
        self.publisher = publisher or LoggingProfilePublisher()
        self.cache = cache or ProfileCache()
        self.interest_scorer = InterestScorer(self.config)
        self.journey_analyzer = JourneyAnalyzer(self.config)
        self.engagement_classifier = EngagementClassifier(self.config)
        self.peak_windows = PeakWindowTracker(self.config)
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._locks = [asyncio.Lock() for _ in range(max(1, self.config.lock_stripes))]

    def _lock_for(self, user_id: str) -> asyncio.Lock:
        return self._locks[hash(user_id) % len(self._locks)]

    async def handle_message(self, raw: Union[str, bytes, Dict[str, Any]]) -> bool:
        """
        Parse and process one bus message.

        Returns True when the event updated a profile, False when it was dropped
        or ignored (malformed, unknown topic, non-session_end lifecycle event) or
        when processing failed. Never raises.
        """
        try:
            return await self._dispatch(raw)
        except Exception:
            logger.exception("Failed to process event; skipping")
            return False

    async def _dispatch(self, raw: Union[str, bytes, Dict[str, Any]]) -> bool:
        envelope = parse_envelope(raw)
        if envelope is None:
            return False
        if envelope.topic == TOPIC_CONTENT_JOURNEY:
            event = journey_event_from(envelope)
            if event is None:
                return False
            await self.process_journey_event(event)
            return True
        if envelope.topic == TOPIC_SESSION_LIFECYCLE:
            event = session_event_from(envelope)
            if event is None:
                return False
            return await self.process_session_event(event)
        logger.warning("Unknown event topic %r for user %s; ignoring", envelope.topic, envelope.user_id)
        return False

    async def process_journey_event(self, event: RawJourneyEvent) -> BehavioralProfile:
        """Interests → journey → consumed count → save → publish."""
        async with self._lock_for(event.user_id):
            now = self._clock()
            occurred = event.occurred_at() or now
            profile = await self.get_or_create_profile(event.user_id)
            self.interest_scorer.update_interests(profile, event, now)
            self.journey_analyzer.analyze_journey(profile, event)
            profile.total_content_consumed += 1
            self.peak_windows.record_activity(profile, occurred)
            profile.timestamp = now
            await self._save_and_publish(profile)
            return profile

    async def process_session_event(self, event: SessionEndEvent) -> bool:
        """Engagement → session count → save → publish. Only session_end is processed."""
        if (event.event_type or "").lower() != SESSION_END:
            logger.debug("Ignoring session event %r for user %s", event.event_type, event.user_id)
            return False
        async with self._lock_for(event.user_id):
            now = self._clock()
            ended = event.ended_at() or now
            profile = await self.get_or_create_profile(event.user_id)
            engagement = self.engagement_classifier.update_engagement(profile, event.to_metrics())
            if engagement.classification != EngagementClassification.UNKNOWN:
                ratio = self._topic_diversity(profile)
                if ratio is not None:
                    self.engagement_classifier.update_based_on_topic_diversity(profile, ratio)
            profile.total_sessions += 1
            self.peak_windows.record_activity(profile, ended)
            profile.timestamp = now
            await self._save_and_publish(profile)
            return True

    def _topic_diversity(self, profile: BehavioralProfile) -> Optional[float]:
        if profile.total_content_consumed <= 0:
            return None
        topics = self.journey_analyzer.user_topics(profile.user_id)
        return min(1.0, len(topics) / max(profile.total_content_consumed, 1))

    async def get_or_create_profile(self, user_id: str) -> BehavioralProfile:
        """Cache, then store, then a new profile with unknown engagement."""
        profile = await self.get_profile(user_id)
        if profile is None:
            profile = BehavioralProfile.new(user_id)
            self.cache.put(profile)
            _log("Created profile for user %s", user_id)
        return profile

    async def get_profile(self, user_id: str) -> Optional[BehavioralProfile]:
        cached = self.cache.get(user_id)
        if cached is not None:
            return cached
        try:
            stored = await self.store.load_async(user_id)
        except Exception:
            logger.exception("Failed to load profile for user %s; starting fresh", user_id)
            return None
        if stored is not None:
            self.cache.put(stored)
        return stored

    async def _save_and_publish(self, profile: BehavioralProfile) -> None:
        self.cache.put(profile)
        try:
            await self.store.save_async(profile)
        except Exception:
            logger.exception("Failed to save profile for user %s; keeping in-memory state", profile.user_id)
        try:
            self.publisher.publish(profile)
        except Exception as e:
            logger.warning("Failed to publish profile update for user %s: %s", profile.user_id, e)

    def predict_next(self, content_id: str):
        return self.journey_analyzer.predict_next(content_id)
