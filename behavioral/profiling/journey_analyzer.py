"""
Journey Model: a catalog-wide Markov transition table plus per-user topic diversity.

The transition table counts previous -> current content steps across all users.
Each source row is guarded by a striped lock keyed by source id.
Sources and per-user topic sets live in bounded LRU maps.

common_paths runs after every transition, so it reads only the sources indexed
as having at least one destination at or above common_paths_min_frequency,
not the whole table.
"""

import logging
import threading
from collections import Counter
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Tuple

from ..models.config import BehavioralConfig, resolve_config
from ..models.events import RawJourneyEvent
from ..models.profile import BehavioralProfile, ContentTransition
from ..utils.lru import BoundedLRU, StripedLock

logger = logging.getLogger(__name__)


class JourneyAnalyzer:
    def __init__(self, config: Optional[BehavioralConfig] = None):
        self.config = resolve_config(config)
        self._transitions: BoundedLRU[str, Counter] = BoundedLRU(self.config.max_transition_sources)
        self._user_topics: BoundedLRU[str, set] = BoundedLRU(self.config.max_tracked_users)
        self._source_locks = StripedLock(self.config.lock_stripes)
        self._user_locks = StripedLock(self.config.lock_stripes)
        # Insertion-ordered; common_paths ties follow the order sources became frequent
        self._frequent_sources: Dict[str, None] = {}
        self._frequent_lock = threading.Lock()

    def analyze_journey(self, profile: BehavioralProfile, event: RawJourneyEvent) -> None:
        """Track topic diversity and the previous -> current transition for one event."""
        self._track_topics(profile, event)
        if event.previous_content_id and event.content_id:
            self.record_transition(event.previous_content_id, event.content_id)
            profile.common_paths = self.common_paths()

    def _track_topics(self, profile: BehavioralProfile, event: RawJourneyEvent) -> None:
        user_id = profile.user_id
        with self._user_locks.for_key(user_id):
            topics = self._user_topics.get_or_create(user_id, set)
            topics.update(event.topic_tags)
            unique = len(topics)
        consumed = profile.total_content_consumed
        if consumed > 0 and profile.engagement is not None:
            profile.engagement.unique_topic_ratio = min(1.0, unique / max(consumed, 1))

    def record_transition(self, from_content: str, to_content: str) -> None:
        with self._source_locks.for_key(from_content):
            row = self._transitions.get_or_create(from_content, Counter)
            row[to_content] += 1
            frequent = row[to_content] >= self.config.common_paths_min_frequency
        if frequent:
            with self._frequent_lock:
                self._frequent_sources.setdefault(from_content, None)

    def common_paths(self) -> List[ContentTransition]:
        """All transitions with frequency >= floor, sorted by frequency desc, capped."""
        paths: List[ContentTransition] = []
        min_freq = self.config.common_paths_min_frequency
        for source in self.frequent_sources():
            row = self._transitions.peek(source)
            if row is None:
                continue
            with self._source_locks.for_key(source):
                counts = list(row.items())
            total = sum(freq for _, freq in counts)
            for dest, freq in counts:
                if freq >= min_freq:
                    paths.append(
                        ContentTransition(
                            from_content=source,
                            to_content=dest,
                            frequency=freq,
                            probability=freq / total if total else 0.0,
                        )
                    )
        paths.sort(key=lambda t: t.frequency, reverse=True)
        return paths[: self.config.common_paths_limit]

    def predict_next(self, content_id: str, limit: Optional[int] = None) -> List[str]:
        """Most frequent destinations after content_id. Empty for unknown sources."""
        limit = limit if limit is not None else self.config.predict_next_limit
        row = self._transitions.peek(content_id)
        if not row:
            return []
        with self._source_locks.for_key(content_id):
            ranked = row.most_common()
        floor = self.config.predict_min_frequency
        return [dest for dest, freq in ranked if freq >= floor][:limit]

    def unique_topic_ratio(self, profile: BehavioralProfile) -> float:
        if profile.engagement is None:
            return 0.0
        return profile.engagement.unique_topic_ratio

    def transition_matrix(self) -> Mapping[str, Mapping[str, int]]:
        """Read-only snapshot of the transition table."""
        snapshot: Dict[str, Mapping[str, int]] = {}
        for source, row in self._transitions.items():
            with self._source_locks.for_key(source):
                snapshot[source] = MappingProxyType(dict(row))
        return MappingProxyType(snapshot)

    def user_topics(self, user_id: str) -> FrozenSet[str]:
        topics = self._user_topics.peek(user_id)
        if topics is None:
            return frozenset()
        with self._user_locks.for_key(user_id):
            return frozenset(topics)

    def transition_count(self, from_content: str, to_content: str) -> int:
        row = self._transitions.peek(from_content)
        return row[to_content] if row else 0

    def tracked_sources(self) -> Tuple[str, ...]:
        return tuple(self._transitions)

    def frequent_sources(self) -> Tuple[str, ...]:
        """Sources with a destination at or above the common-path floor. Drops evicted sources."""
        with self._frequent_lock:
            evicted = [s for s in self._frequent_sources if s not in self._transitions]
            for source in evicted:
                del self._frequent_sources[source]
            return tuple(self._frequent_sources)

    def clear(self) -> None:
        self._transitions.clear()
        self._user_topics.clear()
        with self._frequent_lock:
            self._frequent_sources.clear()
