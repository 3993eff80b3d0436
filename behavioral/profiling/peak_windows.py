"""
Peak Window Tracker: the (weekday, hour) slots where a user is most active.

Counts activity per user by weekday and hour, then keeps the top buckets on
the profile with score = count / max_count.

Counts live in memory. When a user has none yet (new process, or evicted from
the LRU), they are rebuilt from the profile's stored windows as pseudo-counts
of score * peak_window_seed_scale, so a reloaded profile keeps its ranking.
"""

from collections import Counter
from datetime import datetime
from typing import Optional

from ..models.config import BehavioralConfig, resolve_config
from ..models.profile import BehavioralProfile, PeakWindow
from ..utils.clock import ensure_utc, weekday_name
from ..utils.lru import BoundedLRU, StripedLock


class PeakWindowTracker:
    def __init__(self, config: Optional[BehavioralConfig] = None):
        self.config = resolve_config(config)
        self._counts: BoundedLRU[str, Counter] = BoundedLRU(self.config.peak_window_max_users)
        self._user_locks = StripedLock(self.config.lock_stripes)

    def record_activity(self, profile: BehavioralProfile, when: Optional[datetime] = None) -> None:
        when = ensure_utc(when)
        bucket = (weekday_name(when), when.hour)
        counts = self._counts.get_or_create(profile.user_id, lambda: self.seed_counts(profile))
        with self._user_locks.for_key(profile.user_id):
            counts[bucket] += 1
            top = counts.most_common(self.config.peak_window_limit)
        max_count = top[0][1] if top else 0
        profile.peak_windows = [
            PeakWindow(day=day, hour=hour, score=count / max_count)
            for (day, hour), count in top
        ]

    def seed_counts(self, profile: BehavioralProfile) -> Counter:
        scale = self.config.peak_window_seed_scale
        counts: Counter = Counter()
        for window in profile.peak_windows:
            counts[(window.day, window.hour)] = max(1, round(window.score * scale))
        return counts

    def clear(self) -> None:
        self._counts.clear()
