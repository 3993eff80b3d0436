"""
Recommendation service: loads profile + catalog data, runs the orchestrator,
persists the result, and caches it per user until feedback arrives.
"""

import logging
from typing import Awaitable, Callable, List, Optional, Tuple

import numpy as np

from behavioral.errors import NoContentAvailableError
from behavioral.models import (
    BehavioralConfig,
    BehavioralProfile,
    Content,
    FeedbackType,
    Recommendation,
    resolve_config,
)
from behavioral.stages import create_recommendations
from behavioral.utils import BoundedLRU

from .catalog import ContentCatalog
from .recommendation_store import RecommendationStore

logger = logging.getLogger(__name__)

ProfileLoader = Callable[[str], Awaitable[Optional[BehavioralProfile]]]


def _log(msg: str, *args) -> None:
    logger.info("[recommendations] " + msg, *args)


class RecommendationService:
    def __init__(
        self,
        catalog: ContentCatalog,
        store: RecommendationStore,
        load_profile: ProfileLoader,
        config: Optional[BehavioralConfig] = None,
        rng: Optional[np.random.Generator] = None,
        cache_size: int = 10_000,
    ):
        self.config = resolve_config(config)
        self.catalog = catalog
        self.store = store
        self._load_profile = load_profile
        self._rng = rng if rng is not None else np.random.default_rng()
        self._cache: BoundedLRU[str, List[Recommendation]] = BoundedLRU(cache_size)

    async def get_recommendations(self, user_id: str, limit: Optional[int] = None) -> List[Recommendation]:
        """
        Top-N recommendations for the user. Served from the per-user cache when it
        holds at least `limit` items; otherwise generated and persisted.

        Raises:
            NoContentAvailableError: the user has no unseen published content.
        """
        limit = limit or self.config.default_limit
        cached = self._cache.get(user_id)
        if cached is not None and len(cached) >= limit:
            return cached[:limit]

        _log("Generating recommendations for user: %s, limit: %d", user_id, limit)
        profile = await self._load_profile(user_id)
        scored = create_recommendations(
            user_id,
            self.catalog.get_published_content(),
            excluded_ids=self.catalog.get_seen_content_ids(user_id),
            preferences=self.catalog.get_preferences(user_id),
            skill_levels=self.catalog.get_skill_levels(user_id),
            profile=profile,
            recent_content=self.catalog.get_recent_content(user_id, self.config.recent_content_window),
            limit=limit,
            config=self.config,
            rng=self._rng,
        )
        recs = self.store.save_all(
            Recommendation(user_id=user_id, content_id=s.content.id, score=s.score, reason=s.reason)
            for s in scored
        )
        self._cache.put(user_id, recs)
        return recs

    async def get_next_content(self, user_id: str) -> Tuple[Content, Recommendation]:
        """Best pending recommendation (marked shown), else the head of a fresh list."""
        pending = self.store.top_pending(user_id)
        if pending is not None:
            content = self.catalog.get_content(pending.content_id)
            if content is not None:
                self.store.mark_shown(pending.id)
                _log("Returning existing recommendation %s for user: %s", content.id, user_id)
                return content, pending

        recs = await self.get_recommendations(user_id, self.config.default_limit)
        if not recs:
            raise NoContentAvailableError(user_id)
        top = recs[0]
        content = self.catalog.get_content(top.content_id)
        if content is None:
            raise NoContentAvailableError(user_id)
        self.store.mark_shown(top.id)
        return content, top

    def record_feedback(self, user_id: str, content_id: str, feedback: FeedbackType) -> Optional[Recommendation]:
        """Attach feedback to the recommendation and drop the user's cached list."""
        _log("Recording feedback for user: %s, content: %s, feedback: %s", user_id, content_id, feedback.value)
        rec = self.store.record_feedback(user_id, content_id, feedback)
        self.invalidate(user_id)
        return rec

    def invalidate(self, user_id: str) -> None:
        self._cache.pop(user_id)

    def is_cached(self, user_id: str) -> bool:
        return user_id in self._cache
