"""
Recommendation Store abstraction.

Persists recommendations emitted to users, so "next content" can reuse a
pending recommendation and feedback can be attached to what was shown.
"""

import threading
from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Protocol

from behavioral.models import FeedbackType, Recommendation


class RecommendationStore(Protocol):
    """Protocol for recommendation persistence."""

    def save_all(self, recommendations: Iterable[Recommendation]) -> List[Recommendation]:
        ...

    def list_for_user(self, user_id: str) -> List[Recommendation]:
        """All recommendations for the user, highest score first."""
        ...

    def top_pending(self, user_id: str) -> Optional[Recommendation]:
        """Highest-scoring recommendation not yet shown and without feedback."""
        ...

    def mark_shown(self, recommendation_id: str) -> Optional[Recommendation]:
        ...

    def record_feedback(
        self, user_id: str, content_id: str, feedback: FeedbackType
    ) -> Optional[Recommendation]:
        """Attach feedback to the user's best recommendation for content_id. None if there is none."""
        ...


class InMemoryRecommendationStore:
    def __init__(self):
        self._by_user: Dict[str, List[Recommendation]] = defaultdict(list)
        self._by_id: Dict[str, Recommendation] = {}
        self._lock = threading.Lock()

    def save_all(self, recommendations: Iterable[Recommendation]) -> List[Recommendation]:
        saved = []
        with self._lock:
            for rec in recommendations:
                self._by_user[rec.user_id].append(rec)
                self._by_id[rec.id] = rec
                saved.append(rec)
        return saved

    def list_for_user(self, user_id: str) -> List[Recommendation]:
        with self._lock:
            recs = list(self._by_user.get(user_id, []))
        return sorted(recs, key=lambda r: r.score, reverse=True)

    def top_pending(self, user_id: str) -> Optional[Recommendation]:
        for rec in self.list_for_user(user_id):
            if rec.shown_at is None and rec.feedback is None:
                return rec
        return None

    def mark_shown(self, recommendation_id: str) -> Optional[Recommendation]:
        with self._lock:
            rec = self._by_id.get(recommendation_id)
            if rec is not None:
                rec.shown_at = datetime.now(timezone.utc)
            return rec

    def record_feedback(
        self, user_id: str, content_id: str, feedback: FeedbackType
    ) -> Optional[Recommendation]:
        for rec in self.list_for_user(user_id):
            if rec.content_id != content_id:
                continue
            with self._lock:
                rec.feedback = feedback
                if feedback == FeedbackType.CLICKED:
                    rec.clicked_at = datetime.now(timezone.utc)
            return rec
        return None
