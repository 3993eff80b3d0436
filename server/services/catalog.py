"""
Content Catalog abstraction.

Supplies candidate content, learner preferences, skill levels and interaction
history to the recommendation service. Implementations: in-memory (tests,
local runs) and JSON file (seeded catalog).
"""

import json
import logging
from collections import defaultdict
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Set, Union

from behavioral.models import Content, ContentStatus, SkillLevel, UserPreferences
from behavioral.utils import ensure_utc

logger = logging.getLogger(__name__)

# Interactions that remove an item from the candidate pool
SEEN_INTERACTIONS = frozenset({"viewed", "completed", "skipped"})


class ContentCatalog(Protocol):
    """Protocol for catalog and interaction-history queries."""

    def get_published_content(self) -> List[Content]:
        """All content with status published."""
        ...

    def get_content(self, content_id: str) -> Optional[Content]:
        ...

    def get_seen_content_ids(self, user_id: str) -> Set[str]:
        """Content ids the user has viewed, completed, or skipped."""
        ...

    def get_preferences(self, user_id: str) -> Optional[UserPreferences]:
        """Stored preferences, or None when the user has none."""
        ...

    def get_skill_levels(self, user_id: str) -> List[SkillLevel]:
        ...

    def get_recent_content(self, user_id: str, limit: int = 5) -> List[Content]:
        """Content from the user's latest interactions, most recent first."""
        ...


class InMemoryContentCatalog:
    """Catalog held in memory. Used for tests, local runs, and as the base of the JSON catalog."""

    def __init__(self, content: Iterable[Content] = ()):
        self._content: Dict[str, Content] = {}
        self._preferences: Dict[str, UserPreferences] = {}
        self._skills: Dict[str, List[SkillLevel]] = defaultdict(list)
        # user_id -> [(timestamp, content_id, interaction_type)]
        self._interactions: Dict[str, List[tuple]] = defaultdict(list)
        for item in content:
            self.add_content(item)

    def add_content(self, content: Content) -> None:
        self._content[content.id] = content

    def set_preferences(self, user_id: str, preferences: UserPreferences) -> None:
        self._preferences[user_id] = preferences

    def set_skill_levels(self, user_id: str, skill_levels: Iterable[SkillLevel]) -> None:
        self._skills[user_id] = list(skill_levels)

    def record_interaction(
        self,
        user_id: str,
        content_id: str,
        interaction_type: str,
        timestamp: Optional[datetime] = None,
    ) -> None:
        ts = ensure_utc(timestamp)
        self._interactions[user_id].append((ts, content_id, interaction_type.lower()))

    def get_published_content(self) -> List[Content]:
        return [c for c in self._content.values() if c.status == ContentStatus.PUBLISHED]

    def get_content(self, content_id: str) -> Optional[Content]:
        return self._content.get(content_id)

    def get_seen_content_ids(self, user_id: str) -> Set[str]:
        return {
            content_id
            for _, content_id, kind in self._interactions.get(user_id, [])
            if kind in SEEN_INTERACTIONS
        }

    def get_preferences(self, user_id: str) -> Optional[UserPreferences]:
        return self._preferences.get(user_id)

    def get_skill_levels(self, user_id: str) -> List[SkillLevel]:
        return list(self._skills.get(user_id, []))

    def get_recent_content(self, user_id: str, limit: int = 5) -> List[Content]:
        recent: List[Content] = []
        seen: Set[str] = set()
        history = sorted(self._interactions.get(user_id, []), key=lambda i: i[0], reverse=True)
        for _, content_id, _ in history:
            content = self._content.get(content_id)
            if content is None or content_id in seen:
                continue
            seen.add(content_id)
            recent.append(content)
            if len(recent) >= limit:
                break
        return recent


class JsonContentCatalog(InMemoryContentCatalog):
    """
    Catalog loaded from a JSON file:
        {"content": [...], "preferences": {user_id: {...}},
         "skill_levels": {user_id: [...]}, "interactions": {user_id: [{content_id, type, timestamp}]}}
    """

    def __init__(self, path: Union[Path, str]):
        super().__init__()
        self._path = Path(path)
        with open(self._path) as f:
            data = json.load(f)
        for item in data.get("content", []):
            self.add_content(Content.model_validate(item))
        for user_id, prefs in (data.get("preferences") or {}).items():
            self.set_preferences(user_id, UserPreferences.model_validate(prefs))
        for user_id, skills in (data.get("skill_levels") or {}).items():
            self.set_skill_levels(user_id, [SkillLevel.model_validate(s) for s in skills])
        for user_id, interactions in (data.get("interactions") or {}).items():
            for i in interactions:
                ts = i.get("timestamp")
                self.record_interaction(
                    user_id,
                    i["content_id"],
                    i.get("type", "viewed"),
                    datetime.fromisoformat(ts.replace("Z", "+00:00")) if ts else None,
                )
        logger.info("Loaded catalog %s: %d items", self._path, len(self._content))
