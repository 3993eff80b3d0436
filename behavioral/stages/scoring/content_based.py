"""
Content-based scoring: how well an item matches stated preferences and skills.

content = w_topic*topic_affinity + w_type*type_affinity + w_difficulty*difficulty_zpd
          + w_recency*recency_boost + w_length*length_match

Any missing input (no preferences, no topics, unknown difficulty/age/duration)
scores a neutral 0.5 for that component.
"""

from datetime import datetime
from typing import Dict, Iterable, Optional

from ...models.config import BehavioralConfig, DEFAULT_CONFIG
from ...models.content import Content, SkillLevel, UserPreferences
from ...models.scoring import days_since

NEUTRAL = 0.5


def skill_confidence_by_topic(skill_levels: Iterable[SkillLevel]) -> Dict[str, float]:
    return {
        s.topic: s.confidence_score
        for s in skill_levels or []
        if s.confidence_score is not None
    }


def topic_affinity(
    content: Content,
    preferences: UserPreferences,
    skill_confidence: Dict[str, float],
) -> float:
    """Mean over topics of (topic preference, else skill confidence, else 0.5)."""
    if not preferences.topic_preferences or not content.topics:
        return NEUTRAL
    total = 0.0
    for topic in content.topics:
        if topic in preferences.topic_preferences:
            total += preferences.topic_preferences[topic]
        elif topic in skill_confidence:
            total += skill_confidence[topic]
        else:
            total += NEUTRAL
    return total / len(content.topics)


def type_affinity(content: Content, preferences: UserPreferences) -> float:
    pref = preferences.type_preference(content.type.value)
    return NEUTRAL if pref is None else pref


def difficulty_zpd(content: Content, preferences: UserPreferences) -> float:
    """Zone of proximal development: best one level above the user's stated difficulty."""
    if content.difficulty_level is None:
        return NEUTRAL
    optimal = preferences.difficulty_preference + 1
    distance = abs(content.difficulty_level - optimal)
    if distance == 0:
        return 1.0
    if distance == 1:
        return 0.8
    if distance == 2:
        return 0.5
    return 0.2


def recency_boost(content: Content, now: Optional[datetime] = None) -> float:
    if content.created_at is None:
        return NEUTRAL
    age = days_since(content.created_at, now)
    if age < 7:
        return 1.0
    if age < 30:
        return 0.8
    if age < 90:
        return 0.6
    return 0.4


def length_match(content: Content, preferences: UserPreferences) -> float:
    duration = content.estimated_duration_minutes
    if duration is None:
        return NEUTRAL
    target = preferences.daily_time_target_minutes
    if duration <= target / 2:
        return 1.0
    if duration <= target:
        return 0.8
    return 0.4


def content_based_score(
    content: Content,
    preferences: UserPreferences,
    skill_confidence: Dict[str, float],
    config: BehavioralConfig = DEFAULT_CONFIG,
    now: Optional[datetime] = None,
) -> float:
    return (
        config.weight_topic * topic_affinity(content, preferences, skill_confidence)
        + config.weight_type * type_affinity(content, preferences)
        + config.weight_difficulty * difficulty_zpd(content, preferences)
        + config.weight_recency * recency_boost(content, now)
        + config.weight_length * length_match(content, preferences)
    )
