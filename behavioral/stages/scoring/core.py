"""
Stage B: Candidate Scoring

base = w_content * content_based + w_collaborative * collaborative

With a behavioral profile, the base is blended with interest, session context and
the strategy boost, then clamped to [0, 1]:

    enhanced = 0.4 * base + 0.3 * interest + 0.2 * session + strategy_boost

Pure over its inputs: the profile is only read.
"""

import logging
from datetime import datetime
from typing import Dict, Iterable, Optional, Sequence

from ...models.config import BehavioralConfig, resolve_config
from ...models.content import Content, SkillLevel, UserPreferences
from ...models.profile import BehavioralProfile
from ...models.scoring import clamp
from ...utils.clock import ensure_utc
from .collaborative import collaborative_score
from .content_based import NEUTRAL, content_based_score, skill_confidence_by_topic
from .session_context import session_context_score
from .shorts_strategy import determine_strategy, strategy_boost

logger = logging.getLogger(__name__)


def default_preferences(config: BehavioralConfig) -> UserPreferences:
    return UserPreferences(
        difficulty_preference=config.default_difficulty_preference,
        daily_time_target_minutes=config.default_daily_time_target_minutes,
    )


def behavioral_interest(
    content: Content,
    profile: Optional[BehavioralProfile],
    config: BehavioralConfig,
) -> float:
    """Mean interest score over the item's topics (0.5 for topics with no interest)."""
    if profile is None or not profile.interests or not content.topics:
        return NEUTRAL
    total = 0.0
    for topic in content.topics:
        interest = profile.interests.get(topic)
        total += interest.score / config.behavioral_interest_scale if interest else NEUTRAL
    return total / len(content.topics)


def score_candidates(
    candidates: Sequence[Content],
    preferences: Optional[UserPreferences] = None,
    skill_levels: Iterable[SkillLevel] = (),
    behavioral_profile: Optional[BehavioralProfile] = None,
    recent_content: Sequence[Content] = (),
    user_id: Optional[str] = None,
    now: Optional[datetime] = None,
    config: Optional[BehavioralConfig] = None,
) -> Dict[str, float]:
    """
    Score every candidate in [0, 1].

    Args:
        candidates: Items to score.
        preferences: Stated preferences; defaults (difficulty 3, 30 min target) if None.
        skill_levels: Per-topic skill confidences used when a topic has no preference.
        behavioral_profile: Enables the behavioral-enhanced score when present.
        recent_content: Most recent first; drives the shorts strategy.
        user_id: Seeds the collaborative placeholder. Defaults to the profile's user.
        now: Scoring time (UTC). Defaults to now.

    Returns:
        content id -> score.
    """
    config = resolve_config(config)
    preferences = preferences or default_preferences(config)
    skill_confidence = skill_confidence_by_topic(skill_levels)
    now = ensure_utc(now)
    if user_id is None and behavioral_profile is not None:
        user_id = behavioral_profile.user_id

    strategy = determine_strategy(behavioral_profile, recent_content) if behavioral_profile else None

    scores: Dict[str, float] = {}
    for content in candidates:
        content_score = content_based_score(content, preferences, skill_confidence, config, now)
        base = (
            config.weight_content * content_score
            + config.weight_collaborative * collaborative_score(user_id, content.id, config)
        )
        if behavioral_profile is None:
            scores[content.id] = clamp(base)
            continue
        enhanced = (
            config.weight_enhanced_base * base
            + config.weight_behavioral_interest * behavioral_interest(content, behavioral_profile, config)
            + config.weight_session_context * session_context_score(content, behavioral_profile, now, config)
            + strategy_boost(content, strategy)
        )
        scores[content.id] = clamp(enhanced)

    logger.debug(
        "Scored %d candidates for %s (strategy=%s)",
        len(scores), user_id, strategy.value if strategy else None,
    )
    return scores
