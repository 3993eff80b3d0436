"""Stage B: content-based, collaborative, session-context and strategy scoring."""

from .collaborative import collaborative_score
from .content_based import (
    content_based_score,
    difficulty_zpd,
    length_match,
    recency_boost,
    skill_confidence_by_topic,
    topic_affinity,
    type_affinity,
)
from .core import behavioral_interest, default_preferences, score_candidates
from .session_context import session_context_score, session_reason
from .shorts_strategy import (
    ContentStrategy,
    determine_strategy,
    filter_by_strategy,
    is_in_shorts_mode,
    is_short,
    strategy_boost,
    strategy_reason,
)

__all__ = [
    "ContentStrategy",
    "behavioral_interest",
    "collaborative_score",
    "content_based_score",
    "default_preferences",
    "determine_strategy",
    "difficulty_zpd",
    "filter_by_strategy",
    "is_in_shorts_mode",
    "is_short",
    "length_match",
    "recency_boost",
    "score_candidates",
    "session_context_score",
    "session_reason",
    "skill_confidence_by_topic",
    "strategy_boost",
    "strategy_reason",
    "topic_affinity",
    "type_affinity",
]
