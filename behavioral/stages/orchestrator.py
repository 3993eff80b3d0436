"""
Recommendation orchestration: candidate pool → scoring → bandit ranking → type diversity.

Pure over its inputs: the caller supplies catalog, exclusions, preferences and a
profile snapshot, and persists whatever comes back.
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Set

import numpy as np

from ..errors import NoContentAvailableError
from ..models.config import BehavioralConfig, resolve_config
from ..models.content import Content, SkillLevel, UserPreferences
from ..models.profile import BehavioralProfile
from ..models.scoring import ScoredCandidate
from .bandit import exploitation_reason, exploration_reason, rank, sort_by_score
from .candidate_pool import get_candidate_pool
from .diversity import diversify
from .scoring import determine_strategy, score_candidates, strategy_reason
from .scoring.shorts_strategy import ContentStrategy

logger = logging.getLogger(__name__)


def _reason(explored: bool, profile: Optional[BehavioralProfile], strategy: Optional[ContentStrategy]) -> str:
    if explored:
        return exploration_reason()
    if profile is not None and strategy is not None and strategy != ContentStrategy.BALANCED:
        return strategy_reason(strategy)
    return exploitation_reason()


def create_recommendations(
    user_id: str,
    catalog: Iterable[Content],
    excluded_ids: Optional[Set[str]] = None,
    preferences: Optional[UserPreferences] = None,
    skill_levels: Iterable[SkillLevel] = (),
    profile: Optional[BehavioralProfile] = None,
    recent_content: Sequence[Content] = (),
    limit: Optional[int] = None,
    config: Optional[BehavioralConfig] = None,
    rng: Optional[np.random.Generator] = None,
    now: Optional[datetime] = None,
) -> List[ScoredCandidate]:
    """
    Build the top-N recommendations for a user.

    Raises:
        NoContentAvailableError: no published, unseen content remains.
    """
    config = resolve_config(config)
    limit = limit if limit is not None else config.default_limit
    snapshot = profile.snapshot() if profile is not None else None

    candidates = get_candidate_pool(excluded_ids or set(), catalog)
    if not candidates:
        logger.warning("No candidate content found for user: %s", user_id)
        raise NoContentAvailableError(user_id)

    scores = score_candidates(
        candidates,
        preferences=preferences,
        skill_levels=skill_levels,
        behavioral_profile=snapshot,
        recent_content=recent_content,
        user_id=user_id,
        now=now,
        config=config,
    )
    ranked = rank(candidates, scores, snapshot, rng=rng, config=config)
    selected = diversify(ranked.ordered, limit, fallback=sort_by_score(candidates, scores))

    strategy = determine_strategy(snapshot, recent_content) if snapshot is not None else None
    reason = _reason(ranked.explored, snapshot, strategy)
    logger.info(
        "Recommendations for %s: %d candidates -> %d (explored=%s, epsilon=%.2f)",
        user_id, len(candidates), len(selected), ranked.explored, ranked.epsilon,
    )
    return [ScoredCandidate(content=c, score=scores[c.id], reason=reason) for c in selected]
