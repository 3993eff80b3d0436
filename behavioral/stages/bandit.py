"""
Bandit ranking: epsilon-greedy explore/exploit over scored candidates.

Epsilon depends on the user's engagement classification. Exploration surfaces
the shuffled lower half of the score-sorted list ahead of the top third.
UCB and Thompson sampling are available for callers tracking per-item counts.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from ..models.config import BehavioralConfig, resolve_config
from ..models.content import Content
from ..models.profile import BehavioralProfile

logger = logging.getLogger(__name__)

MISSING_SCORE = 0.5
EXPLORATION_REASON = "Exploring new content to discover your interests"
EXPLOITATION_REASON = "Personalized based on your learning patterns"


@dataclass
class RankResult:
    ordered: List[Content] = field(default_factory=list)
    explored: bool = False
    epsilon: float = 0.0


def epsilon_for(profile: Optional[BehavioralProfile], config: Optional[BehavioralConfig] = None) -> float:
    config = resolve_config(config)
    if profile is None or profile.engagement is None:
        return config.default_epsilon
    return config.epsilon_by_classification.get(profile.engagement.classification, config.default_epsilon)


def sort_by_score(candidates: Sequence[Content], scores: Mapping[str, float]) -> List[Content]:
    """Descending by score; stable for ties. Missing scores count as 0.5."""
    return sorted(candidates, key=lambda c: scores.get(c.id, MISSING_SCORE), reverse=True)


def explore(sorted_candidates: Sequence[Content], rng: np.random.Generator) -> List[Content]:
    """Shuffled lower half followed by the top third, first occurrence kept."""
    n = len(sorted_candidates)
    midpoint = n // 2
    if midpoint == 0:
        return list(sorted_candidates)
    lower = list(sorted_candidates[midpoint:])
    shuffled = [lower[i] for i in rng.permutation(len(lower))]
    top_third = list(sorted_candidates[: n // 3])
    result: List[Content] = []
    seen = set()
    for content in shuffled + top_third:
        if content.id not in seen:
            seen.add(content.id)
            result.append(content)
    return result


def rank(
    candidates: Sequence[Content],
    scores: Mapping[str, float],
    behavioral_profile: Optional[BehavioralProfile] = None,
    rng: Optional[np.random.Generator] = None,
    config: Optional[BehavioralConfig] = None,
) -> RankResult:
    rng = rng if rng is not None else np.random.default_rng()
    epsilon = epsilon_for(behavioral_profile, config)
    ordered = sort_by_score(candidates, scores)
    if rng.random() < epsilon:
        logger.debug("Bandit explore (epsilon=%.2f, n=%d)", epsilon, len(ordered))
        return RankResult(ordered=explore(ordered, rng), explored=True, epsilon=epsilon)
    return RankResult(ordered=ordered, explored=False, epsilon=epsilon)


def apply_ucb(
    estimated_scores: Mapping[str, float],
    selection_counts: Mapping[str, int],
    total_count: int,
    c: float = 1.0,
) -> Dict[str, float]:
    """score + c * sqrt(ln(total + 1) / count); items never counted use count 1."""
    ucb = {}
    for content_id, score in estimated_scores.items():
        count = max(selection_counts.get(content_id, 1), 1)
        ucb[content_id] = score + c * math.sqrt(math.log(total_count + 1) / count)
    return ucb


def sample_gamma(shape: float, rng: np.random.Generator) -> float:
    """Gamma(shape, 1) by Marsaglia-Tsang; shapes below 1 use G(shape + 1) * U ** (1 / shape)."""
    if shape <= 0:
        raise ValueError(f"Gamma shape must be positive, got {shape}")
    if shape < 1.0:
        return sample_gamma(shape + 1.0, rng) * rng.random() ** (1.0 / shape)
    d = shape - 1.0 / 3.0
    c = 1.0 / math.sqrt(9.0 * d)
    while True:
        x = rng.standard_normal()
        v = (1.0 + c * x) ** 3
        if v <= 0:
            continue
        u = rng.random()
        if u < 1.0 - 0.0331 * x ** 4:
            return d * v
        if math.log(u) < 0.5 * x * x + d * (1.0 - v + math.log(v)):
            return d * v


def sample_beta(alpha: float, beta: float, rng: np.random.Generator) -> float:
    x = sample_gamma(alpha, rng)
    y = sample_gamma(beta, rng)
    return x / (x + y)


def thompson_sample(
    beta_params: Mapping[str, Tuple[float, float]],
    rng: Optional[np.random.Generator] = None,
) -> Optional[str]:
    """Id whose Beta(alpha, beta) draw is largest; None when there are no arms."""
    rng = rng if rng is not None else np.random.default_rng()
    best_id, best_sample = None, -1.0
    for content_id, (alpha, beta) in beta_params.items():
        sample = sample_beta(alpha, beta, rng)
        if sample > best_sample:
            best_id, best_sample = content_id, sample
    return best_id


def exploration_reason() -> str:
    return EXPLORATION_REASON


def exploitation_reason() -> str:
    return EXPLOITATION_REASON
