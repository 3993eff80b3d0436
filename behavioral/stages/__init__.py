"""Pipeline stages: candidate pool (Stage A), scoring (Stage B), bandit ranking, diversity, orchestration."""

from .bandit import RankResult, apply_ucb, epsilon_for, rank, thompson_sample
from .candidate_pool import get_candidate_pool
from .diversity import diversify
from .orchestrator import create_recommendations
from .scoring import score_candidates

__all__ = [
    "RankResult",
    "apply_ucb",
    "create_recommendations",
    "diversify",
    "epsilon_for",
    "get_candidate_pool",
    "rank",
    "score_candidates",
    "thompson_sample",
]
