"""
Behavioral Recommender: profiling and ranking core

Single entry point for the behavioral package:
- models/: BehavioralConfig, BehavioralProfile, events, content, ScoredCandidate
- profiling/: interest scorer, journey analyzer, engagement classifier, peak windows
- stages/: candidate_pool (Stage A), scoring (Stage B), bandit, diversity, orchestrator
"""

from .errors import NoContentAvailableError, RecommendationError
from .models import (
    DEFAULT_CONFIG,
    BehavioralConfig,
    BehavioralProfile,
    Content,
    ScoredCandidate,
    resolve_config,
)
from .profiling import EngagementClassifier, InterestScorer, JourneyAnalyzer, PeakWindowTracker
from .stages import create_recommendations, get_candidate_pool, rank, score_candidates

__all__ = [
    "DEFAULT_CONFIG",
    "BehavioralConfig",
    "BehavioralProfile",
    "Content",
    "EngagementClassifier",
    "InterestScorer",
    "JourneyAnalyzer",
    "NoContentAvailableError",
    "PeakWindowTracker",
    "RecommendationError",
    "ScoredCandidate",
    "create_recommendations",
    "get_candidate_pool",
    "rank",
    "resolve_config",
    "score_candidates",
]
