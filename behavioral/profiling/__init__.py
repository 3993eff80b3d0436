"""Profiling: interest scoring, journey analysis, engagement classification, peak windows."""

from .engagement_classifier import EngagementClassifier, classify
from .interest_scorer import InterestScorer
from .journey_analyzer import JourneyAnalyzer
from .peak_windows import PeakWindowTracker

__all__ = [
    "EngagementClassifier",
    "InterestScorer",
    "JourneyAnalyzer",
    "PeakWindowTracker",
    "classify",
]
