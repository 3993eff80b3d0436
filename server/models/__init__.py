"""Pydantic request/response models for the API."""

from .common import ContentCard
from .events import EventResponse
from .profiles import PredictNextResponse
from .recommendations import (
    FeedbackRequest,
    FeedbackResponse,
    RecommendationItem,
    RecommendationListResponse,
)

__all__ = [
    "ContentCard",
    "EventResponse",
    "FeedbackRequest",
    "FeedbackResponse",
    "PredictNextResponse",
    "RecommendationItem",
    "RecommendationListResponse",
]
