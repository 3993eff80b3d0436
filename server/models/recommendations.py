"""Recommendation-related Pydantic models."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from behavioral.models import FeedbackType

from .common import ContentCard


class RecommendationItem(BaseModel):
    id: str
    content_id: str
    score: float
    reason: str
    algorithm: str
    created_at: datetime
    content: Optional[ContentCard] = None


class RecommendationListResponse(BaseModel):
    user_id: str
    recommendations: List[RecommendationItem]


class FeedbackRequest(BaseModel):
    user_id: str
    content_id: str
    feedback: FeedbackType


class FeedbackResponse(BaseModel):
    status: str
    recommendation_id: Optional[str] = None
