"""Common Pydantic models shared across routes."""

from typing import List, Optional

from pydantic import BaseModel


class ContentCard(BaseModel):
    id: str
    type: str
    title: str
    description: Optional[str] = None
    difficulty_level: Optional[int] = None
    estimated_duration_minutes: Optional[float] = None
    topics: List[str] = []
    score: Optional[float] = None
    reason: Optional[str] = None
