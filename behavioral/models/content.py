"""
Catalog content and learner preference models.

Content items and preferences are supplied by the catalog collaborator; this
module only defines their shape.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContentType(str, Enum):
    LESSON = "lesson"
    VIDEO = "video"
    ARTICLE = "article"
    EXERCISE = "exercise"
    QUIZ = "quiz"


class ContentStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class Content(BaseModel):
    """A catalog item."""

    model_config = ConfigDict(extra="allow")

    id: str
    type: ContentType
    title: str = ""
    description: Optional[str] = None
    difficulty_level: Optional[int] = None
    estimated_duration_minutes: Optional[float] = None
    topics: List[str] = Field(default_factory=list)
    status: ContentStatus = ContentStatus.PUBLISHED
    created_at: Optional[datetime] = None

    @field_validator("type", "status", mode="before")
    @classmethod
    def _lowercase(cls, v):
        return v.lower() if isinstance(v, str) else v

    @field_validator("topics", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return [] if v is None else v

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.estimated_duration_minutes is None:
            return None
        return self.estimated_duration_minutes * 60.0


class UserPreferences(BaseModel):
    """Stated learner preferences. Missing preferences use these defaults."""

    difficulty_preference: int = 3
    content_type_preferences: Dict[str, float] = Field(default_factory=dict)
    topic_preferences: Dict[str, float] = Field(default_factory=dict)
    daily_time_target_minutes: float = 30.0

    def type_preference(self, content_type: str) -> Optional[float]:
        """Case-insensitive lookup of a content-type preference."""
        wanted = content_type.lower()
        for key, value in self.content_type_preferences.items():
            if key.lower() == wanted:
                return value
        return None


class SkillLevel(BaseModel):
    topic: str
    level: Optional[str] = None
    confidence_score: Optional[float] = None
