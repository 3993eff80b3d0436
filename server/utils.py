"""Pure helpers: content card and recommendation formatting."""

from typing import Optional

from behavioral.models import Content, Recommendation

from .models import ContentCard, RecommendationItem

DEFAULT_LIMIT = 10
MAX_LIMIT = 50


def to_content_card(content: Content, score: Optional[float] = None, reason: Optional[str] = None) -> ContentCard:
    return ContentCard(
        id=content.id,
        type=content.type.value,
        title=content.title,
        description=content.description,
        difficulty_level=content.difficulty_level,
        estimated_duration_minutes=content.estimated_duration_minutes,
        topics=list(content.topics),
        score=round(score, 4) if score is not None else None,
        reason=reason,
    )


def to_recommendation_item(rec: Recommendation, content: Optional[Content] = None) -> RecommendationItem:
    return RecommendationItem(
        id=rec.id,
        content_id=rec.content_id,
        score=round(rec.score, 4),
        reason=rec.reason,
        algorithm=rec.algorithm,
        created_at=rec.created_at,
        content=to_content_card(content) if content is not None else None,
    )
