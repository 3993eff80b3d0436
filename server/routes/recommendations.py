"""Recommendation endpoints: list, next content, feedback."""

import logging

from fastapi import APIRouter, HTTPException, Query

from behavioral.errors import NoContentAvailableError

from ..models import (
    ContentCard,
    FeedbackRequest,
    FeedbackResponse,
    RecommendationListResponse,
)
from ..state import get_state
from ..utils import DEFAULT_LIMIT, MAX_LIMIT, to_content_card, to_recommendation_item

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=RecommendationListResponse)
async def get_recommendations(
    user_id: str = Query(...),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
):
    state = get_state()
    try:
        recs = await state.recommendation_service.get_recommendations(user_id, limit)
    except NoContentAvailableError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return RecommendationListResponse(
        user_id=user_id,
        recommendations=[
            to_recommendation_item(r, state.catalog.get_content(r.content_id)) for r in recs
        ],
    )


@router.get("/next", response_model=ContentCard)
async def get_next_content(user_id: str = Query(...)):
    try:
        content, rec = await get_state().recommendation_service.get_next_content(user_id)
    except NoContentAvailableError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return to_content_card(content, rec.score, rec.reason)


@router.post("/feedback", response_model=FeedbackResponse)
def record_feedback(request: FeedbackRequest):
    rec = get_state().recommendation_service.record_feedback(
        request.user_id, request.content_id, request.feedback
    )
    if rec is None:
        logger.info("Feedback for %s on %s had no matching recommendation", request.user_id, request.content_id)
        return FeedbackResponse(status="recorded")
    return FeedbackResponse(status="recorded", recommendation_id=rec.id)
