"""Behavioral profile and journey endpoints."""

from fastapi import APIRouter, HTTPException

from ..models import PredictNextResponse
from ..state import get_state

router = APIRouter()


@router.get("/profiles/{user_id}")
async def get_profile(user_id: str):
    profile = await get_state().profiling_service.get_profile(user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail=f"No profile for user: {user_id}")
    return profile.model_dump(mode="json")


@router.get("/journeys/{content_id}/next", response_model=PredictNextResponse)
def predict_next(content_id: str):
    next_ids = get_state().profiling_service.predict_next(content_id)
    return PredictNextResponse(content_id=content_id, next_content_ids=next_ids)
