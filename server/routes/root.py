"""Root and health endpoints."""

from fastapi import APIRouter

from ..state import get_state

router = APIRouter()


@router.get("/")
def root():
    state = get_state()
    return {
        "name": "Behavioral Recommender API",
        "version": "1.0.0",
        "data_source": state.config.data_source,
        "catalog_size": len(state.catalog.get_published_content()),
        "endpoints": {
            "events": ["/api/events"],
            "profiles": ["/api/profiles/{user_id}", "/api/journeys/{content_id}/next"],
            "recommendations": [
                "/api/recommendations",
                "/api/recommendations/next",
                "/api/recommendations/feedback",
            ],
        },
    }


@router.get("/api/health")
def health():
    state = get_state()
    return {
        "status": "healthy",
        "profile_store": type(state.profile_store).__name__,
        "publisher": type(state.publisher).__name__,
        "cached_profiles": len(state.profiling_service.cache),
    }
