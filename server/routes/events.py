"""Event ingestion endpoint (HTTP alternative to the Kafka consumer)."""

from typing import Any, Dict

from fastapi import APIRouter, Body

from ..models import EventResponse
from ..state import get_state

router = APIRouter()


@router.post("", response_model=EventResponse)
async def ingest_events(payload: Dict[str, Any] = Body(...)):
    """
    Accept one envelope {topic, userId, ...} or a batch {"events": [...]}.
    Malformed or ignored events are counted as dropped, never rejected.
    """
    service = get_state().profiling_service
    events = payload["events"] if isinstance(payload.get("events"), list) else [payload]
    accepted = 0
    for event in events:
        if await service.handle_message(event):
            accepted += 1
    return EventResponse(accepted=accepted, dropped=len(events) - accepted)
