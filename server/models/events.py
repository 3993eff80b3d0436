"""Event ingestion Pydantic models."""

from pydantic import BaseModel


class EventResponse(BaseModel):
    accepted: int
    dropped: int
