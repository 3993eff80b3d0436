"""Profile and journey Pydantic models."""

from typing import List

from pydantic import BaseModel


class PredictNextResponse(BaseModel):
    content_id: str
    next_content_ids: List[str]
