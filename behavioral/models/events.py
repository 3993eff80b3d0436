"""
Inbound event models and envelope parsing.

Events arrive as an envelope {topic, userId, eventType?, ...payload}. Wire names
are camelCase; models accept both camelCase and snake_case.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

TOPIC_CONTENT_JOURNEY = "content_journey"
TOPIC_SESSION_LIFECYCLE = "session_lifecycle"
SESSION_END = "session_end"


def epoch_millis_to_utc(value: Optional[int]) -> Optional[datetime]:
    """UTC datetime for an epoch-millisecond timestamp, or None when absent or out of range."""
    if value is None:
        return None
    try:
        return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
    except (ValueError, OverflowError, OSError) as e:
        logger.warning("Ignoring out-of-range timestamp %r: %s", value, e)
        return None


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class RawJourneyEvent(_WireModel):
    """One content interaction."""

    journey_id: Optional[str] = None
    user_id: str
    session_id: Optional[str] = None
    content_id: Optional[str] = None
    previous_content_id: Optional[str] = None
    content_type: Optional[str] = None
    action: Optional[str] = None
    sequence_position: int = 0
    time_in_content_seconds: float = 0.0
    topic_tags: List[str] = Field(default_factory=list)
    difficulty_level: Optional[str] = None
    # Epoch milliseconds.
    timestamp: Optional[int] = None

    @field_validator("time_in_content_seconds", "sequence_position", mode="before")
    @classmethod
    def _none_to_zero(cls, v):
        return 0 if v is None else v

    @field_validator("topic_tags", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return [] if v is None else v

    @field_validator("difficulty_level", mode="before")
    @classmethod
    def _difficulty_to_str(cls, v):
        return None if v is None else str(v)

    def occurred_at(self) -> Optional[datetime]:
        return epoch_millis_to_utc(self.timestamp)


class SessionMetrics(BaseModel):
    """Duration (seconds) and content count of one finished session."""

    duration: float = 0.0
    content_count: int = 0


class SessionEndEvent(_WireModel):
    """Session lifecycle event. Only event_type == session_end updates engagement."""

    user_id: str
    session_id: Optional[str] = None
    event_type: Optional[str] = None
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    duration_seconds: float = 0.0
    content_count: int = 0

    @field_validator("duration_seconds", "content_count", mode="before")
    @classmethod
    def _none_to_zero(cls, v):
        return 0 if v is None else v

    def to_metrics(self) -> SessionMetrics:
        return SessionMetrics(duration=float(self.duration_seconds), content_count=int(self.content_count))

    def ended_at(self) -> Optional[datetime]:
        return epoch_millis_to_utc(self.end_time)


class EventEnvelope(BaseModel):
    """Normalized envelope: topic + user id + the full payload dict."""

    topic: str
    user_id: str
    event_type: Optional[str] = None
    payload: Dict[str, Any]


def parse_envelope(raw: Union[str, bytes, Dict[str, Any]]) -> Optional[EventEnvelope]:
    """
    Parse a raw bus message into an EventEnvelope.

    Returns None (and logs a warning) for invalid JSON, non-object payloads,
    or a missing topic / userId. Never raises.
    """
    data: Any = raw
    if isinstance(raw, (bytes, bytearray)):
        try:
            data = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.warning("Dropping event: payload is not UTF-8 (%s)", e)
            return None
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            logger.warning("Dropping event: invalid JSON (%s)", e)
            return None
    if not isinstance(data, dict):
        logger.warning("Dropping event: expected JSON object, got %s", type(data).__name__)
        return None
    topic = data.get("topic")
    if not topic or not isinstance(topic, str):
        logger.warning("Dropping event: missing topic")
        return None
    user_id = data.get("userId") or data.get("user_id")
    if not user_id or not isinstance(user_id, str):
        logger.warning("Dropping event on topic %s: missing userId", topic)
        return None
    event_type = data.get("eventType") or data.get("event_type")
    return EventEnvelope(
        topic=topic,
        user_id=user_id,
        event_type=event_type if isinstance(event_type, str) else None,
        payload=data,
    )


def journey_event_from(envelope: EventEnvelope) -> Optional[RawJourneyEvent]:
    """Build a RawJourneyEvent from a content_journey envelope, or None if fields are invalid."""
    try:
        return RawJourneyEvent.model_validate({**envelope.payload, "userId": envelope.user_id})
    except ValidationError as e:
        logger.warning("Dropping content_journey event for user %s: %s", envelope.user_id, e)
        return None


def session_event_from(envelope: EventEnvelope) -> Optional[SessionEndEvent]:
    """Build a SessionEndEvent from a session_lifecycle envelope, or None if fields are invalid."""
    try:
        return SessionEndEvent.model_validate(
            {**envelope.payload, "userId": envelope.user_id, "eventType": envelope.event_type}
        )
    except ValidationError as e:
        logger.warning("Dropping session_lifecycle event for user %s: %s", envelope.user_id, e)
        return None
