"""
Profile-update publisher.

After every profile mutation the profiling service publishes
{userId, profile, timestamp} downstream. Implementations: logging (local runs,
tests; keeps the last messages in memory) and Kafka (confluent-kafka producer).
"""

import json
import logging
from collections import deque
from datetime import datetime, timezone
from typing import Any, Deque, Dict, Optional, Protocol

from confluent_kafka import Producer

from behavioral.models import BehavioralProfile

logger = logging.getLogger(__name__)


def profile_update_message(profile: BehavioralProfile) -> Dict[str, Any]:
    return {
        "userId": profile.user_id,
        "profile": profile.model_dump(mode="json"),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


class ProfileUpdatePublisher(Protocol):
    def publish(self, profile: BehavioralProfile) -> None:
        """Send a profile-update notification. May raise; callers log and continue."""
        ...

    def close(self) -> None:
        ...


class LoggingProfilePublisher:
    """Logs each update and keeps the most recent messages for inspection."""

    def __init__(self, keep: int = 100):
        self.messages: Deque[Dict[str, Any]] = deque(maxlen=keep)

    def publish(self, profile: BehavioralProfile) -> None:
        message = profile_update_message(profile)
        self.messages.append(message)
        logger.debug("[profile-updates] user=%s", profile.user_id)

    def close(self) -> None:
        pass


class KafkaProfilePublisher:
    """Publishes profile updates to a Kafka topic keyed by user id."""

    def __init__(self, settings: Dict[str, str], topic: str = "profile-updates", producer: Optional[Any] = None):
        if producer is None:
            producer = Producer(settings)
        self._producer = producer
        self._topic = topic

    def _on_delivery(self, err, msg) -> None:
        if err is not None:
            logger.warning("[profile-updates] delivery failed for key=%s: %s", msg.key(), err)

    def publish(self, profile: BehavioralProfile) -> None:
        payload = json.dumps(profile_update_message(profile)).encode("utf-8")
        self._producer.produce(
            self._topic,
            key=profile.user_id.encode("utf-8"),
            value=payload,
            on_delivery=self._on_delivery,
        )
        self._producer.poll(0)

    def close(self) -> None:
        self._producer.flush(10)
