"""
Kafka consumer for raw behavioral events.

Polls the events topic with confluent-kafka and hands every message to the
ProfilingService. Malformed messages are dropped by the service with a warning;
broker errors are logged and polling continues.

Run:
----
    behavioral-consumer
    python -m server.services.event_consumer
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from confluent_kafka import Consumer, KafkaError

from .profiling_service import ProfilingService

logger = logging.getLogger(__name__)


def create_consumer(settings: Dict[str, str], group_id: str) -> Any:
    """Create a Kafka consumer (manual commits, earliest offset for new groups)."""
    config = dict(settings)
    config.update({
        "group.id": group_id,
        "auto.offset.reset": "earliest",
        "enable.auto.commit": False,
    })
    return Consumer(config)


class EventConsumer:
    def __init__(
        self,
        service: ProfilingService,
        consumer: Any,
        topic: str = "raw-behavioral-events",
        poll_timeout: float = 1.0,
    ):
        self.service = service
        self._consumer = consumer
        self._topic = topic
        self._poll_timeout = poll_timeout
        self._running = False
        self.processed = 0
        self.dropped = 0

    def stop(self) -> None:
        self._running = False

    async def run(self, max_messages: Optional[int] = None, max_empty_polls: Optional[int] = None) -> None:
        """Poll until stop() is called, or until the optional message / empty-poll limits are hit."""
        self._consumer.subscribe([self._topic])
        logger.info("[consumer] Subscribed to %s", self._topic)
        self._running = True
        empty_polls = 0
        try:
            while self._running:
                msg = await asyncio.to_thread(self._consumer.poll, self._poll_timeout)
                if msg is None:
                    empty_polls += 1
                    if max_empty_polls is not None and empty_polls >= max_empty_polls:
                        break
                    continue
                if msg.error():
                    if msg.error().code() != KafkaError._PARTITION_EOF:
                        logger.warning("[consumer] Kafka error: %s", msg.error())
                    continue
                empty_polls = 0
                updated = await self.service.handle_message(msg.value())
                if updated:
                    self.processed += 1
                else:
                    self.dropped += 1
                self._consumer.commit(message=msg, asynchronous=True)
                if max_messages is not None and self.processed + self.dropped >= max_messages:
                    break
        finally:
            self._consumer.close()
            logger.info("[consumer] Closed (processed=%d, dropped=%d)", self.processed, self.dropped)


def main() -> None:
    from ..config import get_config
    from ..state import get_state

    config = get_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    state = get_state()
    consumer = EventConsumer(
        state.profiling_service,
        create_consumer(config.kafka_settings(), config.kafka_group_id),
        topic=config.kafka_events_topic,
    )
    try:
        asyncio.run(consumer.run())
    except KeyboardInterrupt:
        logger.info("[consumer] Interrupted")
    finally:
        state.publisher.close()


if __name__ == "__main__":
    main()
