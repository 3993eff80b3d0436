"""
Event Consumer Tests

Drives EventConsumer with a fake confluent-kafka consumer.

Test Scenarios:
---------------
1. Valid messages update profiles and are committed
2. Malformed messages are counted as dropped, polling continues
3. Broker errors are skipped; the consumer is always closed
4. Out-of-range timestamps and processing errors never stop the loop

Run:
----
    pytest server/tests/test_event_consumer.py -v
"""

import asyncio
import json

import pytest
from confluent_kafka import KafkaError

from server.services import EventConsumer, InMemoryProfileStore, LoggingProfilePublisher, ProfilingService
from server.services.event_consumer import create_consumer


class FakeError:
    def __init__(self, code):
        self._code = code

    def code(self):
        return self._code

    def __str__(self):
        return f"error {self._code}"


class FakeMessage:
    def __init__(self, value=None, error=None):
        self._value = value
        self._error = error

    def value(self):
        return self._value

    def error(self):
        return self._error


class FakeConsumer:
    def __init__(self, messages):
        self._messages = list(messages)
        self.subscribed = None
        self.committed = []
        self.closed = False

    def subscribe(self, topics):
        self.subscribed = topics

    def poll(self, timeout):
        return self._messages.pop(0) if self._messages else None

    def commit(self, message=None, asynchronous=True):
        self.committed.append(message)

    def close(self):
        self.closed = True


def _encoded(payload):
    return json.dumps(payload).encode("utf-8")


JOURNEY = {
    "topic": "content_journey",
    "userId": "u1",
    "contentId": "c1",
    "action": "started",
    "timeInContentSeconds": 60,
    "topicTags": ["math"],
}


class TestEventConsumer:
    @pytest.fixture(autouse=True)
    def setup(self):
        self.store = InMemoryProfileStore()
        self.service = ProfilingService(self.store, LoggingProfilePublisher())

    def test_processes_and_commits(self):
        fake = FakeConsumer([FakeMessage(_encoded(JOURNEY)), FakeMessage(_encoded(JOURNEY))])
        consumer = EventConsumer(self.service, fake, topic="events")
        asyncio.run(consumer.run(max_empty_polls=1))
        assert fake.subscribed == ["events"]
        assert consumer.processed == 2
        assert len(fake.committed) == 2
        assert fake.closed
        profile = asyncio.run(self.store.load_async("u1"))
        assert profile.total_content_consumed == 2

    def test_malformed_messages_dropped(self):
        fake = FakeConsumer([
            FakeMessage(b"not json"),
            FakeMessage(_encoded({"topic": "content_journey"})),
            FakeMessage(_encoded(JOURNEY)),
        ])
        consumer = EventConsumer(self.service, fake)
        asyncio.run(consumer.run(max_empty_polls=1))
        assert consumer.dropped == 2
        assert consumer.processed == 1

    def test_broker_errors_skipped(self, caplog):
        fake = FakeConsumer([
            FakeMessage(error=FakeError(KafkaError._PARTITION_EOF)),
            FakeMessage(error=FakeError(KafkaError._TRANSPORT)),
            FakeMessage(_encoded(JOURNEY)),
        ])
        consumer = EventConsumer(self.service, fake)
        asyncio.run(consumer.run(max_empty_polls=1))
        assert consumer.processed == 1
        assert consumer.dropped == 0
        assert len(fake.committed) == 1
        assert "Kafka error" in caplog.text

    def test_out_of_range_timestamp_does_not_stop_consumer(self):
        fake = FakeConsumer([
            FakeMessage(_encoded({**JOURNEY, "timestamp": 10**18})),
            FakeMessage(_encoded({**JOURNEY, "userId": "u2"})),
        ])
        consumer = EventConsumer(self.service, fake)
        asyncio.run(consumer.run(max_empty_polls=1))
        assert consumer.processed == 2
        assert len(fake.committed) == 2
        first = asyncio.run(self.store.load_async("u1"))
        assert first.total_content_consumed == 1
        assert len(first.peak_windows) == 1
        assert asyncio.run(self.store.load_async("u2")) is not None

    def test_processing_error_is_logged_and_skipped(self, monkeypatch, caplog):
        original = self.service.interest_scorer.update_interests

        def fail_for_u1(profile, event, now):
            if profile.user_id == "u1":
                raise RuntimeError("boom")
            return original(profile, event, now)

        monkeypatch.setattr(self.service.interest_scorer, "update_interests", fail_for_u1)
        fake = FakeConsumer([
            FakeMessage(_encoded(JOURNEY)),
            FakeMessage(_encoded({**JOURNEY, "userId": "u2"})),
        ])
        consumer = EventConsumer(self.service, fake)
        asyncio.run(consumer.run(max_empty_polls=1))
        assert consumer.dropped == 1
        assert consumer.processed == 1
        assert len(fake.committed) == 2
        assert fake.closed
        assert "Failed to process event" in caplog.text
        assert asyncio.run(self.store.load_async("u2")).total_content_consumed == 1

    def test_max_messages(self):
        fake = FakeConsumer([FakeMessage(_encoded(JOURNEY)) for _ in range(5)])
        consumer = EventConsumer(self.service, fake)
        asyncio.run(consumer.run(max_messages=3))
        assert consumer.processed == 3
        assert fake.closed

    def test_create_consumer_settings(self, monkeypatch):
        captured = {}

        def fake_consumer(config):
            captured.update(config)
            return "consumer"

        monkeypatch.setattr("server.services.event_consumer.Consumer", fake_consumer)
        result = create_consumer({"bootstrap.servers": "broker:9092"}, "group-1")
        assert result == "consumer"
        assert captured["group.id"] == "group-1"
        assert captured["enable.auto.commit"] is False
        assert captured["bootstrap.servers"] == "broker:9092"
