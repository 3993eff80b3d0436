"""Backing logic: stores, catalog, publisher, consumer, and the profiling/recommendation services."""

from .catalog import ContentCatalog, InMemoryContentCatalog, JsonContentCatalog
from .event_consumer import EventConsumer, create_consumer
from .profile_store import (
    FirestoreProfileStore,
    InMemoryProfileStore,
    JsonProfileStore,
    ProfileCache,
    ProfileStore,
)
from .profiling_service import ProfilingService
from .publisher import (
    KafkaProfilePublisher,
    LoggingProfilePublisher,
    ProfileUpdatePublisher,
    profile_update_message,
)
from .recommendation_service import RecommendationService
from .recommendation_store import InMemoryRecommendationStore, RecommendationStore

__all__ = [
    "ContentCatalog",
    "EventConsumer",
    "FirestoreProfileStore",
    "InMemoryContentCatalog",
    "InMemoryProfileStore",
    "InMemoryRecommendationStore",
    "JsonContentCatalog",
    "JsonProfileStore",
    "KafkaProfilePublisher",
    "LoggingProfilePublisher",
    "ProfileCache",
    "ProfileStore",
    "ProfileUpdatePublisher",
    "ProfilingService",
    "RecommendationService",
    "RecommendationStore",
    "create_consumer",
    "profile_update_message",
]
