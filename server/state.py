"""Application state: stores, catalog, publisher, and the profiling/recommendation services."""

import logging
from pathlib import Path
from typing import Any, Optional

import numpy as np

from behavioral.models import BehavioralConfig

from .config import ServerConfig, get_config
from .services import (
    FirestoreProfileStore,
    InMemoryContentCatalog,
    InMemoryProfileStore,
    InMemoryRecommendationStore,
    JsonContentCatalog,
    JsonProfileStore,
    KafkaProfilePublisher,
    LoggingProfilePublisher,
    ProfileCache,
    ProfilingService,
    RecommendationService,
)

logger = logging.getLogger(__name__)


class AppState:
    """Global application state."""

    def __init__(self, config: ServerConfig):
        self.config = config
        self.algorithm_config = BehavioralConfig.from_dict(config.load_algorithm_config())

        self.profile_store = self._create_profile_store(config)
        logger.info("[startup] Profile store: %s", type(self.profile_store).__name__)
        self.catalog = self._create_catalog(config)
        logger.info("[startup] Catalog: %s", type(self.catalog).__name__)
        self.publisher = self._create_publisher(config)
        logger.info("[startup] Profile-update publisher: %s", type(self.publisher).__name__)

        self.profiling_service = ProfilingService(
            self.profile_store,
            self.publisher,
            config=self.algorithm_config,
            cache=ProfileCache(config.profile_cache_size),
        )
        self.recommendation_store = InMemoryRecommendationStore()
        self.recommendation_service = RecommendationService(
            self.catalog,
            self.recommendation_store,
            self.profiling_service.get_profile,
            config=self.algorithm_config,
            rng=np.random.default_rng(config.bandit_seed),
        )

    def _create_profile_store(self, config: ServerConfig) -> Any:
        """Create profile store (Firestore when configured, JSON file, else in-memory)."""
        if config.data_source == "firebase" and config.firebase_credentials_path:
            cred_path = Path(config.firebase_credentials_path)
            if not cred_path.is_file():
                logger.warning(
                    "[startup] Firestore profile store skipped: credentials path not found or not a file: %s", cred_path
                )
            else:
                return FirestoreProfileStore(
                    project_id=config.firebase_project_id,
                    credentials_path=cred_path,
                )
        if config.data_source == "json" and config.profiles_json_path:
            return JsonProfileStore(config.profiles_json_path)
        return InMemoryProfileStore()

    def _create_catalog(self, config: ServerConfig) -> Any:
        if config.catalog_json_path and config.catalog_json_path.is_file():
            return JsonContentCatalog(config.catalog_json_path)
        if config.catalog_json_path:
            logger.warning("[startup] Catalog file not found: %s; using empty catalog", config.catalog_json_path)
        return InMemoryContentCatalog()

    def _create_publisher(self, config: ServerConfig) -> Any:
        if config.kafka_bootstrap_servers:
            return KafkaProfilePublisher(config.kafka_settings(), topic=config.kafka_profile_updates_topic)
        return LoggingProfilePublisher()


_state: Optional[AppState] = None


def get_state() -> AppState:
    global _state
    if _state is None:
        _state = AppState(get_config())
    return _state


def set_state(state: Optional[AppState]) -> None:
    """Replace the global state (tests inject one built from an explicit config)."""
    global _state
    _state = state
