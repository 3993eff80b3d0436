"""
Server Configuration

Loads configuration from environment variables and provides defaults.
Reads the project-root .env file using python-dotenv.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

# Single .env at project root for server and consumer
_root_env = BASE_DIR / ".env"
if _root_env.exists():
    load_dotenv(_root_env)

DATA_SOURCES = ("memory", "json", "firebase")


@dataclass
class ServerConfig:
    """Server configuration."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Data source: "memory" | "json" | "firebase"
    data_source: str = "memory"
    # When data_source=json: profile store file and catalog file
    profiles_json_path: Optional[Path] = None
    catalog_json_path: Optional[Path] = None
    # When data_source=firebase: path to service account JSON and optional project id
    firebase_credentials_path: Optional[Path] = None
    firebase_project_id: Optional[str] = None

    # Kafka (event ingress and profile-update egress)
    kafka_bootstrap_servers: Optional[str] = None
    kafka_api_key: Optional[str] = None
    kafka_api_secret: Optional[str] = None
    kafka_events_topic: str = "raw-behavioral-events"
    kafka_profile_updates_topic: str = "profile-updates"
    kafka_group_id: str = "behavioral-profiler"

    # Algorithm
    algorithm_config_path: Optional[Path] = None
    # Fixed seed makes bandit exploration reproducible
    bandit_seed: Optional[int] = None
    profile_cache_size: int = 10_000

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        data_source = os.getenv("DATA_SOURCE", "").strip().lower() or "memory"
        if data_source not in DATA_SOURCES:
            data_source = "memory"

        def _path_env(key: str, default: Optional[Path] = None) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return default
            p = Path(v)
            return p if p.is_absolute() else (BASE_DIR / p).resolve()

        seed = os.getenv("BANDIT_SEED", "").strip()
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            data_source=data_source,
            profiles_json_path=_path_env("PROFILES_JSON_PATH", BASE_DIR / "data" / "profiles.json"),
            catalog_json_path=_path_env("CATALOG_JSON_PATH"),
            firebase_credentials_path=_path_env("FIREBASE_CREDENTIALS_PATH") or _path_env("GOOGLE_APPLICATION_CREDENTIALS"),
            firebase_project_id=os.getenv("FIREBASE_PROJECT_ID") or None,
            kafka_bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS") or None,
            kafka_api_key=os.getenv("KAFKA_API_KEY") or None,
            kafka_api_secret=os.getenv("KAFKA_API_SECRET") or None,
            kafka_events_topic=os.getenv("KAFKA_EVENTS_TOPIC", "raw-behavioral-events"),
            kafka_profile_updates_topic=os.getenv("KAFKA_PROFILE_UPDATES_TOPIC", "profile-updates"),
            kafka_group_id=os.getenv("KAFKA_GROUP_ID", "behavioral-profiler"),
            algorithm_config_path=_path_env("ALGORITHM_CONFIG_PATH"),
            bandit_seed=int(seed) if seed else None,
            profile_cache_size=int(os.getenv("PROFILE_CACHE_SIZE", "10000")),
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []
        if self.data_source == "json" and not self.catalog_json_path:
            errors.append("CATALOG_JSON_PATH is required when DATA_SOURCE=json")
        if self.data_source == "firebase" and not self.firebase_credentials_path:
            errors.append("FIREBASE_CREDENTIALS_PATH is required when DATA_SOURCE=firebase")
        if self.algorithm_config_path and not self.algorithm_config_path.is_file():
            errors.append(f"Algorithm config not found: {self.algorithm_config_path}")
        return len(errors) == 0, errors

    def load_algorithm_config(self) -> Dict:
        """Raw algorithm config dict from ALGORITHM_CONFIG_PATH, or {} when unset."""
        if not self.algorithm_config_path:
            return {}
        with open(self.algorithm_config_path) as f:
            return json.load(f)

    def kafka_settings(self) -> Dict[str, str]:
        """Common confluent-kafka client settings (SASL when an API key is set)."""
        settings = {"bootstrap.servers": self.kafka_bootstrap_servers or "localhost:9092"}
        if self.kafka_api_key and self.kafka_api_secret:
            settings.update({
                "security.protocol": "SASL_SSL",
                "sasl.mechanisms": "PLAIN",
                "sasl.username": self.kafka_api_key,
                "sasl.password": self.kafka_api_secret,
            })
        return settings


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
