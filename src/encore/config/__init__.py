"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_int_env, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .ingest import IngestSettings, get_ingest_settings
from .logging import configure_logging
from .spotify import (
    SPOTIFY_API_BASE_URL,
    SPOTIFY_API_VERSION,
    SpotifyConfig,
    default_spotify_resilience,
    get_spotify_config,
)
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "SPOTIFY_API_BASE_URL",
    "SPOTIFY_API_VERSION",
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "IngestSettings",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SpotifyConfig",
    "StorageConfig",
    "configure_logging",
    "default_spotify_resilience",
    "get_database_config",
    "get_ingest_settings",
    "get_spotify_config",
    "get_storage_config",
    "optional_int_env",
    "require_env_vars",
]
