"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .feed import DEFAULT_FEED_URL, FeedConfig, get_feed_config
from .http_client import HttpClientConfig
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFAULT_FEED_URL",
    "ConfigurationError",
    "DatabaseConfig",
    "FeedConfig",
    "HttpClientConfig",
    "MissingConfigurationError",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_feed_config",
    "get_storage_config",
    "optional_env_var",
    "require_env_vars",
]
