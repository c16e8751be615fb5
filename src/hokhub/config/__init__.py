"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, env_path, env_text
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .notifications import NotificationConfig, get_notification_config
from .storage import (
    DatabaseConfig,
    SourceConfig,
    StorageConfig,
    get_database_config,
    get_source_config,
    get_storage_config,
)

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "NotificationConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SourceConfig",
    "StorageConfig",
    "configure_logging",
    "env_flag",
    "env_path",
    "env_text",
    "get_database_config",
    "get_notification_config",
    "get_source_config",
    "get_storage_config",
]
