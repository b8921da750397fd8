"""Application configuration helpers."""

from __future__ import annotations

from .catalog import CatalogSourceConfig, get_catalog_config
from .collection import get_partner_collector_settings, get_solution_collector_settings
from .env import env_float, env_int, env_str
from .errors import ConfigurationError, InvalidConfigurationValueError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import StorageConfig, get_storage_config

__all__ = [
    "CatalogSourceConfig",
    "ConfigurationError",
    "InvalidConfigurationValueError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "env_float",
    "env_int",
    "env_str",
    "get_catalog_config",
    "get_partner_collector_settings",
    "get_solution_collector_settings",
    "get_storage_config",
]
