"""Application configuration helpers."""

from __future__ import annotations

from .algolia import AlgoliaConfig
from .env import optional_env_var, require_env_vars
from .errors import (
    ConfigurationError,
    InvalidConfigurationError,
    MissingConfigurationError,
)
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .kontent import KontentConfig, build_kontent_resilience, get_kontent_config
from .logging import configure_logging
from .service import ServiceConfig, get_service_config, parse_indexable_types

__all__ = [
    "AlgoliaConfig",
    "ConfigurationError",
    "InvalidConfigurationError",
    "KontentConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "ServiceConfig",
    "build_kontent_resilience",
    "configure_logging",
    "get_kontent_config",
    "get_service_config",
    "optional_env_var",
    "parse_indexable_types",
    "require_env_vars",
]
