"""Process-wide service configuration, loaded once at startup."""

from __future__ import annotations

from dataclasses import dataclass

from indexsync.domain.reconciliation.eligibility import DEFAULT_INDEXABLE_TYPES

from .algolia import AlgoliaConfig
from .env import optional_env_var, require_env_vars
from .errors import InvalidConfigurationError
from .kontent import KontentConfig, get_kontent_config

REQUIRED_ENV_VARS = ("KONTENT_SECRET", "ALGOLIA_API_KEY")


@dataclass(frozen=True, slots=True)
class ServiceConfig:
    webhook_secret: str
    kontent: KontentConfig
    algolia: AlgoliaConfig
    indexable_types: frozenset[str] = DEFAULT_INDEXABLE_TYPES


def parse_indexable_types(raw: str | None) -> frozenset[str]:
    """Parse a comma-separated allow-list, falling back to the default types."""

    if raw is None:
        return DEFAULT_INDEXABLE_TYPES
    types = frozenset(part.strip() for part in raw.split(",") if part.strip())
    if not types:
        raise InvalidConfigurationError(
            "INDEXSYNC_INDEXABLE_TYPES", "must name at least one content type"
        )
    return types


def get_service_config() -> ServiceConfig:
    values = require_env_vars(REQUIRED_ENV_VARS)
    return ServiceConfig(
        webhook_secret=values["KONTENT_SECRET"],
        kontent=get_kontent_config(),
        algolia=AlgoliaConfig(api_key=values["ALGOLIA_API_KEY"]),
        indexable_types=parse_indexable_types(optional_env_var("INDEXSYNC_INDEXABLE_TYPES")),
    )
