"""Environment variable access for configuration loaders."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence


def optional_env_var(name: str, default: str | None = None) -> str | None:
    """Return a stripped environment variable, treating blank values as unset."""

    value = os.getenv(name, "").strip()
    return value or default


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Return every named variable, or raise naming all that are missing at once."""

    values = {name: optional_env_var(name) for name in names}
    missing = [name for name, value in values.items() if value is None]
    if missing:
        raise MissingConfigurationError(missing)
    return {name: value for name, value in values.items() if value is not None}
