"""Errors raised while loading service settings."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Settings are present but unusable."""


class MissingConfigurationError(ConfigurationError):
    """One or more required environment variables are absent or blank."""

    def __init__(self, names: list[str]) -> None:
        self.names = sorted(names)
        super().__init__(f"Missing configuration for: {', '.join(self.names)}")


class InvalidConfigurationError(ConfigurationError):
    """An environment variable holds a value the service cannot use."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        super().__init__(f"{name} {reason}")
