"""Algolia configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .http_resilience import ResilienceConfig, RetryPolicy

ALGOLIA_TIMEOUT_SECONDS = 10.0
ALGOLIA_TASK_POLL_INTERVAL_SECONDS = 0.5
ALGOLIA_TASK_MAX_POLLS = 120


@dataclass(frozen=True, slots=True)
class AlgoliaConfig:
    """Credentials and client behaviour shared by every Algolia application.

    The application id and index name arrive with each webhook request, so
    resilience settings are derived per application.
    """

    api_key: str
    timeout_seconds: float = ALGOLIA_TIMEOUT_SECONDS
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    task_poll_interval_seconds: float = ALGOLIA_TASK_POLL_INTERVAL_SECONDS
    task_max_polls: int = ALGOLIA_TASK_MAX_POLLS

    def search_resilience(self, app_id: str) -> ResilienceConfig:
        return self._resilience(app_id, host=f"https://{app_id}-dsn.algolia.net", kind="search")

    def write_resilience(self, app_id: str) -> ResilienceConfig:
        return self._resilience(app_id, host=f"https://{app_id}.algolia.net", kind="write")

    def _resilience(self, app_id: str, *, host: str, kind: str) -> ResilienceConfig:
        return ResilienceConfig(
            name=f"algolia-{kind}",
            base_url=host,
            timeout_seconds=self.timeout_seconds,
            retry=self.retry,
            default_headers={
                "X-Algolia-Application-Id": app_id,
                "X-Algolia-API-Key": self.api_key,
            },
        )
