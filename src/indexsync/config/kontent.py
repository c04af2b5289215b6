"""Kontent.ai Delivery API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

KONTENT_DELIVERY_BASE_URL = "https://deliver.kontent.ai"
KONTENT_TIMEOUT_SECONDS = 15.0
WAIT_FOR_NEW_CONTENT_HEADER = "X-KC-Wait-For-Loading-New-Content"


@dataclass(frozen=True, slots=True)
class KontentConfig:
    """Holds Delivery API configuration values.

    ``environment_id`` is only a fallback; webhook notifications name the
    environment they originate from.
    """

    resilience: ResilienceConfig
    environment_id: str | None = None


def build_kontent_resilience(
    *,
    base_url: str = KONTENT_DELIVERY_BASE_URL,
    delivery_api_key: str | None = None,
    retry: RetryPolicy | None = None,
) -> ResilienceConfig:
    # Responses must reflect the just-published revision, never a CDN copy.
    headers = {WAIT_FOR_NEW_CONTENT_HEADER: "true"}
    if delivery_api_key:
        headers["Authorization"] = f"Bearer {delivery_api_key}"
    return ResilienceConfig(
        name="kontent",
        base_url=base_url,
        timeout_seconds=KONTENT_TIMEOUT_SECONDS,
        retry=retry or RetryPolicy(),
        ratelimit=RateLimit(max_calls=50, per_seconds=1.0),
        default_headers=headers,
    )


def get_kontent_config() -> KontentConfig:
    return KontentConfig(
        resilience=build_kontent_resilience(
            base_url=optional_env_var("KONTENT_DELIVERY_BASE_URL", KONTENT_DELIVERY_BASE_URL)
            or KONTENT_DELIVERY_BASE_URL,
            delivery_api_key=optional_env_var("KONTENT_DELIVERY_API_KEY"),
        ),
        environment_id=optional_env_var("KONTENT_ENVIRONMENT_ID"),
    )
