from __future__ import annotations

import json
from pathlib import Path

import pytest

from indexsync.config import (
    AlgoliaConfig,
    KontentConfig,
    RetryPolicy,
    ServiceConfig,
    build_kontent_resilience,
)

DATA = Path(__file__).resolve().parent / "data"

Payload = dict[str, object]


@pytest.fixture(scope="session")
def item_response_payload() -> Payload:
    return json.loads((DATA / "kontent" / "item_response.json").read_text())


@pytest.fixture(scope="session")
def webhook_payloads() -> dict[str, Payload]:
    return json.loads((DATA / "webhooks.json").read_text())


@pytest.fixture
def kontent_config() -> KontentConfig:
    return KontentConfig(
        resilience=build_kontent_resilience(
            base_url="https://deliver.example.com",
            delivery_api_key="delivery-key",
            retry=RetryPolicy(total=0),
        ),
        environment_id="env-default",
    )


@pytest.fixture
def algolia_config() -> AlgoliaConfig:
    return AlgoliaConfig(
        api_key="algolia-key",
        retry=RetryPolicy(total=0),
        task_poll_interval_seconds=0.0,
        task_max_polls=3,
    )


@pytest.fixture
def service_config(kontent_config: KontentConfig, algolia_config: AlgoliaConfig) -> ServiceConfig:
    return ServiceConfig(
        webhook_secret="webhook-secret",  # noqa: S106
        kontent=kontent_config,
        algolia=algolia_config,
    )
