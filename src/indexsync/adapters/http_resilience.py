"""Shared async HTTP client for the Delivery API and Algolia."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager, nullcontext
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from aiolimiter import AsyncLimiter
from httpx_retries import Retry, RetryTransport

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from indexsync.config.http_resilience import ResilienceConfig, RetryPolicy

log = getLogger(__name__)


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=tuple(policy.allowed_methods),
        status_forcelist=tuple(policy.status_forcelist),
        retry_on_exceptions=policy.retry_on_exceptions,
        backoff_jitter=policy.backoff_jitter,
    )


class ResilientClient:
    """Async client that retries transient failures and paces calls per service.

    ``transport`` replaces the network transport underneath the retry layer,
    which lets tests plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._limiter = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit
            else None
        )
        self._client = httpx.AsyncClient(
            base_url=config.base_url or "",
            timeout=config.timeout_seconds,
            headers=dict(config.default_headers or {}),
            transport=RetryTransport(
                transport=transport,  # type: ignore[arg-type]
                retry=build_retry(config.retry),
            ),
        )

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, url: str, *, params: Mapping[str, str] | None = None) -> httpx.Response:
        return await self.request("GET", url, params=params)

    async def post(self, url: str, *, json: object = None) -> httpx.Response:
        return await self.request("POST", url, json=json)

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        json: object = None,
    ) -> httpx.Response:
        async with self._pace():
            response = await self._client.request(method, url, params=params, json=json)
        log.debug(f"{self.config.name}: {method} {url} -> {response.status_code}")
        return response

    def _pace(self) -> AbstractAsyncContextManager[object]:
        if self._limiter is None:
            return nullcontext()
        return self._limiter


type ClientFactory = Callable[[ResilienceConfig], ResilientClient]


def default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class SharedClient:
    """One lazily opened ``ResilientClient`` reused by every call of an adapter.

    All calls go through the same rate limiter. The owner closes it with
    ``aclose`` once its run is over.
    """

    def __init__(self, config: ResilienceConfig, factory: ClientFactory | None = None) -> None:
        self._config = config
        self._factory = factory or default_client_factory
        self._client: ResilientClient | None = None

    @property
    def client(self) -> ResilientClient:
        if self._client is None:
            self._client = self._factory(self._config)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            client, self._client = self._client, None
            await client.aclose()
