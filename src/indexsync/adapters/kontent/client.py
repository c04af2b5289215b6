"""Delivery API client used as the content fetcher."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Self
from urllib.parse import quote

import httpx

from indexsync.adapters.http_resilience import SharedClient

from .schema import ItemResponse
from .translator import parse_item_response

if TYPE_CHECKING:
    from types import TracebackType

    from indexsync.adapters.http_resilience import ClientFactory, ResilientClient
    from indexsync.config.kontent import KontentConfig
    from indexsync.domain.model import EntityGraph

log = getLogger(__name__)

# Large enough to cover any practical nesting while guaranteeing termination.
LINKED_ITEMS_DEPTH = 100


class KontentAPIError(RuntimeError):
    """Raised when the Delivery API returns an unexpected response."""


class KontentFetcher:
    """Fetch an item with its linked items, degrading to an empty graph on failure."""

    def __init__(
        self,
        *,
        config: KontentConfig,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._config = config
        self._http = SharedClient(config.resilience, client_factory)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def fetch(
        self,
        codename: str,
        language: str,
        *,
        environment_id: str | None = None,
    ) -> EntityGraph:
        environment = environment_id or self._config.environment_id
        if environment is None:
            log.warning(f"No environment id to fetch {codename}/{language} from")
            return {}

        try:
            response = await self._perform_request(
                client=self._http.client,
                path=f"/{quote(environment)}/items/{quote(codename)}",
                params={"language": language, "depth": str(LINKED_ITEMS_DEPTH)},
            )
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == httpx.codes.NOT_FOUND:
                log.info(f"Content item {codename}/{language} not found")
            else:
                log.warning(
                    f"Delivery API error {exc.response.status_code} for {codename}/{language}"
                )
            return {}
        except (httpx.HTTPError, KontentAPIError, ValueError) as exc:
            log.warning(f"Failed to fetch content item {codename}/{language}: {exc!r}")
            return {}

        return parse_item_response(response)

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        path: str,
        params: dict[str, str],
    ) -> ItemResponse:
        response = await client.get(path, params=params)
        response.raise_for_status()

        payload = response.json()
        if not isinstance(payload, dict) or "item" not in payload:
            raise KontentAPIError("Unexpected Delivery API response payload")

        return ItemResponse.model_validate(payload)
