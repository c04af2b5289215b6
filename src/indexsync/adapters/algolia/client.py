"""Algolia REST client acting as index query and index writer."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Self
from urllib.parse import quote

import httpx

from indexsync.adapters.http_resilience import SharedClient

from .schema import BatchResponse, ErrorResponse, SearchResponse, TaskStatusResponse
from .translator import parse_search_hit, record_to_payload

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

    from indexsync.adapters.http_resilience import ClientFactory, ResilientClient
    from indexsync.config.algolia import AlgoliaConfig
    from indexsync.domain.model import IndexedRecordRef, IndexRecord

log = getLogger(__name__)

MAX_HITS_PER_PAGE = 1000
TASK_PUBLISHED = "published"


class AlgoliaAPIError(RuntimeError):
    """Raised when an Algolia write does not complete."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class AlgoliaIndex:
    """One Algolia index, addressed by application id and index name."""

    def __init__(
        self,
        *,
        config: AlgoliaConfig,
        app_id: str,
        index_name: str,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._config = config
        self._search = SharedClient(config.search_resilience(app_id), client_factory)
        self._write = SharedClient(config.write_resilience(app_id), client_factory)
        self.index_name = index_name
        self._path = f"/1/indexes/{quote(index_name, safe='')}"

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
        await self._search.aclose()
        await self._write.aclose()

    async def find_records(self, codename: str, language: str) -> list[IndexedRecordRef]:
        """Records whose content embeds ``codename`` in ``language``, empty on failure."""

        body = {
            "query": "",
            "facetFilters": [f"content.codename:{codename}", f"language:{language}"],
            "hitsPerPage": MAX_HITS_PER_PAGE,
        }
        try:
            response = await self._search.client.post(f"{self._path}/query", json=body)
            response.raise_for_status()
            search = SearchResponse.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as exc:
            log.warning(
                f"Index query failed for {codename}/{language} in {self.index_name}: {exc!r}"
            )
            return []
        return [ref for ref in map(parse_search_hit, search.hits) if ref is not None]

    async def save_records(self, records: Sequence[IndexRecord]) -> list[str]:
        requests = [
            {"action": "updateObject", "body": record_to_payload(record)} for record in records
        ]
        return await self._batch(requests)

    async def delete_objects(self, object_ids: Sequence[str]) -> list[str]:
        requests = [
            {"action": "deleteObject", "body": {"objectID": object_id}} for object_id in object_ids
        ]
        return await self._batch(requests)

    async def _batch(self, requests: list[dict[str, object]]) -> list[str]:
        client = self._write.client
        response = await client.post(f"{self._path}/batch", json={"requests": requests})
        _raise_for_error(response)
        batch = BatchResponse.model_validate(response.json())
        await self._wait_for_task(client, batch.task_id)
        log.debug(f"Algolia batch {batch.task_id} published {len(batch.object_ids)} object(s)")
        return batch.object_ids

    async def _wait_for_task(self, client: ResilientClient, task_id: int) -> None:
        for _ in range(self._config.task_max_polls):
            response = await client.get(f"{self._path}/task/{task_id}")
            _raise_for_error(response)
            if TaskStatusResponse.model_validate(response.json()).status == TASK_PUBLISHED:
                return
            await asyncio.sleep(self._config.task_poll_interval_seconds)
        raise AlgoliaAPIError(
            f"Task {task_id} on {self.index_name} not published after "
            f"{self._config.task_max_polls} polls"
        )


def _raise_for_error(response: httpx.Response) -> None:
    if response.is_success:
        return
    try:
        message = ErrorResponse.model_validate(response.json()).message
    except ValueError:
        message = response.text
    log.error(f"Algolia API error {response.status_code}: {message}")
    raise AlgoliaAPIError(message or "Algolia request failed", status=response.status_code)
