"""Ports for fetching content from the upstream source."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from indexsync.domain.model import EntityGraph


@runtime_checkable
class ContentFetcher(Protocol):
    """Retrieve one entity and its linked entities.

    Implementations never raise for a missing entity or an unavailable
    source: they return an empty graph, which callers treat as "not found".
    """

    async def fetch(
        self,
        codename: str,
        language: str,
        *,
        environment_id: str | None = None,
    ) -> EntityGraph: ...


__all__ = ["ContentFetcher"]
