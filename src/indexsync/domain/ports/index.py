"""Ports for reading from and writing to the search index."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from indexsync.domain.model import IndexedRecordRef, IndexRecord


@runtime_checkable
class IndexQuery(Protocol):
    """Find the records that currently represent an entity.

    An unavailable index yields an empty result rather than an error.
    """

    async def find_records(self, codename: str, language: str) -> Sequence[IndexedRecordRef]: ...


@runtime_checkable
class IndexWriter(Protocol):
    """Apply batch mutations; both operations are idempotent.

    Each returns the object ids the index acknowledged. Failures propagate.
    """

    async def save_records(self, records: Sequence[IndexRecord]) -> list[str]: ...

    async def delete_objects(self, object_ids: Sequence[str]) -> list[str]: ...


__all__ = ["IndexQuery", "IndexWriter"]
