"""Flattened search records and references to records already indexed."""

from __future__ import annotations

from dataclasses import dataclass


def object_id_for(entity_id: str, language: str) -> str:
    """Index identifier for one language variant of an entity."""

    return f"{entity_id}_{language}"


@dataclass(frozen=True, slots=True, kw_only=True)
class ContentBlock:
    """Searchable text of one entity inlined into a record."""

    id: str
    codename: str
    name: str
    language: str
    entity_type: str
    collection: str
    parents: tuple[str, ...] = ()
    contents: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class IndexRecord:
    object_id: str
    id: str
    codename: str
    language: str
    name: str
    entity_type: str
    collection: str
    slug: str
    content: tuple[ContentBlock, ...] = ()

    @property
    def key(self) -> tuple[str, str]:
        return self.codename, self.language


@dataclass(frozen=True, slots=True, kw_only=True)
class IndexedRecordRef:
    """A record currently stored in the index.

    ``record`` carries the stored document when the index returned enough of it
    to rebuild one; it lets reconciliation skip rewriting unchanged records.
    """

    object_id: str
    codename: str
    language: str
    record: IndexRecord | None = None
