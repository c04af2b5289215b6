"""Eligibility gate and projection of content entities into index records.

Everything here is pure: the fetched graph is the only source of linked data.
References missing from the graph are skipped so a partial record still gets
indexed.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from indexsync.domain.model import ContentBlock, ElementType, IndexRecord, object_id_for

from .contracts import Eligible, Ineligible, ProjectionRejected

if TYPE_CHECKING:
    from collections.abc import Iterator

    from indexsync.domain.model import EntityGraph, SourceEntity

    from .contracts import Outcome

DEFAULT_INDEXABLE_TYPES: frozenset[str] = frozenset({"article", "product"})

_HTML_TAG = re.compile(r"<[^>]*>?")
_TEXT_ELEMENTS = frozenset({ElementType.TEXT, ElementType.RICH_TEXT})


def classify(
    entity: SourceEntity | None,
    graph: EntityGraph,
    *,
    slug_field: str,
    indexable_types: frozenset[str] = DEFAULT_INDEXABLE_TYPES,
) -> Outcome:
    """Decide whether ``entity`` belongs in the index and project it if so."""

    if entity is None:
        return Ineligible(reason="entity not found")
    if entity.entity_type not in indexable_types:
        return Ineligible(reason=f"type '{entity.entity_type}' is not indexable")
    if not is_standalone(entity, slug_field=slug_field):
        return ProjectionRejected(reason=f"missing slug element '{slug_field}'")
    return Eligible(record=project_record(entity, graph, slug_field=slug_field))


def is_standalone(entity: SourceEntity, *, slug_field: str) -> bool:
    """Entities with their own slug get their own record instead of being inlined."""

    return slug_field in entity.elements


def project_record(entity: SourceEntity, graph: EntityGraph, *, slug_field: str) -> IndexRecord:
    return IndexRecord(
        object_id=object_id_for(entity.id, entity.language),
        id=entity.id,
        codename=entity.codename,
        language=entity.language,
        name=entity.name,
        entity_type=entity.entity_type,
        collection=entity.collection,
        slug=entity.elements[slug_field].value,
        content=tuple(_content_blocks(entity, graph, parents=(), slug_field=slug_field)),
    )


def _content_blocks(
    entity: SourceEntity,
    graph: EntityGraph,
    *,
    parents: tuple[str, ...],
    slug_field: str,
) -> Iterator[ContentBlock]:
    yield ContentBlock(
        id=entity.id,
        codename=entity.codename,
        name=entity.name,
        language=entity.language,
        entity_type=entity.entity_type,
        collection=entity.collection,
        parents=parents,
        contents=_text_contents(entity),
    )

    # nearest ancestor first
    path = (entity.codename, *parents)
    for codename in entity.linked_codenames():
        if codename in path:
            continue
        child = graph.get(codename)
        if child is None or is_standalone(child, slug_field=slug_field):
            continue
        yield from _content_blocks(child, graph, parents=path, slug_field=slug_field)


def _text_contents(entity: SourceEntity) -> str:
    texts: list[str] = []
    for element in entity.elements.values():
        if element.type not in _TEXT_ELEMENTS:
            continue
        text = element.value
        if element.type is ElementType.RICH_TEXT:
            text = _HTML_TAG.sub("", text)
        if text.strip():
            texts.append(text.strip())
    return " ".join(texts)
