"""Translate between index records and Algolia record payloads."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from indexsync.domain.model import ContentBlock, IndexedRecordRef, IndexRecord

from .schema import ContentBlockPayload, RecordPayload, SearchHit

if TYPE_CHECKING:
    from collections.abc import Mapping

log = getLogger(__name__)


def record_to_payload(record: IndexRecord) -> dict[str, object]:
    payload = RecordPayload(
        object_id=record.object_id,
        id=record.id,
        codename=record.codename,
        name=record.name,
        language=record.language,
        type=record.entity_type,
        collection=record.collection,
        slug=record.slug,
        content=[
            ContentBlockPayload(
                id=block.id,
                codename=block.codename,
                name=block.name,
                language=block.language,
                type=block.entity_type,
                collection=block.collection,
                parents=list(block.parents),
                contents=block.contents,
            )
            for block in record.content
        ],
    )
    return payload.model_dump(by_alias=True)


def record_from_payload(payload: RecordPayload) -> IndexRecord:
    return IndexRecord(
        object_id=payload.object_id,
        id=payload.id,
        codename=payload.codename,
        language=payload.language,
        name=payload.name,
        entity_type=payload.type,
        collection=payload.collection,
        slug=payload.slug,
        content=tuple(
            ContentBlock(
                id=block.id,
                codename=block.codename,
                name=block.name,
                language=block.language,
                entity_type=block.type,
                collection=block.collection,
                parents=tuple(block.parents),
                contents=block.contents,
            )
            for block in payload.content
        ),
    )


def parse_search_hit(hit: Mapping[str, object]) -> IndexedRecordRef | None:
    """Reference a stored record, rebuilding the full record when the hit allows it.

    Hits without an object id, codename or language cannot be revisited and
    yield ``None``.
    """

    try:
        ref = SearchHit.model_validate(hit)
    except ValidationError:
        log.warning(f"Skipping unusable search hit {hit.get('objectID')!r}")
        return None
    try:
        record: IndexRecord | None = record_from_payload(RecordPayload.model_validate(hit))
    except ValidationError:
        record = None
    return IndexedRecordRef(
        object_id=ref.object_id,
        codename=ref.codename,
        language=ref.language,
        record=record,
    )
