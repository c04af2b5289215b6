"""Merge per-entity actions into one mutation set for a reconciliation run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from indexsync.domain.model import IndexRecord

    from .contracts import EntityAction


@dataclass(frozen=True, slots=True)
class MutationSet:
    """Deduplicated index mutations.

    No object id is both upserted and removed: a record being re-indexed wins
    over a stale removal of the same target.
    """

    records_to_upsert: tuple[IndexRecord, ...] = ()
    object_ids_to_remove: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.records_to_upsert and not self.object_ids_to_remove

    def as_payload(self) -> dict[str, list[str]]:
        return {
            "recordsToUpsert": [record.object_id for record in self.records_to_upsert],
            "objectIdsToRemove": list(self.object_ids_to_remove),
        }


def merge_actions(actions: Iterable[EntityAction]) -> MutationSet:
    """Union all actions; later records replace earlier ones for the same entity.

    Codenames are unique within a language, so records are keyed by
    ``(codename, language)``.
    """

    records: dict[tuple[str, str], IndexRecord] = {}
    removals: dict[str, None] = {}
    for action in actions:
        for record in action.records_to_upsert:
            records[record.key] = record
        for object_id in action.object_ids_to_remove:
            removals.setdefault(object_id, None)

    upserted_ids = {record.object_id for record in records.values()}
    return MutationSet(
        records_to_upsert=tuple(records.values()),
        object_ids_to_remove=tuple(
            object_id for object_id in removals if object_id not in upserted_ids
        ),
    )
