"""Orchestrator for index reconciliation.

The engine anchors on what the index currently holds for each notified entity,
so deletions and type changes upstream always revisit the stale records. Reads
for all notifications run concurrently; the index is written at most twice, at
the end of the run.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from itertools import chain
from logging import getLogger
from typing import TYPE_CHECKING

from .contracts import EntityAction, Eligible
from .eligibility import DEFAULT_INDEXABLE_TYPES, classify
from .plan import MutationSet, merge_actions

if TYPE_CHECKING:
    from collections.abc import Sequence

    from indexsync.domain.model import ChangeNotification, IndexedRecordRef
    from indexsync.domain.ports import ContentFetcher, IndexQuery, IndexWriter

    from .contracts import Outcome

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationSummary:
    """Object ids the index acknowledged during one run."""

    deleted_object_ids: list[str] = field(default_factory=list["str"])
    reindexed_object_ids: list[str] = field(default_factory=list["str"])

    def as_payload(self) -> dict[str, list[str]]:
        return {
            "deletedObjectIds": list(self.deleted_object_ids),
            "reIndexedObjectIds": list(self.reindexed_object_ids),
        }


@dataclass(slots=True, kw_only=True)
class Reconciler:
    """Turn a notification batch into index mutations and apply them."""

    fetcher: ContentFetcher
    index_query: IndexQuery
    index_writer: IndexWriter
    slug_field: str
    indexable_types: frozenset[str] = DEFAULT_INDEXABLE_TYPES

    async def reconcile(self, notifications: Sequence[ChangeNotification]) -> ReconciliationSummary:
        """Plan mutations for ``notifications`` and write them to the index."""

        mutations = await self.plan(notifications)
        summary = ReconciliationSummary()
        if mutations.records_to_upsert:
            summary.reindexed_object_ids = await self.index_writer.save_records(
                mutations.records_to_upsert
            )
        if mutations.object_ids_to_remove:
            summary.deleted_object_ids = await self.index_writer.delete_objects(
                mutations.object_ids_to_remove
            )
        log.info(
            f"Reconciled {len(notifications)} notification(s): "
            f"reindexed={len(summary.reindexed_object_ids)}, "
            f"deleted={len(summary.deleted_object_ids)}"
        )
        return summary

    async def plan(self, notifications: Sequence[ChangeNotification]) -> MutationSet:
        """Compute the merged mutation set without touching the index."""

        actions = await asyncio.gather(
            *(self._reconcile_notification(notification) for notification in notifications)
        )
        return merge_actions(chain.from_iterable(actions))

    async def _reconcile_notification(
        self, notification: ChangeNotification
    ) -> list[EntityAction]:
        key = (notification.codename, notification.language)
        existing = await self.index_query.find_records(*key)

        revisits = [
            self._revisit(ref, environment_id=notification.environment_id) for ref in existing
        ]
        # Hits may only be records that embed the entity; it can still need its own record.
        if not any((ref.codename, ref.language) == key for ref in existing):
            revisits.append(self._index_unanchored(notification))
        return list(await asyncio.gather(*revisits))

    async def _index_unanchored(self, notification: ChangeNotification) -> EntityAction:
        outcome = await self._classify(
            notification.codename,
            notification.language,
            environment_id=notification.environment_id,
        )
        if isinstance(outcome, Eligible):
            return EntityAction(records_to_upsert=(outcome.record,))
        log.debug(f"Skipping unindexed {notification.codename}/{notification.language}: {outcome}")
        return EntityAction()

    async def _revisit(self, ref: IndexedRecordRef, *, environment_id: str | None) -> EntityAction:
        outcome = await self._classify(ref.codename, ref.language, environment_id=environment_id)
        if not isinstance(outcome, Eligible):
            log.debug(f"Removing {ref.object_id} ({ref.codename}/{ref.language}): {outcome}")
            return EntityAction(object_ids_to_remove=(ref.object_id,))

        record = outcome.record
        if record.object_id != ref.object_id:
            return EntityAction(records_to_upsert=(record,), object_ids_to_remove=(ref.object_id,))
        if record == ref.record:
            return EntityAction()
        return EntityAction(records_to_upsert=(record,))

    async def _classify(
        self, codename: str, language: str, *, environment_id: str | None
    ) -> Outcome:
        graph = await self.fetcher.fetch(codename, language, environment_id=environment_id)
        return classify(
            graph.get(codename),
            graph,
            slug_field=self.slug_field,
            indexable_types=self.indexable_types,
        )
