from __future__ import annotations

import asyncio

import pytest

from indexsync.domain.model import ChangeNotification, IndexedRecordRef, object_id_for
from indexsync.domain.reconciliation import Reconciler
from tests.helpers.content import SLUG_FIELD, make_component, make_entity
from tests.helpers.fakes import FakeContentFetcher, InMemoryIndex


def _reconciler(fetcher: FakeContentFetcher, index: InMemoryIndex) -> Reconciler:
    return Reconciler(
        fetcher=fetcher,
        index_query=index,
        index_writer=index,
        slug_field=SLUG_FIELD,
    )


def _notify(codename: str, language: str = "en") -> ChangeNotification:
    return ChangeNotification(codename=codename, language=language, environment_id="env-1")


def _index_entities(fetcher: FakeContentFetcher, index: InMemoryIndex, *codenames: str) -> None:
    asyncio.run(_reconciler(fetcher, index).reconcile([_notify(c) for c in codenames]))


def test_new_article_is_indexed() -> None:
    fetcher = FakeContentFetcher()
    fetcher.put(make_entity("post-1"))
    index = InMemoryIndex()

    mutations = asyncio.run(_reconciler(fetcher, index).plan([_notify("post-1")]))
    summary = asyncio.run(_reconciler(fetcher, index).reconcile([_notify("post-1")]))

    expected_id = object_id_for("id-post-1", "en")
    assert [record.codename for record in mutations.records_to_upsert] == ["post-1"]
    assert mutations.object_ids_to_remove == ()
    assert summary.reindexed_object_ids == [expected_id]
    assert summary.deleted_object_ids == []
    assert summary.as_payload() == {"deletedObjectIds": [], "reIndexedObjectIds": [expected_id]}
    assert fetcher.calls[0] == ("post-1", "en", "env-1")


def test_deleted_entity_removes_existing_record() -> None:
    fetcher = FakeContentFetcher()
    index = InMemoryIndex(
        extra_refs=[IndexedRecordRef(object_id="abc123", codename="post-2", language="en")]
    )

    mutations = asyncio.run(_reconciler(fetcher, index).plan([_notify("post-2")]))

    assert mutations.records_to_upsert == ()
    assert mutations.object_ids_to_remove == ("abc123",)


def test_deleted_entity_summary_reports_removal() -> None:
    fetcher = FakeContentFetcher()
    fetcher.put(make_entity("post-2"))
    index = InMemoryIndex()
    _index_entities(fetcher, index, "post-2")
    fetcher.remove("post-2")

    summary = asyncio.run(_reconciler(fetcher, index).reconcile([_notify("post-2")]))

    assert summary.deleted_object_ids == [object_id_for("id-post-2", "en")]
    assert summary.reindexed_object_ids == []
    assert index.records == {}


def test_unindexed_ineligible_entity_produces_nothing() -> None:
    fetcher = FakeContentFetcher()
    fetcher.put(make_entity("home", entity_type="landing_page"), make_entity("draft", slug=None))
    index = InMemoryIndex()
    batch = [_notify("home"), _notify("draft")]

    summary = asyncio.run(_reconciler(fetcher, index).reconcile(batch))

    assert summary.as_payload() == {"deletedObjectIds": [], "reIndexedObjectIds": []}
    assert index.saved_batches == []
    assert index.deleted_batches == []


def test_type_change_removes_previously_indexed_record() -> None:
    fetcher = FakeContentFetcher()
    fetcher.put(make_entity("post-1"))
    index = InMemoryIndex()
    _index_entities(fetcher, index, "post-1")
    fetcher.put(make_entity("post-1", entity_type="landing_page"))

    mutations = asyncio.run(_reconciler(fetcher, index).plan([_notify("post-1")]))

    assert mutations.records_to_upsert == ()
    assert mutations.object_ids_to_remove == (object_id_for("id-post-1", "en"),)


def test_slug_removal_removes_previously_indexed_record() -> None:
    fetcher = FakeContentFetcher()
    fetcher.put(make_entity("post-1"))
    index = InMemoryIndex()
    _index_entities(fetcher, index, "post-1")
    fetcher.put(make_entity("post-1", slug=None))

    mutations = asyncio.run(_reconciler(fetcher, index).plan([_notify("post-1")]))

    assert mutations.object_ids_to_remove == (object_id_for("id-post-1", "en"),)


def test_second_run_on_converged_index_is_empty() -> None:
    fetcher = FakeContentFetcher()
    fetcher.put(make_entity("post-1"), make_entity("post-2"))
    index = InMemoryIndex()
    batch = [_notify("post-1"), _notify("post-2")]
    reconciler = _reconciler(fetcher, index)

    asyncio.run(reconciler.reconcile(batch))
    mutations = asyncio.run(reconciler.plan(batch))
    summary = asyncio.run(reconciler.reconcile(batch))

    assert mutations.is_empty
    assert summary.as_payload() == {"deletedObjectIds": [], "reIndexedObjectIds": []}
    assert len(index.saved_batches) == 1


def test_changed_content_is_reindexed_in_place() -> None:
    fetcher = FakeContentFetcher()
    fetcher.put(make_entity("post-1", title="Before"))
    index = InMemoryIndex()
    _index_entities(fetcher, index, "post-1")
    fetcher.put(make_entity("post-1", title="After"))

    mutations = asyncio.run(_reconciler(fetcher, index).plan([_notify("post-1")]))

    assert [record.name for record in mutations.records_to_upsert] == ["After"]
    assert mutations.object_ids_to_remove == ()


def test_duplicate_notifications_yield_single_upsert() -> None:
    fetcher = FakeContentFetcher()
    fetcher.put(make_entity("post-1"))
    index = InMemoryIndex()

    mutations = asyncio.run(
        _reconciler(fetcher, index).plan([_notify("post-1"), _notify("post-1")])
    )

    assert [record.codename for record in mutations.records_to_upsert] == ["post-1"]
    assert mutations.object_ids_to_remove == ()


def test_duplicate_stale_entries_collapse_to_one_upsert() -> None:
    fetcher = FakeContentFetcher()
    fetcher.put(make_entity("post-1"))
    current_id = object_id_for("id-post-1", "en")
    index = InMemoryIndex(
        extra_refs=[
            IndexedRecordRef(object_id=current_id, codename="post-1", language="en"),
            IndexedRecordRef(object_id="legacy-post-1", codename="post-1", language="en"),
        ]
    )

    mutations = asyncio.run(
        _reconciler(fetcher, index).plan([_notify("post-1"), _notify("post-1")])
    )

    assert [record.object_id for record in mutations.records_to_upsert] == [current_id]
    assert mutations.object_ids_to_remove == ("legacy-post-1",)


def test_component_change_reindexes_embedding_article() -> None:
    fetcher = FakeContentFetcher()
    fetcher.put(make_entity("post-1", linked=["quote"]), make_component("quote", text="Old"))
    index = InMemoryIndex()
    _index_entities(fetcher, index, "post-1")
    fetcher.put(make_component("quote", text="New"))

    mutations = asyncio.run(_reconciler(fetcher, index).plan([_notify("quote")]))

    assert [record.codename for record in mutations.records_to_upsert] == ["post-1"]
    quote_block = mutations.records_to_upsert[0].content[1]
    assert quote_block.codename == "quote"
    assert quote_block.contents.endswith("New")


def test_failing_fetch_only_affects_its_notification() -> None:
    fetcher = FakeContentFetcher()
    fetcher.put(make_entity("post-1"), make_entity("post-2"), make_entity("post-3"))
    index = InMemoryIndex(
        extra_refs=[IndexedRecordRef(object_id="old-3", codename="post-3", language="en")]
    )
    fetcher.remove("post-3")
    fetcher.failing.add("post-2")

    summary = asyncio.run(
        _reconciler(fetcher, index).reconcile(
            [_notify("post-1"), _notify("post-2"), _notify("post-3")]
        )
    )

    assert summary.reindexed_object_ids == [object_id_for("id-post-1", "en")]
    assert summary.deleted_object_ids == ["old-3"]


def test_language_variants_are_reconciled_independently() -> None:
    fetcher = FakeContentFetcher()
    fetcher.put(make_entity("post-1", language="en"), make_entity("post-1", language="de"))
    index = InMemoryIndex()

    summary = asyncio.run(
        _reconciler(fetcher, index).reconcile([_notify("post-1", "en"), _notify("post-1", "de")])
    )

    assert summary.reindexed_object_ids == [
        object_id_for("id-post-1", "en"),
        object_id_for("id-post-1", "de"),
    ]


def test_write_failure_propagates() -> None:
    fetcher = FakeContentFetcher()
    fetcher.put(make_entity("post-1"))
    index = InMemoryIndex(fail_writes=True)

    with pytest.raises(RuntimeError, match="index unavailable"):
        asyncio.run(_reconciler(fetcher, index).reconcile([_notify("post-1")]))


def test_inlined_entity_gaining_a_slug_gets_its_own_record() -> None:
    fetcher = FakeContentFetcher()
    fetcher.put(make_entity("post-1", linked=["news"]), make_entity("news", slug=None))
    index = InMemoryIndex()
    _index_entities(fetcher, index, "post-1")
    fetcher.put(make_entity("news"))

    mutations = asyncio.run(_reconciler(fetcher, index).plan([_notify("news")]))

    upserts = {record.codename: record for record in mutations.records_to_upsert}
    assert set(upserts) == {"post-1", "news"}
    assert [block.codename for block in upserts["post-1"].content] == ["post-1"]
    assert upserts["news"].object_id == object_id_for("id-news", "en")
    assert mutations.object_ids_to_remove == ()
