from __future__ import annotations

from dataclasses import replace

from indexsync.domain.model import Element, ElementType, object_id_for
from indexsync.domain.reconciliation import (
    Eligible,
    Ineligible,
    OutcomeKind,
    ProjectionRejected,
    classify,
)
from tests.helpers.content import SLUG_FIELD, graph_of, make_component, make_entity


def test_missing_entity_is_ineligible() -> None:
    outcome = classify(None, {}, slug_field=SLUG_FIELD)

    assert isinstance(outcome, Ineligible)
    assert outcome.kind is OutcomeKind.INELIGIBLE


def test_type_outside_allow_list_is_ineligible() -> None:
    page = make_entity("landing", entity_type="landing_page")

    outcome = classify(page, graph_of(page), slug_field=SLUG_FIELD)

    assert isinstance(outcome, Ineligible)
    assert "landing_page" in outcome.reason


def test_custom_allow_list_admits_other_types() -> None:
    page = make_entity("landing", entity_type="landing_page")

    outcome = classify(
        page,
        graph_of(page),
        slug_field=SLUG_FIELD,
        indexable_types=frozenset({"landing_page"}),
    )

    assert isinstance(outcome, Eligible)


def test_missing_slug_element_rejects_projection() -> None:
    article = make_entity("post-1", slug=None)

    outcome = classify(article, graph_of(article), slug_field=SLUG_FIELD)

    assert isinstance(outcome, ProjectionRejected)
    assert outcome.kind is OutcomeKind.PROJECTION_REJECTED


def test_slug_field_is_taken_from_request_context() -> None:
    article = make_entity("post-1")

    outcome = classify(article, graph_of(article), slug_field="permalink")

    assert isinstance(outcome, ProjectionRejected)


def test_eligible_article_projects_flat_record() -> None:
    article = make_entity(
        "post-1",
        title="Circuit boards",
        body="<p>Solder <strong>carefully</strong></p>",
        slug="circuit-boards",
    )

    outcome = classify(article, graph_of(article), slug_field=SLUG_FIELD)

    assert isinstance(outcome, Eligible)
    record = outcome.record
    assert record.object_id == object_id_for(article.id, "en")
    assert record.codename == "post-1"
    assert record.language == "en"
    assert record.entity_type == "article"
    assert record.slug == "circuit-boards"
    assert len(record.content) == 1
    root_block = record.content[0]
    assert root_block.parents == ()
    assert root_block.contents == "Circuit boards Solder carefully"


def test_embedded_components_are_inlined_with_parent_path() -> None:
    inner = make_component("inner", text="Deep text")
    callout = make_entity(
        "callout",
        entity_type="callout",
        body="<p>Callout text</p>",
        slug=None,
        linked=["inner"],
    )
    article = make_entity("post-1", linked=["callout"])

    outcome = classify(article, graph_of(article, callout, inner), slug_field=SLUG_FIELD)

    assert isinstance(outcome, Eligible)
    blocks = {block.codename: block for block in outcome.record.content}
    assert list(blocks) == ["post-1", "callout", "inner"]
    assert blocks["callout"].parents == ("post-1",)
    assert blocks["inner"].parents == ("callout", "post-1")
    assert blocks["inner"].contents.endswith("Deep text")


def test_standalone_linked_entities_are_not_inlined() -> None:
    related = make_entity("post-2")
    article = make_entity("post-1", linked=["post-2"])

    outcome = classify(article, graph_of(article, related), slug_field=SLUG_FIELD)

    assert isinstance(outcome, Eligible)
    assert [block.codename for block in outcome.record.content] == ["post-1"]


def test_references_missing_from_graph_are_skipped() -> None:
    present = make_component("present", text="Here")
    article = make_entity("post-1", linked=["gone", "present"])

    outcome = classify(article, graph_of(article, present), slug_field=SLUG_FIELD)

    assert isinstance(outcome, Eligible)
    assert [block.codename for block in outcome.record.content] == ["post-1", "present"]


def test_cyclic_links_terminate() -> None:
    first = make_entity("first", entity_type="callout", slug=None, linked=["second"])
    second = make_entity("second", entity_type="callout", slug=None, linked=["first"])
    article = make_entity("post-1", linked=["first"])

    outcome = classify(article, graph_of(article, first, second), slug_field=SLUG_FIELD)

    assert isinstance(outcome, Eligible)
    assert [block.codename for block in outcome.record.content] == ["post-1", "first", "second"]


def test_self_reference_is_ignored() -> None:
    article = make_entity("post-1", linked=["post-1"])

    outcome = classify(article, graph_of(article), slug_field=SLUG_FIELD)

    assert isinstance(outcome, Eligible)
    assert len(outcome.record.content) == 1


def test_rich_text_components_are_linked() -> None:
    component = make_component("quote", text="Quoted")
    article = make_entity("post-1")
    elements = dict(article.elements)
    elements["body"] = Element(
        type=ElementType.RICH_TEXT,
        value='<p>Intro</p><object data-codename="quote"></object>',
        linked_codenames=("quote",),
    )
    article = replace(article, elements=elements)

    outcome = classify(article, graph_of(article, component), slug_field=SLUG_FIELD)

    assert isinstance(outcome, Eligible)
    root, quote = outcome.record.content
    assert "Intro" in root.contents
    assert "<" not in root.contents
    assert quote.codename == "quote"
