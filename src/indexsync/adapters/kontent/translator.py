"""Translate Delivery API payloads into domain entities."""

from __future__ import annotations

from typing import TYPE_CHECKING

from indexsync.domain.model import Element, ElementType, SourceEntity

from .schema import ItemPayload, ItemResponse

if TYPE_CHECKING:
    from collections.abc import Mapping

    from indexsync.domain.model import EntityGraph

    from .schema import ElementPayload

_TEXTUAL = frozenset({ElementType.TEXT, ElementType.RICH_TEXT, ElementType.URL_SLUG})


def parse_item_response(payload: Mapping[str, object] | ItemResponse) -> EntityGraph:
    """Build the entity graph for one item response, root entity first."""

    response = (
        payload if isinstance(payload, ItemResponse) else ItemResponse.model_validate(payload)
    )
    graph: dict[str, SourceEntity] = {}
    root = translate_item(response.item)
    graph[root.codename] = root
    for item in response.modular_content.values():
        entity = translate_item(item)
        graph.setdefault(entity.codename, entity)
    return graph


def translate_item(item: ItemPayload) -> SourceEntity:
    system = item.system
    return SourceEntity(
        id=system.id,
        codename=system.codename,
        language=system.language,
        entity_type=system.type,
        name=system.name,
        collection=system.collection,
        elements={
            codename: translate_element(element) for codename, element in item.elements.items()
        },
    )


def translate_element(element: ElementPayload) -> Element:
    element_type = _element_type(element.type)
    if element_type is ElementType.MODULAR_CONTENT:
        return Element(type=element_type, linked_codenames=_codenames(element.value))
    if element_type in _TEXTUAL:
        value = element.value if isinstance(element.value, str) else ""
        return Element(
            type=element_type,
            value=value,
            linked_codenames=tuple(element.modular_content),
        )
    return Element(type=ElementType.OTHER)


def _element_type(raw: str) -> ElementType:
    try:
        return ElementType(raw)
    except ValueError:
        return ElementType.OTHER


def _codenames(value: object) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(codename for codename in value if isinstance(codename, str))
