"""Canonical content entities as delivered by the content source."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum


class ElementType(StrEnum):
    """Element kinds the projection step distinguishes."""

    TEXT = "text"
    RICH_TEXT = "rich_text"
    URL_SLUG = "url_slug"
    MODULAR_CONTENT = "modular_content"
    OTHER = "other"


@dataclass(frozen=True, slots=True, kw_only=True)
class Element:
    """One element of a content entity.

    ``value`` is the textual value for text-like elements and empty otherwise.
    ``linked_codenames`` lists embedded entities for rich text and linked items.
    """

    type: ElementType
    value: str = ""
    linked_codenames: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class SourceEntity:
    id: str
    codename: str
    language: str
    entity_type: str
    name: str = ""
    collection: str = "default"
    elements: Mapping[str, Element] = field(default_factory=dict["str", "Element"])

    def linked_codenames(self) -> tuple[str, ...]:
        """Codenames of embedded entities in element order, without repeats."""

        ordered: dict[str, None] = {}
        for element in self.elements.values():
            for codename in element.linked_codenames:
                ordered.setdefault(codename, None)
        return tuple(ordered)


# Root entity plus everything reachable from it within the fetch depth bound.
type EntityGraph = Mapping[str, SourceEntity]
