"""Domain model for content entities, index records and notifications."""

from __future__ import annotations

from .content import Element, ElementType, EntityGraph, SourceEntity
from .index import ContentBlock, IndexedRecordRef, IndexRecord, object_id_for
from .notifications import ChangeNotification

__all__ = [
    "ChangeNotification",
    "ContentBlock",
    "Element",
    "ElementType",
    "EntityGraph",
    "IndexRecord",
    "IndexedRecordRef",
    "SourceEntity",
    "object_id_for",
]
