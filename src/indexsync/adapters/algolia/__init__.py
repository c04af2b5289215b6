"""Public interface for the Algolia adapter."""

from __future__ import annotations

from .client import AlgoliaAPIError, AlgoliaIndex
from .schema import RecordPayload, SearchResponse
from .translator import parse_search_hit, record_from_payload, record_to_payload

__all__ = [
    "AlgoliaAPIError",
    "AlgoliaIndex",
    "RecordPayload",
    "SearchResponse",
    "parse_search_hit",
    "record_from_payload",
    "record_to_payload",
]
