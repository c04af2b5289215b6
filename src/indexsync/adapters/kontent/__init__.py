"""Public interface for the Kontent.ai Delivery adapter."""

from __future__ import annotations

from .client import LINKED_ITEMS_DEPTH, KontentAPIError, KontentFetcher
from .schema import ItemPayload, ItemResponse
from .translator import parse_item_response, translate_item

__all__ = [
    "LINKED_ITEMS_DEPTH",
    "ItemPayload",
    "ItemResponse",
    "KontentAPIError",
    "KontentFetcher",
    "parse_item_response",
    "translate_item",
]
