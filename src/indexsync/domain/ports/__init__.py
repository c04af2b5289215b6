"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import ContentFetcher
from .index import IndexQuery, IndexWriter

__all__ = [
    "ContentFetcher",
    "IndexQuery",
    "IndexWriter",
]
