"""Upstream change notifications."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class ChangeNotification:
    """One content entity changed in one language."""

    codename: str
    language: str
    environment_id: str | None = None
