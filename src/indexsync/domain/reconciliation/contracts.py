"""Shared reconciliation contract components.

This module intentionally holds only:
- classification outcomes produced by eligibility and projection
- the per-entity action each outcome turns into
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from indexsync.domain.model import IndexRecord


class OutcomeKind(StrEnum):
    """Result of classifying one fetched entity."""

    ELIGIBLE = "eligible"
    INELIGIBLE = "ineligible"
    PROJECTION_REJECTED = "projection_rejected"


@dataclass(frozen=True, slots=True, kw_only=True)
class Eligible:
    """Entity qualifies and projected into exactly one record."""

    record: IndexRecord
    kind: Literal[OutcomeKind.ELIGIBLE] = OutcomeKind.ELIGIBLE


@dataclass(frozen=True, slots=True, kw_only=True)
class Ineligible:
    """Entity is missing or its type is outside the allow-list."""

    reason: str
    kind: Literal[OutcomeKind.INELIGIBLE] = OutcomeKind.INELIGIBLE


@dataclass(frozen=True, slots=True, kw_only=True)
class ProjectionRejected:
    """Entity type qualifies but a field the record needs is absent."""

    reason: str
    kind: Literal[OutcomeKind.PROJECTION_REJECTED] = OutcomeKind.PROJECTION_REJECTED


type Outcome = Eligible | Ineligible | ProjectionRejected


@dataclass(frozen=True, slots=True)
class EntityAction:
    """Index mutations required by one reconciled entity."""

    records_to_upsert: tuple[IndexRecord, ...] = ()
    object_ids_to_remove: tuple[str, ...] = ()
