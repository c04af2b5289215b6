"""Reconciliation core for keeping the search index consistent with content.

Flow for one run:
1) look up the records currently indexed for every notified entity
2) fetch fresh entity graphs for those records (or the notified entity)
3) classify and project each entity into an index record
4) merge per-entity actions into one deduplicated mutation set
5) apply the upsert batch and the delete batch
"""

from __future__ import annotations

from .contracts import (
    Eligible,
    EntityAction,
    Ineligible,
    Outcome,
    OutcomeKind,
    ProjectionRejected,
)
from .eligibility import DEFAULT_INDEXABLE_TYPES, classify, project_record
from .engine import ReconciliationSummary, Reconciler
from .plan import MutationSet, merge_actions

__all__ = [
    "DEFAULT_INDEXABLE_TYPES",
    "Eligible",
    "EntityAction",
    "Ineligible",
    "MutationSet",
    "Outcome",
    "OutcomeKind",
    "ProjectionRejected",
    "ReconciliationSummary",
    "Reconciler",
    "classify",
    "merge_actions",
    "project_record",
]
