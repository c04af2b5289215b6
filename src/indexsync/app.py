"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from contextlib import asynccontextmanager
from logging import getLogger
from typing import TYPE_CHECKING

from indexsync.adapters.algolia import AlgoliaIndex
from indexsync.adapters.kontent import KontentFetcher
from indexsync.domain.model import ChangeNotification
from indexsync.domain.reconciliation import Reconciler, ReconciliationSummary
from indexsync.web.ingress import WebhookParams

if TYPE_CHECKING:
    from indexsync.adapters.http_resilience import ClientFactory
    from indexsync.config import ServiceConfig
    from indexsync.domain.reconciliation import MutationSet

type ReconcileRunner = Callable[
    [Sequence[ChangeNotification], WebhookParams], Awaitable[ReconciliationSummary]
]

log = getLogger(__name__)


@asynccontextmanager
async def open_reconciler(
    params: WebhookParams,
    *,
    config: ServiceConfig,
    client_factory: ClientFactory | None = None,
) -> AsyncIterator[Reconciler]:
    """Wire the Delivery fetcher and the requested Algolia index into a reconciler.

    Both adapters keep one HTTP client each for the whole run, so every call
    shares that service's rate limit. They are closed on exit.
    """

    async with (
        KontentFetcher(config=config.kontent, client_factory=client_factory) as fetcher,
        AlgoliaIndex(
            config=config.algolia,
            app_id=params.app_id,
            index_name=params.index_name,
            client_factory=client_factory,
        ) as index,
    ):
        yield Reconciler(
            fetcher=fetcher,
            index_query=index,
            index_writer=index,
            slug_field=params.slug,
            indexable_types=config.indexable_types,
        )


async def reconcile_notifications(
    notifications: Sequence[ChangeNotification],
    params: WebhookParams,
    *,
    config: ServiceConfig,
    client_factory: ClientFactory | None = None,
) -> ReconciliationSummary:
    """Reconcile one notification batch and write the result to the index."""

    log.info(
        f"Reconciling {len(notifications)} notification(s) into "
        f"{params.app_id}/{params.index_name}"
    )
    async with open_reconciler(params, config=config, client_factory=client_factory) as reconciler:
        return await reconciler.reconcile(notifications)


async def plan_notifications(
    notifications: Sequence[ChangeNotification],
    params: WebhookParams,
    *,
    config: ServiceConfig,
    client_factory: ClientFactory | None = None,
) -> MutationSet:
    """Compute the mutations a batch would apply, without writing."""

    async with open_reconciler(params, config=config, client_factory=client_factory) as reconciler:
        return await reconciler.plan(notifications)
