"""FastAPI application serving the publish webhook."""

from __future__ import annotations

from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from indexsync import __version__
from indexsync.app import reconcile_notifications
from indexsync.config import get_service_config

from .ingress import (
    InvalidWebhookPayloadError,
    ParamsRejection,
    parse_webhook_body,
    parse_webhook_params,
)
from .signature import SIGNATURE_HEADER, HmacSignatureVerifier

if TYPE_CHECKING:
    from indexsync.app import ReconcileRunner
    from indexsync.config import ServiceConfig

    from .signature import SignatureVerifier

log = getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def create_app(
    *,
    config: ServiceConfig | None = None,
    runner: ReconcileRunner | None = None,
    verify_signature: SignatureVerifier | None = None,
) -> FastAPI:
    """Create the webhook application.

    Configuration is loaded here, once, so missing environment variables fail at
    startup instead of on the first request.
    """

    service_config = config or get_service_config()
    verifier = verify_signature or HmacSignatureVerifier(service_config.webhook_secret)
    run = runner or partial(reconcile_notifications, config=service_config)

    app = FastAPI(title="indexsync", description="Kontent.ai to Algolia sync", version=__version__)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "service": "indexsync"}

    @app.post("/webhook")
    async def webhook(request: Request) -> JSONResponse:
        body = await request.body()
        if not body:
            return _error(400, "Missing Data")

        if not verifier(body, request.headers.get(SIGNATURE_HEADER)):
            return _error(401, "Unauthorized")

        params = parse_webhook_params(request.query_params)
        if isinstance(params, ParamsRejection):
            return _error(400, params.message)

        try:
            notifications = parse_webhook_body(body)
        except InvalidWebhookPayloadError as exc:
            return _error(400, str(exc))

        try:
            summary = await run(notifications, params)
        except Exception as exc:  # noqa: BLE001
            log.exception(f"Reconciliation failed for {len(notifications)} notification(s)")
            return JSONResponse(
                status_code=500,
                content={"error": type(exc).__name__, "message": str(exc)},
            )

        return JSONResponse(summary.as_payload())

    return app
