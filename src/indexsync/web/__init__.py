"""HTTP surface for the publish webhook."""

from __future__ import annotations

from .ingress import (
    InvalidWebhookPayloadError,
    ParamsRejection,
    WebhookParams,
    parse_webhook_body,
    parse_webhook_params,
)

__all__ = [
    "InvalidWebhookPayloadError",
    "ParamsRejection",
    "WebhookParams",
    "parse_webhook_body",
    "parse_webhook_params",
]
