"""Webhook ingress: normalise payload envelopes and validate request parameters.

Kontent.ai delivers either a single notification object (legacy) or an envelope
with a ``notifications`` list. Both resolve here into one ordered list of
``ChangeNotification`` so reconciliation never sees the raw envelope.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Self, TypeGuard

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from indexsync.domain.model import ChangeNotification

REQUIRED_PARAMS = ("slug", "appId", "index")


class InvalidWebhookPayloadError(ValueError):
    """Raised when a webhook body cannot be turned into change notifications."""


class WebhookBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class WebhookItem(WebhookBaseModel):
    codename: str
    language: str


class WebhookData(WebhookBaseModel):
    system: WebhookItem | None = None
    items: list[WebhookItem] | None = None

    @model_validator(mode="after")
    def _require_items(self) -> Self:
        if self.system is None and self.items is None:
            raise ValueError("notification data names no content item")
        return self

    def changed_items(self) -> list[WebhookItem]:
        if self.items is not None:
            return self.items
        return [self.system] if self.system is not None else []


class WebhookMessage(WebhookBaseModel):
    environment_id: str | None = None
    project_id: str | None = None

    @property
    def environment(self) -> str | None:
        return self.environment_id or self.project_id


class WebhookNotification(WebhookBaseModel):
    data: WebhookData
    message: WebhookMessage = Field(default_factory=WebhookMessage)


class WebhookEnvelope(WebhookBaseModel):
    notifications: list[WebhookNotification]


@dataclass(frozen=True, slots=True)
class WebhookParams:
    """Validated per-request metadata."""

    slug: str
    app_id: str
    index_name: str


@dataclass(frozen=True, slots=True)
class ParamsRejection:
    missing: tuple[str, ...]

    @property
    def message(self) -> str:
        return f"Missing query parameters: {', '.join(self.missing)}"


def parse_webhook_params(params: Mapping[str, str] | None) -> WebhookParams | ParamsRejection:
    values = params or {}
    missing = tuple(name for name in REQUIRED_PARAMS if not (values.get(name) or "").strip())
    if missing:
        return ParamsRejection(missing=missing)
    return WebhookParams(
        slug=values["slug"].strip(),
        app_id=values["appId"].strip(),
        index_name=values["index"].strip(),
    )


def is_notification_envelope(payload: object) -> TypeGuard[Mapping[str, object]]:
    return isinstance(payload, Mapping) and "notifications" in payload


def parse_webhook_body(body: bytes | str) -> list[ChangeNotification]:
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidWebhookPayloadError("Webhook body is not valid JSON") from exc
    return normalize_webhook_payload(payload)


def normalize_webhook_payload(payload: object) -> list[ChangeNotification]:
    try:
        if is_notification_envelope(payload):
            notifications = WebhookEnvelope.model_validate(payload).notifications
        else:
            notifications = [WebhookNotification.model_validate(payload)]
    except ValidationError as exc:
        raise InvalidWebhookPayloadError(
            f"Unrecognised webhook payload: {exc.error_count()} validation error(s)"
        ) from exc

    return [
        ChangeNotification(
            codename=item.codename,
            language=item.language,
            environment_id=notification.message.environment,
        )
        for notification in notifications
        for item in notification.data.changed_items()
    ]
