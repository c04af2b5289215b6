"""Webhook signature verification hook."""

from __future__ import annotations

import base64
import hashlib
import hmac
from dataclasses import dataclass
from typing import Protocol

SIGNATURE_HEADER = "x-kontent-ai-signature"


class SignatureVerifier(Protocol):
    def __call__(self, body: bytes, signature: str | None) -> bool: ...


@dataclass(frozen=True, slots=True)
class HmacSignatureVerifier:
    """Base64 HMAC-SHA256 of the raw body, keyed with the webhook secret."""

    secret: str

    def sign(self, body: bytes) -> str:
        digest = hmac.new(self.secret.encode(), body, hashlib.sha256).digest()
        return base64.b64encode(digest).decode()

    def __call__(self, body: bytes, signature: str | None) -> bool:
        if not signature:
            return False
        return hmac.compare_digest(self.sign(body), signature)
