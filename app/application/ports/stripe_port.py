from __future__ import annotations

from typing import Protocol

from app.application.dto.billing import StripeWebhookEvent


class StripePort(Protocol):
    def verify_webhook(self, *, signature: str, payload: bytes) -> StripeWebhookEvent:
        ...
