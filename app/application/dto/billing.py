from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StripeWebhookInput:
    signature: str
    payload: bytes


@dataclass(frozen=True)
class StripeWebhookOutput:
    event_type: str
    handled: bool
    updated_rows: int = 0


@dataclass(frozen=True)
class StripePriceEventData:
    price_id: str
    active: bool
    unit_amount: int | None
    currency: str
    interval: str | None


@dataclass(frozen=True)
class StripeWebhookEvent:
    event_type: str
    price: StripePriceEventData | None
