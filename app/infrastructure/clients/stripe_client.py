from __future__ import annotations

import stripe

from app.application.dto.billing import StripePriceEventData, StripeWebhookEvent
from app.application.ports.stripe_port import StripePort
from app.domain.exceptions import BillingError


class StripeClient(StripePort):
    def __init__(self, *, secret_key: str, webhook_secret: str):
        stripe.api_key = secret_key
        self._webhook_secret = webhook_secret

    def verify_webhook(self, *, signature: str, payload: bytes) -> StripeWebhookEvent:
        try:
            event = stripe.Webhook.construct_event(payload=payload, sig_header=signature, secret=self._webhook_secret)
        except Exception as exc:  # pragma: no cover - external API
            raise BillingError("Invalid Stripe webhook signature.") from exc

        return parse_webhook_event(event)


def parse_webhook_event(event) -> StripeWebhookEvent:
    event_type = str(event.get("type", ""))
    data_object = event.get("data", {}).get("object", {})

    if event_type.startswith("price."):
        recurring = data_object.get("recurring") or {}
        unit_amount = data_object.get("unit_amount")
        return StripeWebhookEvent(
            event_type=event_type,
            price=StripePriceEventData(
                price_id=str(data_object.get("id")),
                active=bool(data_object.get("active", False)),
                unit_amount=int(unit_amount) if unit_amount is not None else None,
                currency=str(data_object.get("currency") or ""),
                interval=recurring.get("interval"),
            ),
        )

    return StripeWebhookEvent(event_type=event_type, price=None)
