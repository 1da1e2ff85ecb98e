from __future__ import annotations

from app.application.dto.billing import StripeWebhookInput, StripeWebhookOutput
from app.application.ports.pricing_catalog_port import PricingCatalogPort
from app.application.ports.stripe_port import StripePort
from app.domain.exceptions import BillingError
from app.domain.services.price_sync import resolve_price_sync

from .pricing_common import utcnow


PRICE_SYNC_EVENTS = frozenset({"price.created", "price.updated"})


class ProcessStripeWebhookUseCase:
    def __init__(
        self,
        *,
        catalog_port: PricingCatalogPort,
        stripe_port: StripePort,
    ):
        self._catalog_port = catalog_port
        self._stripe_port = stripe_port

    def execute(self, command: StripeWebhookInput) -> StripeWebhookOutput:
        event = self._stripe_port.verify_webhook(signature=command.signature, payload=command.payload)

        if event.event_type not in PRICE_SYNC_EVENTS:
            return StripeWebhookOutput(event_type=event.event_type, handled=False)

        price = event.price
        if price is None:
            raise BillingError("Stripe price event missing payload.")

        updates = resolve_price_sync(
            price_id=price.price_id,
            active=price.active,
            unit_amount=price.unit_amount,
            currency=price.currency,
            interval=price.interval,
        )
        now = utcnow()
        updated_rows = 0
        for update in updates:
            updated_rows += self._catalog_port.apply_cached_price_update(update=update, now=now)

        return StripeWebhookOutput(
            event_type=event.event_type,
            handled=True,
            updated_rows=updated_rows,
        )
