from __future__ import annotations

from decimal import Decimal

from app.domain.entities.plan import CachedPriceUpdate


# (table, column matched against the Stripe price id, cached column to update)
_SYNC_TARGETS = {
    "month": (
        ("plans", "stripe_price_id_monthly", "cached_price_monthly"),
        ("plans", "stripe_extra_store_price_id_monthly", "cached_extra_store_price_monthly"),
        ("plugins", "stripe_price_id_monthly", "cached_price_monthly"),
    ),
    "year": (
        ("plans", "stripe_price_id_yearly", "cached_price_yearly"),
        ("plans", "stripe_extra_store_price_id_yearly", "cached_extra_store_price_yearly"),
        ("plugins", "stripe_price_id_yearly", "cached_price_yearly"),
    ),
}


def resolve_price_sync(
    *,
    price_id: str,
    active: bool,
    unit_amount: int | None,
    currency: str,
    interval: str | None,
) -> list[CachedPriceUpdate]:
    """Cached catalog columns to refresh for a Stripe price.

    One-time, inactive and zero-amount prices are ignored.
    """
    if not active or not unit_amount or not interval:
        return []

    targets = _SYNC_TARGETS.get(interval)
    if targets is None:
        return []

    amount = Decimal(unit_amount) / Decimal("100")
    return [
        CachedPriceUpdate(
            target=target,
            match_column=match_column,
            column=column,
            stripe_price_id=price_id,
            amount=amount,
            currency=currency.upper(),
        )
        for target, match_column, column in targets
    ]
