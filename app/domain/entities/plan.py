from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from app.domain.entities.pricing import PlanPricing, PriceableUnit


@dataclass(frozen=True)
class Plan:
    id: str
    name: str
    included_branches: int
    price_monthly: Decimal | None
    price_yearly: Decimal | None
    extra_store_price_monthly: Decimal | None
    extra_store_price_yearly: Decimal | None
    currency: str | None

    @property
    def pricing(self) -> PlanPricing:
        return PlanPricing(
            price_monthly=self.price_monthly,
            price_yearly=self.price_yearly,
            extra_store_price_monthly=self.extra_store_price_monthly,
            extra_store_price_yearly=self.extra_store_price_yearly,
        )


@dataclass(frozen=True)
class Plugin:
    key: str
    name: str
    price_monthly: Decimal | None
    price_yearly: Decimal | None

    @property
    def pricing(self) -> PriceableUnit:
        return PriceableUnit(price_monthly=self.price_monthly, price_yearly=self.price_yearly)


@dataclass(frozen=True)
class CachedPriceUpdate:
    target: str
    match_column: str
    column: str
    stripe_price_id: str
    amount: Decimal
    currency: str
