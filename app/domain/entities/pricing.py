from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal, Sequence


BillingPeriod = Literal["monthly", "yearly"]

BILLING_PERIODS: frozenset[str] = frozenset({"monthly", "yearly"})

DEFAULT_VAT_PERCENT = Decimal("24")


@dataclass(frozen=True)
class PriceableUnit:
    price_monthly: Decimal | None
    price_yearly: Decimal | None = None


@dataclass(frozen=True)
class PlanPricing(PriceableUnit):
    extra_store_price_monthly: Decimal | None = None
    extra_store_price_yearly: Decimal | None = None


@dataclass(frozen=True)
class DerivedPricing:
    monthly: Decimal | None
    yearly: Decimal | None
    display_monthly_from_yearly: Decimal | None
    yearly_discount_percent: int | None


@dataclass(frozen=True)
class TotalCalculationInput:
    plan: PriceableUnit
    billing_period: BillingPeriod
    extra_stores: int = 0
    plugins: Sequence[PriceableUnit] = ()
    vat_percent: Decimal = DEFAULT_VAT_PERCENT


@dataclass(frozen=True)
class TotalBreakdown:
    subtotal: Decimal
    vat_percent: Decimal
    vat_amount: Decimal
    total: Decimal
