from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from app.domain.entities.pricing import BillingPeriod


@dataclass(frozen=True)
class PreviewCurrency:
    code: str | None
    symbol: str | None


@dataclass(frozen=True)
class PreviewPlan:
    id: str
    name: str
    billing_period: BillingPeriod
    monthly: Decimal
    yearly: Decimal
    yearly_per_month: Decimal
    yearly_discount_percent: int | None


@dataclass(frozen=True)
class PreviewBranches:
    included: int
    total: int
    chargeable: int
    unit_price_monthly: Decimal | None
    unit_price_yearly: Decimal | None
    total_price: Decimal


@dataclass(frozen=True)
class PreviewPlugin:
    key: str
    name: str
    monthly: Decimal | None
    yearly: Decimal | None
    yearly_per_month: Decimal | None
    total_price: Decimal


@dataclass(frozen=True)
class PreviewSummary:
    subtotal: Decimal
    original_yearly_subtotal: Decimal
    vat_percent: Decimal
    vat_amount: Decimal
    total: Decimal
    original_yearly_total: Decimal


@dataclass(frozen=True)
class PricePreview:
    currency: PreviewCurrency
    plan: PreviewPlan
    branches: PreviewBranches
    plugins: list[PreviewPlugin]
    summary: PreviewSummary
