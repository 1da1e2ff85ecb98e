from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from app.domain.entities.pricing import DerivedPricing


@dataclass(frozen=True)
class CalculateTotalInput:
    plan_id: str
    billing_period: str
    extra_stores: int = 0
    plugin_keys: list[str] = field(default_factory=list)
    vat_percent: Decimal | None = None


@dataclass(frozen=True)
class PricePreviewInput:
    plan_id: str
    billing_period: str
    total_branches: int = 0
    plugin_keys: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CatalogPlanOutput:
    id: str
    name: str
    included_branches: int
    currency: str | None
    pricing: DerivedPricing | None
    extra_store_pricing: DerivedPricing | None


@dataclass(frozen=True)
class CatalogPluginOutput:
    key: str
    name: str
    pricing: DerivedPricing | None


@dataclass(frozen=True)
class PricingCatalogOutput:
    plans: list[CatalogPlanOutput]
    plugins: list[CatalogPluginOutput]


@dataclass(frozen=True)
class CheckPlanChangeInput:
    user_id: str
    new_plan_id: str
