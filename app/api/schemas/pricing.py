from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

MAX_PRICE = Decimal("1000000000")


class NormalizePricingRequest(BaseModel):
    monthly: Decimal | None = Field(None, ge=0, le=MAX_PRICE)
    yearly: Decimal | None = Field(None, ge=0, le=MAX_PRICE)


class DerivedPricingResponse(BaseModel):
    monthly: Decimal | None
    yearly: Decimal | None
    display_monthly_from_yearly: Decimal | None
    yearly_discount_percent: int | None


class CalculateTotalRequest(BaseModel):
    plan_id: str = Field(..., min_length=1)
    billing_period: str = Field(..., min_length=1)
    extra_stores: int = Field(0, ge=0)
    plugins: list[str] = Field(default_factory=list)
    vat_percent: Decimal | None = Field(None, ge=0, le=100)


class TotalBreakdownResponse(BaseModel):
    subtotal: Decimal
    vat_percent: Decimal
    vat_amount: Decimal
    total: Decimal


class CatalogPlanResponse(BaseModel):
    id: str
    name: str
    included_branches: int
    currency: str | None
    pricing: DerivedPricingResponse | None
    extra_store_pricing: DerivedPricingResponse | None


class CatalogPluginResponse(BaseModel):
    key: str
    name: str
    pricing: DerivedPricingResponse | None


class PricingCatalogResponse(BaseModel):
    plans: list[CatalogPlanResponse]
    plugins: list[CatalogPluginResponse]
