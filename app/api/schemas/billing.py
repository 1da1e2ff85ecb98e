from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class PricePreviewRequest(BaseModel):
    plan_id: str = Field(..., min_length=1)
    billing_period: str = Field(..., min_length=1)
    total_branches: int = Field(0, ge=0)
    plugins: list[str] = Field(default_factory=list)


class PreviewCurrencyResponse(BaseModel):
    code: str | None
    symbol: str | None


class PreviewPlanPricesResponse(BaseModel):
    monthly: Decimal
    yearly: Decimal
    yearly_per_month: Decimal
    yearly_discount_percent: int | None


class PreviewPlanResponse(BaseModel):
    id: str
    name: str
    billing_period: str
    prices: PreviewPlanPricesResponse


class PreviewBranchesResponse(BaseModel):
    included: int
    total: int
    chargeable: int
    unit_price_monthly: Decimal | None
    unit_price_yearly: Decimal | None
    total_price: Decimal


class PreviewPluginPricesResponse(BaseModel):
    monthly: Decimal | None
    yearly: Decimal | None
    yearly_per_month: Decimal | None


class PreviewPluginResponse(BaseModel):
    key: str
    name: str
    prices: PreviewPluginPricesResponse
    total_price: Decimal


class PreviewSummaryResponse(BaseModel):
    subtotal: Decimal
    original_yearly_subtotal: Decimal
    vat_percent: Decimal
    vat_amount: Decimal
    total: Decimal
    original_yearly_total: Decimal


class PricePreviewResponse(BaseModel):
    currency: PreviewCurrencyResponse
    plan: PreviewPlanResponse
    branches: PreviewBranchesResponse
    plugins: list[PreviewPluginResponse]
    summary: PreviewSummaryResponse


class CheckPlanChangeRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    new_plan_id: str = Field(..., min_length=1)


class PlanChangeResponse(BaseModel):
    type: str
    requires_payment: bool


class StripeWebhookResponse(BaseModel):
    event_type: str
    handled: bool
    updated_rows: int
