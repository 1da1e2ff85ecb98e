from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.api.auth import require_bearer_token
from app.api.deps import get_calculate_total_use_case, get_list_pricing_catalog_use_case
from app.api.schemas.pricing import (
    CalculateTotalRequest,
    CatalogPlanResponse,
    CatalogPluginResponse,
    DerivedPricingResponse,
    NormalizePricingRequest,
    PricingCatalogResponse,
    TotalBreakdownResponse,
)
from app.application.dto.pricing import CalculateTotalInput
from app.application.use_cases.calculate_total import CalculateTotalUseCase
from app.application.use_cases.list_pricing_catalog import ListPricingCatalogUseCase
from app.domain.entities.pricing import DerivedPricing
from app.domain.exceptions import PlanNotFoundError, PricingInputError
from app.domain.services.pricing import normalize_pricing

router = APIRouter()
logger = logging.getLogger(__name__)


def _derived_to_response(derived: DerivedPricing | None) -> DerivedPricingResponse | None:
    if derived is None:
        return None
    return DerivedPricingResponse(
        monthly=derived.monthly,
        yearly=derived.yearly,
        display_monthly_from_yearly=derived.display_monthly_from_yearly,
        yearly_discount_percent=derived.yearly_discount_percent,
    )


@router.get("/v1/pricing/catalog", response_model=PricingCatalogResponse)
def get_pricing_catalog(
    _token: str = Depends(require_bearer_token),
    use_case: ListPricingCatalogUseCase = Depends(get_list_pricing_catalog_use_case),
):
    output = use_case.execute()
    return PricingCatalogResponse(
        plans=[
            CatalogPlanResponse(
                id=plan.id,
                name=plan.name,
                included_branches=plan.included_branches,
                currency=plan.currency,
                pricing=_derived_to_response(plan.pricing),
                extra_store_pricing=_derived_to_response(plan.extra_store_pricing),
            )
            for plan in output.plans
        ],
        plugins=[
            CatalogPluginResponse(
                key=plugin.key,
                name=plugin.name,
                pricing=_derived_to_response(plugin.pricing),
            )
            for plugin in output.plugins
        ],
    )


@router.post("/v1/pricing/normalize", response_model=DerivedPricingResponse | None)
def normalize(
    req: NormalizePricingRequest,
    _token: str = Depends(require_bearer_token),
):
    return _derived_to_response(normalize_pricing(req.monthly, req.yearly))


@router.post("/v1/pricing/total", response_model=TotalBreakdownResponse)
def calculate_total(
    req: CalculateTotalRequest,
    _token: str = Depends(require_bearer_token),
    use_case: CalculateTotalUseCase = Depends(get_calculate_total_use_case),
):
    try:
        breakdown = use_case.execute(
            CalculateTotalInput(
                plan_id=req.plan_id,
                billing_period=req.billing_period,
                extra_stores=req.extra_stores,
                plugin_keys=req.plugins,
                vat_percent=req.vat_percent,
            )
        )
    except PlanNotFoundError as exc:
        logger.warning("pricing_router: plan_not_found plan_id=%s detail=%s", req.plan_id, exc)
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PricingInputError as exc:
        logger.warning(
            "pricing_router: invalid_input plan_id=%s billing_period=%s detail=%s",
            req.plan_id,
            req.billing_period,
            exc,
        )
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return TotalBreakdownResponse(
        subtotal=breakdown.subtotal,
        vat_percent=breakdown.vat_percent,
        vat_amount=breakdown.vat_amount,
        total=breakdown.total,
    )
