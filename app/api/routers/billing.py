from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Request

from app.api.auth import require_bearer_token
from app.api.deps import (
    get_check_plan_change_use_case,
    get_preview_price_use_case,
    get_process_stripe_webhook_use_case,
)
from app.api.schemas.billing import (
    CheckPlanChangeRequest,
    PlanChangeResponse,
    PreviewBranchesResponse,
    PreviewCurrencyResponse,
    PreviewPlanPricesResponse,
    PreviewPlanResponse,
    PreviewPluginPricesResponse,
    PreviewPluginResponse,
    PreviewSummaryResponse,
    PricePreviewRequest,
    PricePreviewResponse,
    StripeWebhookResponse,
)
from app.application.dto.billing import StripeWebhookInput
from app.application.dto.pricing import CheckPlanChangeInput, PricePreviewInput
from app.application.use_cases.check_plan_change import CheckPlanChangeUseCase
from app.application.use_cases.preview_price import PreviewPriceUseCase
from app.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from app.domain.entities.price_preview import PricePreview
from app.domain.exceptions import (
    BillingError,
    PlanNotFoundError,
    PricingInputError,
    SubscriptionNotFoundError,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _preview_to_response(preview: PricePreview) -> PricePreviewResponse:
    return PricePreviewResponse(
        currency=PreviewCurrencyResponse(
            code=preview.currency.code,
            symbol=preview.currency.symbol,
        ),
        plan=PreviewPlanResponse(
            id=preview.plan.id,
            name=preview.plan.name,
            billing_period=preview.plan.billing_period,
            prices=PreviewPlanPricesResponse(
                monthly=preview.plan.monthly,
                yearly=preview.plan.yearly,
                yearly_per_month=preview.plan.yearly_per_month,
                yearly_discount_percent=preview.plan.yearly_discount_percent,
            ),
        ),
        branches=PreviewBranchesResponse(
            included=preview.branches.included,
            total=preview.branches.total,
            chargeable=preview.branches.chargeable,
            unit_price_monthly=preview.branches.unit_price_monthly,
            unit_price_yearly=preview.branches.unit_price_yearly,
            total_price=preview.branches.total_price,
        ),
        plugins=[
            PreviewPluginResponse(
                key=plugin.key,
                name=plugin.name,
                prices=PreviewPluginPricesResponse(
                    monthly=plugin.monthly,
                    yearly=plugin.yearly,
                    yearly_per_month=plugin.yearly_per_month,
                ),
                total_price=plugin.total_price,
            )
            for plugin in preview.plugins
        ],
        summary=PreviewSummaryResponse(
            subtotal=preview.summary.subtotal,
            original_yearly_subtotal=preview.summary.original_yearly_subtotal,
            vat_percent=preview.summary.vat_percent,
            vat_amount=preview.summary.vat_amount,
            total=preview.summary.total,
            original_yearly_total=preview.summary.original_yearly_total,
        ),
    )


@router.post("/v1/billing/price-preview", response_model=PricePreviewResponse)
def price_preview(
    req: PricePreviewRequest,
    _token: str = Depends(require_bearer_token),
    use_case: PreviewPriceUseCase = Depends(get_preview_price_use_case),
):
    try:
        preview = use_case.execute(
            PricePreviewInput(
                plan_id=req.plan_id,
                billing_period=req.billing_period,
                total_branches=req.total_branches,
                plugin_keys=req.plugins,
            )
        )
    except PlanNotFoundError as exc:
        logger.warning("billing_router: plan_not_found plan_id=%s detail=%s", req.plan_id, exc)
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PricingInputError as exc:
        logger.warning(
            "billing_router: invalid_preview_input plan_id=%s billing_period=%s detail=%s",
            req.plan_id,
            req.billing_period,
            exc,
        )
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return _preview_to_response(preview)


@router.post("/v1/billing/check-plan-change", response_model=PlanChangeResponse)
def check_plan_change(
    req: CheckPlanChangeRequest,
    _token: str = Depends(require_bearer_token),
    use_case: CheckPlanChangeUseCase = Depends(get_check_plan_change_use_case),
):
    """Classify a plan change for ``req.user_id``.

    The bearer token is only checked for presence here. The gateway in front of
    this service must ensure the caller is the user named in the body.
    """
    try:
        change = use_case.execute(
            CheckPlanChangeInput(user_id=req.user_id, new_plan_id=req.new_plan_id)
        )
    except (PlanNotFoundError, SubscriptionNotFoundError) as exc:
        logger.warning(
            "billing_router: plan_change_lookup_failed user_id=%s new_plan_id=%s detail=%s",
            req.user_id,
            req.new_plan_id,
            exc,
        )
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PricingInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return PlanChangeResponse(type=change.type, requires_payment=change.requires_payment)


@router.post("/v1/billing/webhook", response_model=StripeWebhookResponse)
async def stripe_webhook(
    request: Request,
    stripe_signature: str = Header(..., alias="Stripe-Signature"),
    use_case: ProcessStripeWebhookUseCase = Depends(get_process_stripe_webhook_use_case),
):
    payload = await request.body()
    try:
        output = use_case.execute(
            StripeWebhookInput(
                signature=stripe_signature,
                payload=payload,
            )
        )
    except BillingError as exc:
        logger.warning("billing_router: webhook_rejected detail=%s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return StripeWebhookResponse(
        event_type=output.event_type,
        handled=output.handled,
        updated_rows=output.updated_rows,
    )
