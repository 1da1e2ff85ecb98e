from __future__ import annotations

from decimal import Decimal

from app.domain.entities.plan import Plan
from app.domain.entities.subscription import PlanChange


def _monthly_base(plan: Plan) -> Decimal:
    return plan.price_monthly if plan.price_monthly is not None else Decimal("0")


def classify_plan_change(
    *,
    current_plan: Plan | None,
    new_plan: Plan,
    onboarding_completed: bool,
    free_plan_name: str,
) -> PlanChange:
    if not onboarding_completed:
        if new_plan.name == free_plan_name:
            return PlanChange(type="free-onboarding", requires_payment=False)
        return PlanChange(type="first-payment", requires_payment=True)

    if current_plan is not None and current_plan.id == new_plan.id:
        return PlanChange(type="same-plan", requires_payment=False)

    if new_plan.name == free_plan_name:
        return PlanChange(type="cancel", requires_payment=False)

    if current_plan is None:
        return PlanChange(type="unknown", requires_payment=False)

    old_price = _monthly_base(current_plan)
    new_price = _monthly_base(new_plan)
    if new_price > old_price:
        return PlanChange(type="upgrade", requires_payment=True)
    if new_price < old_price:
        return PlanChange(type="downgrade", requires_payment=False)
    return PlanChange(type="unknown", requires_payment=False)
