from __future__ import annotations

from app.application.dto.pricing import CheckPlanChangeInput
from app.application.ports.pricing_catalog_port import PricingCatalogPort
from app.application.ports.subscription_port import SubscriptionPort
from app.domain.entities.subscription import PlanChange
from app.domain.exceptions import PlanNotFoundError, PricingInputError, SubscriptionNotFoundError
from app.domain.services.plan_change import classify_plan_change


class CheckPlanChangeUseCase:
    def __init__(
        self,
        *,
        catalog_port: PricingCatalogPort,
        subscription_port: SubscriptionPort,
        free_plan_name: str,
    ):
        self._catalog_port = catalog_port
        self._subscription_port = subscription_port
        self._free_plan_name = free_plan_name

    def execute(self, command: CheckPlanChangeInput) -> PlanChange:
        if not command.new_plan_id:
            raise PricingInputError("new_plan_id is required.")

        subscription = self._subscription_port.get_subscription_for_user(user_id=command.user_id)
        if subscription is None:
            raise SubscriptionNotFoundError("Subscription not found.")

        new_plan = self._catalog_port.get_plan_by_id(plan_id=command.new_plan_id)
        if new_plan is None:
            raise PlanNotFoundError("New plan not found.")

        current_plan = None
        if subscription.onboarding_completed:
            current_plan = self._catalog_port.get_plan_by_id(plan_id=subscription.plan_id)
            if current_plan is None:
                raise PlanNotFoundError("Current plan not found.")

        return classify_plan_change(
            current_plan=current_plan,
            new_plan=new_plan,
            onboarding_completed=subscription.onboarding_completed,
            free_plan_name=self._free_plan_name,
        )
