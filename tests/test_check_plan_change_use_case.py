from __future__ import annotations

from decimal import Decimal

import pytest

from app.application.dto.pricing import CheckPlanChangeInput
from app.application.use_cases.check_plan_change import CheckPlanChangeUseCase
from app.domain.entities.plan import Plan
from app.domain.entities.subscription import Subscription
from app.domain.exceptions import PlanNotFoundError, SubscriptionNotFoundError


def _plan(plan_id: str, name: str, monthly: str | None) -> Plan:
    return Plan(
        id=plan_id,
        name=name,
        included_branches=1,
        price_monthly=Decimal(monthly) if monthly else None,
        price_yearly=None,
        extra_store_price_monthly=None,
        extra_store_price_yearly=None,
        currency="EUR",
    )


class FakeCatalogPort:
    def __init__(self, plans: list[Plan]):
        self._plans = {plan.id: plan for plan in plans}
        self.lookups: list[str] = []

    def get_plan_by_id(self, *, plan_id: str) -> Plan | None:
        self.lookups.append(plan_id)
        return self._plans.get(plan_id)


class FakeSubscriptionPort:
    def __init__(self, subscription: Subscription | None):
        self._subscription = subscription

    def get_subscription_for_user(self, *, user_id: str) -> Subscription | None:
        _ = user_id
        return self._subscription


def _use_case(subscription: Subscription | None, plans: list[Plan]) -> CheckPlanChangeUseCase:
    return CheckPlanChangeUseCase(
        catalog_port=FakeCatalogPort(plans),
        subscription_port=FakeSubscriptionPort(subscription),
        free_plan_name="Basic",
    )


PLANS = [_plan("basic", "Basic", None), _plan("starter", "Starter", "29"), _plan("pro", "Pro", "59")]


def test_upgrade_after_onboarding():
    subscription = Subscription(id="sub-1", user_id="user-1", plan_id="starter", onboarding_completed=True)

    change = _use_case(subscription, PLANS).execute(CheckPlanChangeInput(user_id="user-1", new_plan_id="pro"))

    assert change.type == "upgrade"
    assert change.requires_payment is True


def test_onboarding_does_not_load_current_plan():
    subscription = Subscription(id="sub-1", user_id="user-1", plan_id="gone", onboarding_completed=False)
    use_case = _use_case(subscription, PLANS)

    change = use_case.execute(CheckPlanChangeInput(user_id="user-1", new_plan_id="pro"))

    assert change.type == "first-payment"
    assert use_case._catalog_port.lookups == ["pro"]


def test_missing_subscription():
    with pytest.raises(SubscriptionNotFoundError):
        _use_case(None, PLANS).execute(CheckPlanChangeInput(user_id="user-1", new_plan_id="pro"))


def test_missing_new_plan():
    subscription = Subscription(id="sub-1", user_id="user-1", plan_id="starter", onboarding_completed=True)

    with pytest.raises(PlanNotFoundError):
        _use_case(subscription, PLANS).execute(CheckPlanChangeInput(user_id="user-1", new_plan_id="enterprise"))


def test_missing_current_plan_after_onboarding():
    subscription = Subscription(id="sub-1", user_id="user-1", plan_id="gone", onboarding_completed=True)

    with pytest.raises(PlanNotFoundError):
        _use_case(subscription, PLANS).execute(CheckPlanChangeInput(user_id="user-1", new_plan_id="pro"))
