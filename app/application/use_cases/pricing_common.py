from __future__ import annotations

from datetime import datetime, timezone

from app.application.ports.pricing_catalog_port import PricingCatalogPort
from app.domain.entities.plan import Plan, Plugin
from app.domain.entities.pricing import BILLING_PERIODS
from app.domain.exceptions import PlanNotFoundError, PricingInputError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_pricing_request(*, plan_id: str, billing_period: str) -> None:
    if not plan_id or not billing_period:
        raise PricingInputError("plan_id and billing_period are required.")
    if billing_period not in BILLING_PERIODS:
        raise PricingInputError("billing_period must be 'monthly' or 'yearly'.")


def load_plan_and_plugins(
    catalog_port: PricingCatalogPort,
    *,
    plan_id: str,
    plugin_keys: list[str],
) -> tuple[Plan, list[Plugin]]:
    plan = catalog_port.get_plan_by_id(plan_id=plan_id)
    if plan is None:
        raise PlanNotFoundError("Plan not found.")

    # unknown plugin keys are ignored, as the catalog lookup only returns known ones
    plugins = catalog_port.list_plugins_by_keys(keys=plugin_keys) if plugin_keys else []
    return plan, plugins
