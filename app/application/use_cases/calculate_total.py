from __future__ import annotations

from decimal import Decimal

from app.application.dto.pricing import CalculateTotalInput
from app.application.ports.pricing_catalog_port import PricingCatalogPort
from app.domain.entities.pricing import TotalBreakdown, TotalCalculationInput
from app.domain.services.pricing import calculate_total

from .pricing_common import load_plan_and_plugins, validate_pricing_request


class CalculateTotalUseCase:
    def __init__(self, *, catalog_port: PricingCatalogPort, default_vat_percent: Decimal):
        self._catalog_port = catalog_port
        self._default_vat_percent = default_vat_percent

    def execute(self, command: CalculateTotalInput) -> TotalBreakdown:
        validate_pricing_request(plan_id=command.plan_id, billing_period=command.billing_period)
        plan, plugins = load_plan_and_plugins(
            self._catalog_port,
            plan_id=command.plan_id,
            plugin_keys=command.plugin_keys,
        )
        vat_percent = command.vat_percent if command.vat_percent is not None else self._default_vat_percent
        return calculate_total(
            TotalCalculationInput(
                plan=plan.pricing,
                billing_period=command.billing_period,
                extra_stores=command.extra_stores,
                plugins=[plugin.pricing for plugin in plugins],
                vat_percent=vat_percent,
            )
        )
