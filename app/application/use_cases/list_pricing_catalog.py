from __future__ import annotations

from app.application.dto.pricing import (
    CatalogPlanOutput,
    CatalogPluginOutput,
    PricingCatalogOutput,
)
from app.application.ports.pricing_catalog_port import PricingCatalogPort
from app.domain.services.pricing import normalize_pricing


class ListPricingCatalogUseCase:
    def __init__(self, *, catalog_port: PricingCatalogPort):
        self._catalog_port = catalog_port

    def execute(self) -> PricingCatalogOutput:
        plans = [
            CatalogPlanOutput(
                id=plan.id,
                name=plan.name,
                included_branches=plan.included_branches,
                currency=plan.currency,
                pricing=normalize_pricing(plan.price_monthly, plan.price_yearly),
                extra_store_pricing=normalize_pricing(
                    plan.extra_store_price_monthly,
                    plan.extra_store_price_yearly,
                ),
            )
            for plan in self._catalog_port.list_plans()
        ]
        plugins = [
            CatalogPluginOutput(
                key=plugin.key,
                name=plugin.name,
                pricing=normalize_pricing(plugin.price_monthly, plugin.price_yearly),
            )
            for plugin in self._catalog_port.list_plugins()
        ]
        return PricingCatalogOutput(plans=plans, plugins=plugins)
