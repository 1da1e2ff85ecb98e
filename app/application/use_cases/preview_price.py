from __future__ import annotations

from decimal import Decimal

from app.application.dto.pricing import PricePreviewInput
from app.application.ports.pricing_catalog_port import PricingCatalogPort
from app.domain.entities.price_preview import PricePreview
from app.domain.services.price_preview import build_price_preview

from .pricing_common import load_plan_and_plugins, validate_pricing_request


class PreviewPriceUseCase:
    def __init__(self, *, catalog_port: PricingCatalogPort, vat_percent: Decimal):
        self._catalog_port = catalog_port
        self._vat_percent = vat_percent

    def execute(self, command: PricePreviewInput) -> PricePreview:
        validate_pricing_request(plan_id=command.plan_id, billing_period=command.billing_period)
        plan, plugins = load_plan_and_plugins(
            self._catalog_port,
            plan_id=command.plan_id,
            plugin_keys=command.plugin_keys,
        )
        return build_price_preview(
            plan=plan,
            billing_period=command.billing_period,
            total_branches=command.total_branches,
            plugins=plugins,
            vat_percent=self._vat_percent,
        )
