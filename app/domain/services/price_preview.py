from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from app.domain.entities.plan import Plan, Plugin
from app.domain.entities.price_preview import (
    PreviewBranches,
    PreviewCurrency,
    PreviewPlan,
    PreviewPlugin,
    PreviewSummary,
    PricePreview,
)
from app.domain.entities.pricing import DEFAULT_VAT_PERCENT, TotalCalculationInput
from app.domain.services.pricing import (
    apply_vat,
    calculate_total,
    extra_store_price,
    money_context,
    normalize_pricing,
    round_money,
    to_decimal,
    unit_price,
)


_CURRENCY_SYMBOLS = {"EUR": "€"}


def currency_for(code: str | None) -> PreviewCurrency:
    if not code:
        return PreviewCurrency(code=None, symbol=None)
    return PreviewCurrency(code=code, symbol=_CURRENCY_SYMBOLS.get(code, code))


def chargeable_branches(*, total_branches: int, included_branches: int) -> int:
    return max(0, total_branches - included_branches)


def _yearly_per_month(yearly) -> Decimal | None:
    if not yearly:
        return None
    with money_context():
        return round_money(to_decimal(yearly) / Decimal("12"))


def build_price_preview(
    *,
    plan: Plan,
    billing_period: str,
    total_branches: int,
    plugins: Sequence[Plugin],
    vat_percent=DEFAULT_VAT_PERCENT,
) -> PricePreview:
    plan_monthly = to_decimal(plan.price_monthly or 0)
    plan_yearly = to_decimal(plan.price_yearly or 0)
    derived = normalize_pricing(plan.price_monthly, plan.price_yearly)

    chargeable = chargeable_branches(
        total_branches=total_branches,
        included_branches=plan.included_branches,
    )

    preview_plugins = [
        PreviewPlugin(
            key=plugin.key,
            name=plugin.name,
            monthly=plugin.price_monthly,
            yearly=plugin.price_yearly,
            yearly_per_month=_yearly_per_month(plugin.price_yearly),
            total_price=unit_price(plugin, billing_period),
        )
        for plugin in plugins
    ]

    breakdown = calculate_total(
        TotalCalculationInput(
            plan=plan.pricing,
            billing_period=billing_period,
            extra_stores=chargeable,
            plugins=[plugin.pricing for plugin in plugins],
            vat_percent=vat_percent,
        )
    )

    with money_context():
        branches_total = Decimal("0")
        if chargeable > 0:
            branches_total = extra_store_price(plan, billing_period) * chargeable
        plugins_total = sum((item.total_price for item in preview_plugins), Decimal("0"))

        # what a year costs on monthly billing, the comparison shown next to the yearly price
        original_yearly_subtotal = plan_monthly * Decimal("12") + branches_total + plugins_total
    original_yearly = apply_vat(original_yearly_subtotal, vat_percent)

    return PricePreview(
        currency=currency_for(plan.currency),
        plan=PreviewPlan(
            id=plan.id,
            name=plan.name,
            billing_period=billing_period,
            monthly=plan_monthly,
            yearly=plan_yearly,
            yearly_per_month=_yearly_per_month(plan_yearly) or Decimal("0"),
            yearly_discount_percent=derived.yearly_discount_percent if derived else None,
        ),
        branches=PreviewBranches(
            included=plan.included_branches,
            total=total_branches,
            chargeable=chargeable,
            unit_price_monthly=plan.extra_store_price_monthly,
            unit_price_yearly=plan.extra_store_price_yearly,
            total_price=branches_total,
        ),
        plugins=preview_plugins,
        summary=PreviewSummary(
            subtotal=breakdown.subtotal,
            original_yearly_subtotal=original_yearly.subtotal,
            vat_percent=breakdown.vat_percent,
            vat_amount=breakdown.vat_amount,
            total=breakdown.total,
            original_yearly_total=original_yearly.total,
        ),
    )
