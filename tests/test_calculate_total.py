from __future__ import annotations

from decimal import Decimal
from itertools import permutations
from types import SimpleNamespace

from app.domain.entities.pricing import PlanPricing, PriceableUnit, TotalCalculationInput
from app.domain.services.pricing import calculate_total


def _plan() -> PlanPricing:
    return PlanPricing(
        price_monthly=Decimal("50"),
        price_yearly=Decimal("500"),
        extra_store_price_monthly=Decimal("10"),
        extra_store_price_yearly=Decimal("100"),
    )


def test_monthly_plan_with_stores_and_plugins():
    breakdown = calculate_total(
        TotalCalculationInput(
            plan=_plan(),
            billing_period="monthly",
            extra_stores=2,
            plugins=[PriceableUnit(price_monthly=Decimal("15")), PriceableUnit(price_monthly=Decimal("5"))],
            vat_percent=Decimal("24"),
        )
    )

    assert breakdown.subtotal == Decimal("90.00")
    assert breakdown.vat_amount == Decimal("21.60")
    assert breakdown.total == Decimal("111.60")
    assert breakdown.vat_percent == Decimal("24")


def test_yearly_plan_uses_default_vat():
    breakdown = calculate_total(TotalCalculationInput(plan=_plan(), billing_period="yearly"))

    assert breakdown.subtotal == Decimal("500.00")
    assert breakdown.vat_percent == Decimal("24")
    assert breakdown.vat_amount == Decimal("120.00")
    assert breakdown.total == Decimal("620.00")


def test_zero_extra_stores_never_reads_extra_store_fields():
    plan = SimpleNamespace(price_monthly=Decimal("30"), price_yearly=Decimal("300"))

    breakdown = calculate_total(
        TotalCalculationInput(plan=plan, billing_period="monthly", extra_stores=0)
    )

    assert breakdown.subtotal == Decimal("30.00")
    assert breakdown.total == Decimal("37.20")


def test_subtotal_does_not_depend_on_plugin_order():
    plugins = [
        PriceableUnit(price_monthly=Decimal("12.34"), price_yearly=Decimal("120")),
        PriceableUnit(price_monthly=Decimal("0.01"), price_yearly=Decimal("0.10")),
        PriceableUnit(price_monthly=Decimal("7.5"), price_yearly=Decimal("75")),
    ]

    results = {
        calculate_total(
            TotalCalculationInput(plan=_plan(), billing_period="monthly", plugins=list(order))
        )
        for order in permutations(plugins)
    }

    assert len(results) == 1


def test_plugin_contribution_equals_sum_of_prices():
    prices = [Decimal("0.1")] * 10 + [Decimal("3.33"), Decimal("4.44")]
    plugins = [PriceableUnit(price_monthly=price) for price in prices]
    free_plan = PriceableUnit(price_monthly=Decimal("0"), price_yearly=Decimal("0"))

    breakdown = calculate_total(
        TotalCalculationInput(plan=free_plan, billing_period="monthly", plugins=plugins)
    )

    assert abs(breakdown.subtotal - sum(prices)) < Decimal("1e-9")


def test_only_output_fields_are_rounded():
    plugins = [PriceableUnit(price_monthly=Decimal("0.005")) for _ in range(3)]

    breakdown = calculate_total(
        TotalCalculationInput(
            plan=PriceableUnit(price_monthly=Decimal("10")),
            billing_period="monthly",
            plugins=plugins,
        )
    )

    # 10.015 kept at full precision until output
    assert breakdown.subtotal == Decimal("10.02")
    assert breakdown.vat_amount == Decimal("2.40")
    assert breakdown.total == Decimal("12.42")


def test_vat_override_is_echoed():
    vat = Decimal("0")

    breakdown = calculate_total(
        TotalCalculationInput(plan=_plan(), billing_period="monthly", vat_percent=vat)
    )

    assert breakdown.vat_percent is vat
    assert breakdown.vat_amount == Decimal("0")
    assert breakdown.total == Decimal("50.00")


def test_missing_plugin_price_contributes_zero():
    breakdown = calculate_total(
        TotalCalculationInput(
            plan=_plan(),
            billing_period="yearly",
            plugins=[PriceableUnit(price_monthly=Decimal("15"))],
        )
    )

    assert breakdown.subtotal == Decimal("500.00")


def test_negative_values_are_not_clamped():
    breakdown = calculate_total(
        TotalCalculationInput(
            plan=PlanPricing(price_monthly=Decimal("-10"), extra_store_price_monthly=Decimal("5")),
            billing_period="monthly",
            extra_stores=-3,
        )
    )

    assert breakdown.subtotal == Decimal("-10.00")
    assert breakdown.vat_amount == Decimal("-2.40")
    assert breakdown.total == Decimal("-12.40")


def test_nan_price_propagates():
    breakdown = calculate_total(
        TotalCalculationInput(plan=PriceableUnit(price_monthly=Decimal("NaN")), billing_period="monthly")
    )

    assert breakdown.subtotal.is_nan()
    assert breakdown.total.is_nan()


def test_infinite_price_with_zero_vat_gives_nan_instead_of_raising():
    breakdown = calculate_total(
        TotalCalculationInput(
            plan=PriceableUnit(price_monthly=Decimal("Infinity")),
            billing_period="monthly",
            vat_percent=Decimal("0"),
        )
    )

    assert breakdown.subtotal.is_infinite()
    assert breakdown.vat_amount.is_nan()
    assert breakdown.total.is_nan()


def test_opposite_infinities_give_nan():
    breakdown = calculate_total(
        TotalCalculationInput(
            plan=PriceableUnit(price_monthly=Decimal("Infinity")),
            billing_period="monthly",
            plugins=[PriceableUnit(price_monthly=Decimal("-Infinity"))],
        )
    )

    assert breakdown.subtotal.is_nan()
    assert breakdown.vat_amount.is_nan()
    assert breakdown.total.is_nan()


def test_amounts_too_large_for_cents_stay_finite():
    breakdown = calculate_total(
        TotalCalculationInput(plan=_plan(), billing_period="monthly", vat_percent=Decimal("1e30"))
    )

    assert breakdown.subtotal == Decimal("50.00")
    assert breakdown.vat_amount == Decimal("5E+29")
    assert breakdown.total.is_finite()
    assert breakdown.total >= breakdown.vat_amount
