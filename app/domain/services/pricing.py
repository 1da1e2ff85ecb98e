from __future__ import annotations

from decimal import ROUND_HALF_UP, Context, Decimal, localcontext

from app.domain.entities.pricing import (
    DEFAULT_VAT_PERCENT,
    DerivedPricing,
    PriceableUnit,
    TotalBreakdown,
    TotalCalculationInput,
)


_CENTS = Decimal("0.01")
_MONTHS_PER_YEAR = Decimal("12")

# no signal traps: invalid operations give NaN and overflow gives Infinity
_MONEY_CONTEXT = Context(traps=[])


def money_context():
    return localcontext(_MONEY_CONTEXT)


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_money(value: Decimal) -> Decimal:
    """Round half away from zero to cents.

    Non-finite values pass through, as do values too large to carry cents at
    the working precision.
    """
    if not value.is_finite():
        return value
    with money_context():
        rounded = value.quantize(_CENTS, rounding=ROUND_HALF_UP)
    return value if rounded.is_nan() else rounded


def _round_percent(value: Decimal) -> int | Decimal:
    if not value.is_finite():
        return value
    with money_context():
        rounded = value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    if rounded.is_nan():
        return int(value)
    return int(rounded)


def normalize_pricing(monthly, yearly) -> DerivedPricing | None:
    """Derive display pricing facts for a monthly/yearly price pair.

    A price that is None or zero counts as absent. Returns None when both are
    absent. ``monthly`` and ``yearly`` are echoed back untouched so callers keep
    their own precision; only the derived fields are rounded. Malformed numbers
    give NaN or Infinity in the derived fields instead of raising.
    """
    if not monthly and not yearly:
        return None

    display_monthly_from_yearly = None
    yearly_discount_percent = None
    with money_context():
        if yearly:
            display_monthly_from_yearly = round_money(to_decimal(yearly) / _MONTHS_PER_YEAR)

        if monthly and yearly:
            ratio = to_decimal(yearly) / (to_decimal(monthly) * _MONTHS_PER_YEAR)
            yearly_discount_percent = _round_percent((Decimal("1") - ratio) * Decimal("100"))

    return DerivedPricing(
        monthly=monthly,
        yearly=yearly,
        display_monthly_from_yearly=display_monthly_from_yearly,
        yearly_discount_percent=yearly_discount_percent,
    )


def period_price(unit, billing_period: str, *, monthly_field: str, yearly_field: str) -> Decimal:
    field = monthly_field if billing_period == "monthly" else yearly_field
    value = getattr(unit, field)
    if value is None:
        return Decimal("0")
    return to_decimal(value)


def unit_price(unit: PriceableUnit, billing_period: str) -> Decimal:
    return period_price(
        unit,
        billing_period,
        monthly_field="price_monthly",
        yearly_field="price_yearly",
    )


def extra_store_price(plan, billing_period: str) -> Decimal:
    return period_price(
        plan,
        billing_period,
        monthly_field="extra_store_price_monthly",
        yearly_field="extra_store_price_yearly",
    )


def apply_vat(subtotal: Decimal, vat_percent=DEFAULT_VAT_PERCENT) -> TotalBreakdown:
    with money_context():
        vat = to_decimal(vat_percent)
        vat_amount = round_money(subtotal * vat / Decimal("100"))
        total = round_money(subtotal + vat_amount)
    return TotalBreakdown(
        subtotal=round_money(subtotal),
        vat_percent=vat_percent,
        vat_amount=vat_amount,
        total=total,
    )


def calculate_total(command: TotalCalculationInput) -> TotalBreakdown:
    """Subtotal, VAT and total for a subscription.

    Preview only: the billing backend recomputes the charged amount. Inputs are
    not validated, so negative counts or prices flow through the arithmetic and
    non-finite prices end up as NaN or Infinity in the breakdown.
    """
    with money_context():
        subtotal = unit_price(command.plan, command.billing_period)

        # extra store fields are only read when stores are requested
        if command.extra_stores > 0:
            subtotal += extra_store_price(command.plan, command.billing_period) * command.extra_stores

        for plugin in command.plugins:
            subtotal += unit_price(plugin, command.billing_period)

        return apply_vat(subtotal, command.vat_percent)
