from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from app.domain.entities.plan import Plan, Plugin
from app.domain.entities.subscription import Subscription


def _dec_or_none(value: Any) -> Decimal | None:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def map_row_to_plan(row: Mapping[str, Any]) -> Plan:
    return Plan(
        id=str(row["id"]),
        name=row["name"],
        included_branches=int(row["included_branches"] or 0),
        price_monthly=_dec_or_none(row["cached_price_monthly"]),
        price_yearly=_dec_or_none(row["cached_price_yearly"]),
        extra_store_price_monthly=_dec_or_none(row["cached_extra_store_price_monthly"]),
        extra_store_price_yearly=_dec_or_none(row["cached_extra_store_price_yearly"]),
        currency=row["cached_currency"],
    )


def map_row_to_plugin(row: Mapping[str, Any]) -> Plugin:
    return Plugin(
        key=row["key"],
        name=row["name"],
        price_monthly=_dec_or_none(row["cached_price_monthly"]),
        price_yearly=_dec_or_none(row["cached_price_yearly"]),
    )


def map_row_to_subscription(row: Mapping[str, Any]) -> Subscription:
    return Subscription(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        plan_id=str(row["plan_id"]),
        onboarding_completed=bool(row["onboarding_completed"]),
    )
