from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import bindparam, text
from sqlalchemy.exc import SQLAlchemyError

from app.application.ports.pricing_catalog_port import PricingCatalogPort
from app.domain.entities.plan import CachedPriceUpdate, Plan, Plugin
from app.infrastructure.db.mappers.pricing_catalog_mapper import map_row_to_plan, map_row_to_plugin


logger = logging.getLogger(__name__)

_PLAN_COLUMNS = """
    p.id,
    p.name,
    p.included_branches,
    p.cached_price_monthly,
    p.cached_price_yearly,
    p.cached_extra_store_price_monthly,
    p.cached_extra_store_price_yearly,
    p.cached_currency
"""

_PLUGIN_COLUMNS = """
    pl.key,
    pl.name,
    pl.cached_price_monthly,
    pl.cached_price_yearly
"""

# table -> columns that a price sync may match on or write to
_SYNC_COLUMNS = {
    "plans": {
        "stripe_price_id_monthly",
        "stripe_price_id_yearly",
        "stripe_extra_store_price_id_monthly",
        "stripe_extra_store_price_id_yearly",
        "cached_price_monthly",
        "cached_price_yearly",
        "cached_extra_store_price_monthly",
        "cached_extra_store_price_yearly",
    },
    "plugins": {
        "stripe_price_id_monthly",
        "stripe_price_id_yearly",
        "cached_price_monthly",
        "cached_price_yearly",
    },
}


class SqlPricingCatalogRepository(PricingCatalogPort):
    def __init__(self, engine):
        self._engine = engine

    def get_plan_by_id(self, *, plan_id: str) -> Plan | None:
        sql = f"""
            SELECT {_PLAN_COLUMNS}
            FROM public.plans p
            WHERE p.id::text = :plan_id
        """
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), {"plan_id": plan_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_plan(row)

    def list_plans(self) -> list[Plan]:
        sql = f"""
            SELECT {_PLAN_COLUMNS}
            FROM public.plans p
            ORDER BY COALESCE(p.cached_price_monthly, 0), p.name
        """
        with self._engine.connect() as conn:
            rows = conn.execute(text(sql)).mappings().all()
        return [map_row_to_plan(row) for row in rows]

    def list_plugins(self) -> list[Plugin]:
        sql = f"""
            SELECT {_PLUGIN_COLUMNS}
            FROM public.plugins pl
            ORDER BY pl.name
        """
        with self._engine.connect() as conn:
            rows = conn.execute(text(sql)).mappings().all()
        return [map_row_to_plugin(row) for row in rows]

    def list_plugins_by_keys(self, *, keys: list[str]) -> list[Plugin]:
        if not keys:
            return []
        stmt = text(
            f"""
            SELECT {_PLUGIN_COLUMNS}
            FROM public.plugins pl
            WHERE pl.key IN :keys
            ORDER BY pl.name
            """
        ).bindparams(bindparam("keys", expanding=True))
        with self._engine.connect() as conn:
            rows = conn.execute(stmt, {"keys": list(keys)}).mappings().all()
        logger.debug(
            "pricing_catalog_repository: plugins_by_keys requested=%s found=%s",
            len(keys),
            len(rows),
        )
        return [map_row_to_plugin(row) for row in rows]

    def apply_cached_price_update(self, *, update: CachedPriceUpdate, now: datetime) -> int:
        allowed = _SYNC_COLUMNS.get(update.target, set())
        if update.match_column not in allowed or update.column not in allowed:
            raise ValueError(f"Unsupported price sync target: {update.target}.{update.column}")

        sql = f"""
            UPDATE public.{update.target}
            SET {update.column} = :amount,
                cached_currency = :currency,
                cached_updated_at = :now
            WHERE {update.match_column} = :stripe_price_id
        """
        params = {
            "amount": update.amount,
            "currency": update.currency,
            "now": now,
            "stripe_price_id": update.stripe_price_id,
        }
        try:
            with self._engine.begin() as conn:
                result = conn.execute(text(sql), params)
        except SQLAlchemyError as exc:
            logger.warning(
                "pricing_catalog_repository: price_sync_failed target=%s column=%s price_id=%s error=%s",
                update.target,
                update.column,
                update.stripe_price_id,
                exc,
            )
            return 0

        logger.debug(
            "pricing_catalog_repository: price_synced target=%s column=%s price_id=%s rows=%s",
            update.target,
            update.column,
            update.stripe_price_id,
            result.rowcount,
        )
        return int(result.rowcount or 0)
