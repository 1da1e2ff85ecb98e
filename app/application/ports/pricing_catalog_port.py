from __future__ import annotations

from datetime import datetime
from typing import Protocol

from app.domain.entities.plan import CachedPriceUpdate, Plan, Plugin


class PricingCatalogPort(Protocol):
    def get_plan_by_id(self, *, plan_id: str) -> Plan | None:
        ...

    def list_plans(self) -> list[Plan]:
        ...

    def list_plugins(self) -> list[Plugin]:
        ...

    def list_plugins_by_keys(self, *, keys: list[str]) -> list[Plugin]:
        ...

    def apply_cached_price_update(self, *, update: CachedPriceUpdate, now: datetime) -> int:
        ...
