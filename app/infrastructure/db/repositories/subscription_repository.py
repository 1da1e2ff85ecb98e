from __future__ import annotations

from sqlalchemy import text

from app.application.ports.subscription_port import SubscriptionPort
from app.domain.entities.subscription import Subscription
from app.infrastructure.db.mappers.pricing_catalog_mapper import map_row_to_subscription


class SqlSubscriptionRepository(SubscriptionPort):
    def __init__(self, engine):
        self._engine = engine

    def get_subscription_for_user(self, *, user_id: str) -> Subscription | None:
        sql = """
            SELECT
                s.id,
                u.id AS user_id,
                s.plan_id,
                COALESCE(o.is_completed, FALSE) AS onboarding_completed
            FROM public.users u
            JOIN public.subscriptions s
              ON s.id = u.subscription_id
            LEFT JOIN public.onboarding o
              ON o.subscription_id = s.id
            WHERE u.id::text = :user_id
        """
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), {"user_id": user_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_subscription(row)
