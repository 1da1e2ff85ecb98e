from __future__ import annotations

from typing import Protocol

from app.domain.entities.subscription import Subscription


class SubscriptionPort(Protocol):
    def get_subscription_for_user(self, *, user_id: str) -> Subscription | None:
        ...
