from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


PlanChangeType = Literal[
    "free-onboarding",
    "first-payment",
    "same-plan",
    "cancel",
    "upgrade",
    "downgrade",
    "unknown",
]


@dataclass(frozen=True)
class Subscription:
    id: str
    user_id: str
    plan_id: str
    onboarding_completed: bool


@dataclass(frozen=True)
class PlanChange:
    type: PlanChangeType
    requires_payment: bool
