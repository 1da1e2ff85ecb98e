from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class PricingInputError(DomainError):
    """Invalid parameters for a pricing calculation."""


class PlanNotFoundError(DomainError):
    """Requested plan does not exist."""


class SubscriptionNotFoundError(DomainError):
    """User has no subscription to change."""


class BillingError(DomainError):
    """Billing provider interaction failed."""
