from __future__ import annotations

from functools import lru_cache

from fastapi import HTTPException

from app.application.use_cases.calculate_total import CalculateTotalUseCase
from app.application.use_cases.check_plan_change import CheckPlanChangeUseCase
from app.application.use_cases.list_pricing_catalog import ListPricingCatalogUseCase
from app.application.use_cases.preview_price import PreviewPriceUseCase
from app.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from app.infrastructure.db.engine import get_engine
from app.infrastructure.db.repositories.pricing_catalog_repository import SqlPricingCatalogRepository
from app.infrastructure.db.repositories.subscription_repository import SqlSubscriptionRepository
from app.shared.config import get_settings


def _get_db_engine():
    settings = get_settings()
    if not settings.postgres_dsn:
        raise HTTPException(status_code=500, detail="POSTGRES_DSN is required.")
    return get_engine(settings.postgres_dsn)


@lru_cache(maxsize=1)
def _get_stripe_client() -> "StripeClient":
    from app.infrastructure.clients.stripe_client import StripeClient

    settings = get_settings()
    if not settings.stripe_secret_key:
        raise HTTPException(status_code=500, detail="STRIPE_SECRET_KEY is required.")
    if not settings.stripe_webhook_secret:
        raise HTTPException(status_code=500, detail="STRIPE_WEBHOOK_SECRET is required.")
    return StripeClient(
        secret_key=settings.stripe_secret_key,
        webhook_secret=settings.stripe_webhook_secret,
    )


def _get_pricing_catalog_repository() -> SqlPricingCatalogRepository:
    return SqlPricingCatalogRepository(_get_db_engine())


def get_list_pricing_catalog_use_case() -> ListPricingCatalogUseCase:
    return ListPricingCatalogUseCase(catalog_port=_get_pricing_catalog_repository())


def get_calculate_total_use_case() -> CalculateTotalUseCase:
    settings = get_settings()
    return CalculateTotalUseCase(
        catalog_port=_get_pricing_catalog_repository(),
        default_vat_percent=settings.default_vat_percent,
    )


def get_preview_price_use_case() -> PreviewPriceUseCase:
    settings = get_settings()
    return PreviewPriceUseCase(
        catalog_port=_get_pricing_catalog_repository(),
        vat_percent=settings.default_vat_percent,
    )


def get_check_plan_change_use_case() -> CheckPlanChangeUseCase:
    settings = get_settings()
    db_engine = _get_db_engine()
    return CheckPlanChangeUseCase(
        catalog_port=SqlPricingCatalogRepository(db_engine),
        subscription_port=SqlSubscriptionRepository(db_engine),
        free_plan_name=settings.free_plan_name,
    )


def get_process_stripe_webhook_use_case() -> ProcessStripeWebhookUseCase:
    return ProcessStripeWebhookUseCase(
        catalog_port=_get_pricing_catalog_repository(),
        stripe_port=_get_stripe_client(),
    )
