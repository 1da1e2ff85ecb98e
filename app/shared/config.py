from __future__ import annotations

import json
import os
from dataclasses import dataclass
from decimal import Decimal

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _json_list(name: str, default: list[str]) -> list[str]:
    value = _env(name)
    if not value:
        return default
    return list(json.loads(value))


@dataclass(frozen=True)
class Settings:
    postgres_dsn: str
    default_vat_percent: Decimal
    free_plan_name: str
    stripe_secret_key: str
    stripe_webhook_secret: str
    cors_allow_origins: list[str]


def get_settings() -> Settings:
    return Settings(
        postgres_dsn=_env("POSTGRES_DSN", ""),
        default_vat_percent=Decimal(_env("DEFAULT_VAT_PERCENT", "24")),
        free_plan_name=_env("FREE_PLAN_NAME", "Basic"),
        stripe_secret_key=_env("STRIPE_SECRET_KEY", ""),
        stripe_webhook_secret=_env("STRIPE_WEBHOOK_SECRET", ""),
        cors_allow_origins=_json_list("CORS_ALLOW_ORIGINS", ["*"]),
    )
