from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routers.billing import router as billing_router
from app.api.routers.pricing import router as pricing_router
from app.shared.config import get_settings

app = FastAPI(title="Subscription Pricing API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(pricing_router)
app.include_router(billing_router)
