from __future__ import annotations

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_calculate_total_use_case, get_list_pricing_catalog_use_case
from app.application.dto.pricing import CatalogPlanOutput, CatalogPluginOutput, PricingCatalogOutput
from app.application.use_cases.calculate_total import CalculateTotalUseCase
from app.domain.entities.plan import Plan
from app.domain.entities.pricing import DerivedPricing, TotalBreakdown
from app.domain.exceptions import PlanNotFoundError
from app.main import app


AUTH = {"Authorization": "Bearer token"}


class FakeCalculateTotalUseCase:
    def __init__(self):
        self.commands = []

    def execute(self, command):
        self.commands.append(command)
        if command.plan_id == "missing":
            raise PlanNotFoundError("Plan not found.")
        return TotalBreakdown(
            subtotal=Decimal("90.00"),
            vat_percent=Decimal("24"),
            vat_amount=Decimal("21.60"),
            total=Decimal("111.60"),
        )


class FakeListPricingCatalogUseCase:
    def execute(self):
        return PricingCatalogOutput(
            plans=[
                CatalogPlanOutput(
                    id="pro",
                    name="Pro",
                    included_branches=1,
                    currency="EUR",
                    pricing=DerivedPricing(
                        monthly=Decimal("50"),
                        yearly=Decimal("500"),
                        display_monthly_from_yearly=Decimal("41.67"),
                        yearly_discount_percent=17,
                    ),
                    extra_store_pricing=None,
                )
            ],
            plugins=[CatalogPluginOutput(key="notes", name="Notes", pricing=None)],
        )



class SinglePlanCatalog:
    def __init__(self, plan: Plan):
        self._plan = plan

    def get_plan_by_id(self, *, plan_id: str) -> Plan | None:
        return self._plan if plan_id == self._plan.id else None

    def list_plugins_by_keys(self, *, keys: list[str]):
        _ = keys
        return []


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_normalize_returns_derived_pricing(client):
    response = client.post("/v1/pricing/normalize", json={"monthly": "100", "yearly": "1000"}, headers=AUTH)

    assert response.status_code == 200
    payload = response.json()
    assert payload["display_monthly_from_yearly"] == "83.33"
    assert payload["yearly_discount_percent"] == 17


def test_normalize_without_prices_returns_null(client):
    response = client.post("/v1/pricing/normalize", json={}, headers=AUTH)

    assert response.status_code == 200
    assert response.json() is None


def test_total_returns_breakdown(client):
    fake = FakeCalculateTotalUseCase()
    app.dependency_overrides[get_calculate_total_use_case] = lambda: fake

    response = client.post(
        "/v1/pricing/total",
        json={"plan_id": "pro", "billing_period": "monthly", "extra_stores": 2, "plugins": ["inventory"]},
        headers=AUTH,
    )

    assert response.status_code == 200
    assert response.json() == {
        "subtotal": "90.00",
        "vat_percent": "24",
        "vat_amount": "21.60",
        "total": "111.60",
    }
    assert fake.commands[0].plugin_keys == ["inventory"]
    assert fake.commands[0].vat_percent is None


def test_total_unknown_plan_is_404(client):
    app.dependency_overrides[get_calculate_total_use_case] = lambda: FakeCalculateTotalUseCase()

    response = client.post(
        "/v1/pricing/total",
        json={"plan_id": "missing", "billing_period": "monthly"},
        headers=AUTH,
    )

    assert response.status_code == 404


def test_total_rejects_negative_store_count(client):
    app.dependency_overrides[get_calculate_total_use_case] = lambda: FakeCalculateTotalUseCase()

    response = client.post(
        "/v1/pricing/total",
        json={"plan_id": "pro", "billing_period": "monthly", "extra_stores": -1},
        headers=AUTH,
    )

    assert response.status_code == 422


def test_catalog_lists_plans_and_plugins(client):
    app.dependency_overrides[get_list_pricing_catalog_use_case] = lambda: FakeListPricingCatalogUseCase()

    response = client.get("/v1/pricing/catalog", headers=AUTH)

    assert response.status_code == 200
    payload = response.json()
    assert payload["plans"][0]["pricing"]["yearly_discount_percent"] == 17
    assert payload["plans"][0]["extra_store_pricing"] is None
    assert payload["plugins"][0]["pricing"] is None


def test_requests_without_bearer_token_are_rejected(client):
    response = client.post(
        "/v1/pricing/normalize",
        json={"monthly": "10"},
        headers={"Authorization": "Basic abc"},
    )

    assert response.status_code == 401


@pytest.mark.parametrize(
    "body",
    [
        {"yearly": "1e30"},
        {"monthly": "-1"},
        {"monthly": "1000000000.01"},
    ],
)
def test_normalize_rejects_out_of_range_prices(client, body):
    response = client.post("/v1/pricing/normalize", json=body, headers=AUTH)

    assert response.status_code == 422


def test_normalize_extreme_ratio_still_answers(client):
    response = client.post(
        "/v1/pricing/normalize",
        json={"monthly": "1e-20", "yearly": "1000000000"},
        headers=AUTH,
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["display_monthly_from_yearly"] == "83333333.33"
    assert isinstance(payload["yearly_discount_percent"], int)


def test_total_rejects_vat_above_one_hundred(client):
    app.dependency_overrides[get_calculate_total_use_case] = lambda: FakeCalculateTotalUseCase()

    response = client.post(
        "/v1/pricing/total",
        json={"plan_id": "pro", "billing_period": "monthly", "vat_percent": "1e30"},
        headers=AUTH,
    )

    assert response.status_code == 422


def test_total_with_huge_store_count_answers(client):
    plan = Plan(
        id="pro",
        name="Pro",
        included_branches=1,
        price_monthly=Decimal("50"),
        price_yearly=Decimal("500"),
        extra_store_price_monthly=Decimal("10"),
        extra_store_price_yearly=Decimal("100"),
        currency="EUR",
    )
    use_case = CalculateTotalUseCase(
        catalog_port=SinglePlanCatalog(plan),
        default_vat_percent=Decimal("24"),
    )
    app.dependency_overrides[get_calculate_total_use_case] = lambda: use_case

    response = client.post(
        "/v1/pricing/total",
        json={"plan_id": "pro", "billing_period": "monthly", "extra_stores": 10**30},
        headers=AUTH,
    )

    assert response.status_code == 200
    assert Decimal(response.json()["total"]) > Decimal("1e31")
