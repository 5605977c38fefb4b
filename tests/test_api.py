"""Tests for the FastAPI endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from diagnostic.main import app, get_diagnostic_store
from diagnostic.storage import InMemoryDiagnosticStore

SCENARIO_A = {
    "financial": {
        "averageTicket": 1000,
        "profitMargin": 30,
        "currentMonthlyRevenue": 30000,
        "monthlyGoalRevenue": 50000,
        "clientsPerMonth": 5,
    },
    "benchmark": {"businessType": "B2C"},
}


@pytest.fixture(autouse=True)
def fresh_store():
    store = InMemoryDiagnosticStore()
    app.dependency_overrides[get_diagnostic_store] = lambda: store
    yield store
    app.dependency_overrides.clear()


def _client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


class TestCalculationAPI:
    @pytest.mark.asyncio
    async def test_calculate_returns_metrics(self):
        async with _client() as client:
            resp = await client.post("/api/diagnostics/calculate", json=SCENARIO_A)
        assert resp.status_code == 200
        metrics = resp.json()["metrics"]
        assert metrics["requiredSales"] == 20
        assert metrics["requiredLeads"] == 100
        assert metrics["requiredClicks"] == 500
        assert metrics["requiredReach"] == 10000
        assert metrics["maxCAC"] == pytest.approx(90)
        assert metrics["recommendations"][0]["code"] == "capacity"

    @pytest.mark.asyncio
    async def test_calculate_rejects_invalid_snapshot(self):
        async with _client() as client:
            resp = await client.post(
                "/api/diagnostics/calculate",
                json={"financial": {"averageTicket": -100}},
            )
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_calculate_rejects_infinity(self):
        async with _client() as client:
            resp = await client.post(
                "/api/diagnostics/calculate",
                content='{"financial": {"averageTicket": 1000, "monthlyGoalRevenue": Infinity}}',
                headers={"Content-Type": "application/json"},
            )
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_calculate_resolves_ticket_from_revenue_and_sales(self):
        body = {
            "financial": {
                "currentMonthlyRevenue": 30000,
                "currentMonthlySales": 30,
                "monthlyGoalRevenue": 50000,
            }
        }
        async with _client() as client:
            resp = await client.post("/api/diagnostics/calculate", json=body)
        assert resp.status_code == 200
        metrics = resp.json()["metrics"]
        assert metrics["requiredSales"] == 20
        assert metrics["maxCAC"] == pytest.approx(90)

    @pytest.mark.asyncio
    async def test_calculate_with_profit_anchor(self):
        body = {
            "financial": {
                "averageTicket": 1000,
                "currentMonthlyRevenue": 30000,
                "profit": 3000,
                "monthlyGoalRevenue": 50000,
            }
        }
        async with _client() as client:
            resp = await client.post(
                "/api/diagnostics/calculate", params={"anchor": "profit"}, json=body
            )
        assert resp.status_code == 200
        # 3000 / 30000 = 10% margin -> 1000 * 10% * 30% = 30
        assert resp.json()["metrics"]["maxCAC"] == pytest.approx(30)

    @pytest.mark.asyncio
    async def test_calculate_empty_body_uses_defaults(self):
        async with _client() as client:
            resp = await client.post("/api/diagnostics/calculate", json={})
        assert resp.status_code == 200
        assert resp.json()["metrics"]["requiredSales"] == 0

    @pytest.mark.asyncio
    async def test_business_type_switch(self):
        async with _client() as client:
            resp = await client.post(
                "/api/diagnostics/business-type",
                json={"data": SCENARIO_A, "businessType": "B2B"},
            )
        assert resp.status_code == 200
        benchmark = resp.json()["benchmark"]
        assert benchmark["businessType"] == "B2B"
        assert benchmark["conversionRates"]["clickToLead"] == 32
        assert benchmark["conversionRates"]["leadToSale"] == 12.5

    @pytest.mark.asyncio
    async def test_recompute_with_profit_anchor(self):
        body = {
            "data": {
                "financial": {
                    "currentMonthlyRevenue": 20000,
                    "currentMonthlySales": 40,
                    "profit": 5000,
                }
            },
            "anchor": "profit",
        }
        async with _client() as client:
            resp = await client.post("/api/diagnostics/recompute", json=body)
        assert resp.status_code == 200
        financial = resp.json()["financial"]
        assert financial["averageTicket"] == pytest.approx(500)
        assert financial["profitMargin"] == pytest.approx(25)

    @pytest.mark.asyncio
    async def test_benchmarks_and_initial(self):
        async with _client() as client:
            presets = (await client.get("/api/benchmarks")).json()
            initial = (await client.get("/api/diagnostics/initial")).json()
        assert presets["B2B"]["leadToSale"] == 12.5
        assert presets["B2C"]["clickToLead"] == 20
        assert initial["financial"]["profitMargin"] == 30
        assert initial["validation"]["month1Percentage"] == 50


class TestClientDiagnosticAPI:
    @pytest.mark.asyncio
    async def test_missing_snapshot_is_404(self):
        async with _client() as client:
            resp = await client.get("/api/clients/acme/diagnostic")
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_save_then_load(self, fresh_store):
        async with _client() as client:
            put = await client.put(
                "/api/clients/acme/diagnostic",
                json={"financial": {"currentMonthlyRevenue": 30000, "currentMonthlySales": 30}},
            )
            get = await client.get("/api/clients/acme/diagnostic")
        assert put.status_code == 200
        assert get.status_code == 200
        assert get.json() == put.json()
        # derived fields are resolved before storing
        assert get.json()["financial"]["averageTicket"] == pytest.approx(1000)
        assert fresh_store.load("acme") is not None


class TestAPIInfrastructure:
    @pytest.mark.asyncio
    async def test_cors_allows_localhost_3000(self):
        async with _client() as client:
            resp = await client.options(
                "/api/diagnostics/calculate",
                headers={
                    "Origin": "http://localhost:3000",
                    "Access-Control-Request-Method": "POST",
                },
            )
        assert resp.headers.get("access-control-allow-origin") == "http://localhost:3000"

    @pytest.mark.asyncio
    async def test_health_check_endpoint(self):
        async with _client() as client:
            resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}
