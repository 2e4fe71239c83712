import pytest
from fastapi.testclient import TestClient

from conftest import USER_ID, MemoryGateway
from fintrack.auth import get_context
from fintrack.context import FinTrackContext
from fintrack.main import app


@pytest.fixture
def memory():
    return MemoryGateway(tables={
        "financial_goals": [
            {"id": "g1", "user_id": USER_ID, "title": "Laptop", "target_amount": 80_000,
             "current_amount": 80_000, "status": "completed", "priority": "high"},
        ],
    })


@pytest.fixture
def client(memory):
    app.dependency_overrides[get_context] = lambda: FinTrackContext(memory, USER_ID)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health_check(client):
    resp = client.get("/api/v1/health-check")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_calculate_tax(client):
    resp = client.post("/api/v1/tax/calculate", json={"annual_income": 500_000})
    assert resp.status_code == 200
    body = resp.json()
    assert body["regime"] == "new"
    assert body["tax"] == pytest.approx(12_500)
    assert body["net_income"] == pytest.approx(487_500)


def test_compare_regimes(client):
    resp = client.post("/api/v1/tax/compare", json={"annual_income": 1_000_000})
    body = resp.json()
    assert body["recommended_regime"] == "new"
    assert body["savings"] == pytest.approx(37_500)


def test_negative_income_is_unprocessable(client):
    resp = client.post("/api/v1/tax/calculate", json={"annual_income": -1})
    assert resp.status_code == 422
    assert resp.json()["detail"] == ["Annual income cannot be negative"]


def test_allocation_preview(client):
    resp = client.post("/api/v1/tax/allocation", json={"monthly_surplus": 10_000, "risk_profile": "aggressive"})
    body = resp.json()
    assert resp.status_code == 200
    assert sum(a["amount"] for a in body["allocations"]) == pytest.approx(10_000)


def test_reference_financial_year(client):
    resp = client.get("/api/v1/reference/financial-year", params={"on": "2026-03-31"})
    body = resp.json()
    assert body["financial_year"] == 2025
    assert body["start"] == "2025-04-01"
    assert body["end"] == "2026-03-31"


def test_reference_format(client):
    body = client.get("/api/v1/reference/format", params={"amount": 1_234_567}).json()
    assert body["formatted"] == "₹12,34,567"
    assert body["compact"] == "₹12.3L"


def test_transaction_validation_lists_every_error(client, memory):
    resp = client.post("/api/v1/transactions", json={"amount": 0})
    assert resp.status_code == 422
    assert resp.json()["detail"] == [
        "Amount must be greater than 0",
        "Category is required",
        "Payment method is required",
    ]
    assert memory.calls == []


def test_create_and_list_transactions(client):
    resp = client.post("/api/v1/transactions", json={
        "amount": 450, "category_id": "food", "payment_method": "upi", "date": "2026-10-01",
    })
    assert resp.status_code == 200
    assert resp.json()["status"] == "success"

    listed = client.get("/api/v1/transactions").json()
    assert [t["amount"] for t in listed] == [450]


def test_invalid_goal_transition(client):
    resp = client.post("/api/v1/goals/g1/pause")
    assert resp.status_code == 422
    assert resp.json()["detail"] == ["Cannot change a completed goal to paused"]


def test_unknown_record_passes_through_not_found(client):
    resp = client.patch("/api/v1/transactions/missing", json={"amount": 10})
    assert resp.status_code == 404


def test_protected_route_needs_bearer_token():
    resp = TestClient(app).get("/api/v1/goals")
    assert resp.status_code == 401
