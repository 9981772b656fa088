from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from moneylab.api.app import app
from moneylab.api.deps import get_usage_tracker


class RecordingTracker:
    def __init__(self):
        self.calls: list[str] = []

    def record(self, calculator_id: str) -> None:
        self.calls.append(calculator_id)


@pytest.fixture
def tracker():
    recorder = RecordingTracker()
    app.dependency_overrides[get_usage_tracker] = lambda: recorder
    yield recorder
    app.dependency_overrides.clear()


@pytest.fixture
def client(tracker):
    return TestClient(app)


BALANCES = [
    {"id": "visa", "principal": "3000", "apr": "24", "minimum_payment": "90"},
    {"id": "store", "principal": "2000", "apr": "19.99", "minimum_payment": "60"},
]


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


class TestScheduleRoute:
    def test_derived_payment(self, client, tracker):
        resp = client.post("/api/v1/debt/schedule", json={
            "principal": "1800", "apr": "0", "term_periods": 1,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["periods"] == 1
        assert Decimal(data["entries"][0]["principal"]) == Decimal("1800")
        assert data["converged"] is True
        assert data["warning"] is None
        assert tracker.calls == ["amortization-schedule"]

    def test_non_convergent_warning(self, client):
        resp = client.post("/api/v1/debt/schedule", json={
            "principal": "10000", "payment": "200", "apr": "22", "period_cap": 120,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["converged"] is False
        assert "120 periods" in data["warning"]

    def test_invalid_input(self, client, tracker):
        resp = client.post("/api/v1/debt/schedule", json={
            "principal": "1000", "payment": "0", "apr": "5",
        })
        assert resp.status_code == 422
        detail = resp.json()["detail"]
        assert detail["kind"] == "invalid_input"
        assert detail["errors"][0]["field"] == "payment"
        assert tracker.calls == []


class TestAllocateRoute:
    def test_avalanche(self, client, tracker):
        resp = client.post("/api/v1/debt/allocate", json={
            "balances": BALANCES, "monthly_budget": "500", "policy": "avalanche",
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["order"] == ["visa", "store"]
        assert data["converged"] is True
        assert Decimal(data["total_interest_saved"]) > 0
        assert tracker.calls == ["debt-payoff-avalanche"]

    def test_insufficient_budget(self, client):
        resp = client.post("/api/v1/debt/allocate", json={
            "balances": BALANCES, "monthly_budget": "100", "policy": "snowball",
        })
        assert resp.status_code == 422
        assert resp.json()["detail"]["kind"] == "insufficient_budget"

    def test_zero_period_cap(self, client, tracker):
        resp = client.post("/api/v1/debt/allocate", json={
            "balances": BALANCES, "monthly_budget": "500", "policy": "avalanche", "period_cap": 0,
        })
        assert resp.status_code == 422
        detail = resp.json()["detail"]
        assert detail["kind"] == "invalid_input"
        assert [e["field"] for e in detail["errors"]] == ["period_cap"]
        assert tracker.calls == []


class TestBalanceTransferRoute:
    def test_transfer(self, client, tracker):
        resp = client.post("/api/v1/debt/balance-transfer", json={
            "balances": BALANCES,
            "card": {"name": "Intro 0% Card", "intro_periods": 15, "regular_apr": "21.99"},
        })
        assert resp.status_code == 200
        data = resp.json()
        assert Decimal(data["transfer_fee"]) == Decimal("150")
        assert Decimal(data["savings"]) > 0
        assert len(data["scenarios"]) == 5
        assert [r["action"] for r in data["recommendations"]] == ["proceed"]
        assert tracker.calls == ["balance-transfer"]


class TestSavingsRoutes:
    def test_project(self, client, tracker):
        resp = client.post("/api/v1/savings/project", json={
            "initial": "5000", "monthly_contribution": "200", "annual_rate": "4.5", "years": 5,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert len(data["yearly"]) == 6
        assert Decimal(data["summary"]["future_value"]) > Decimal("17000")
        assert [i["title"] for i in data["insights"]] == ["Excellent Savings Rate", "Smart Banking Choice"]
        assert data["insights"][0]["level"] == "success"
        assert tracker.calls == ["savings-projection"]

    def test_project_invalid(self, client):
        resp = client.post("/api/v1/savings/project", json={
            "initial": "5000", "annual_rate": "4.5", "years": 0,
        })
        assert resp.status_code == 422
        assert resp.json()["detail"]["errors"][0]["field"] == "years"

    def test_simulate_seeded(self, client):
        body = {
            "initial": "5000", "monthly_contribution": "200", "annual_rate": "4.5",
            "years": 5, "risk_profile": "aggressive", "runs": 200, "seed": 42,
        }
        first = client.post("/api/v1/savings/simulate", json=body).json()
        second = client.post("/api/v1/savings/simulate", json=body).json()
        assert first == second
        assert [r["percentile"] for r in first["results"]] == [10, 25, 50, 75, 90]

    def test_simulate_unknown_profile(self, client):
        resp = client.post("/api/v1/savings/simulate", json={
            "initial": "5000", "annual_rate": "4.5", "years": 5, "risk_profile": "yolo", "runs": 10,
        })
        assert resp.status_code == 422

    def test_bank_scenarios(self, client):
        resp = client.post("/api/v1/savings/scenarios", json={
            "initial": "5000", "monthly_contribution": "200", "years": 5,
        })
        assert resp.status_code == 200
        ranked = resp.json()
        assert ranked[0]["name"] == "Best Rate (5.2%)"
        assert ranked[-1]["is_baseline"] is True

    def test_cd(self, client, tracker):
        resp = client.post("/api/v1/savings/cd", json={
            "principal": "10000", "apy": "5", "term_months": 12,
            "withdrawal_month": 6, "penalty_months": 3, "ladder_rungs": 3,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert Decimal(data["final_amount"]) == Decimal("10511.62")
        assert Decimal(data["early_withdrawal"]["penalty"]) == Decimal("125")
        assert len(data["ladder"]) == 3
        assert tracker.calls == ["certificate-of-deposit"]

    def test_cd_invalid(self, client):
        resp = client.post("/api/v1/savings/cd", json={"principal": "0", "apy": "5", "term_months": 12})
        assert resp.status_code == 422
        assert resp.json()["detail"]["kind"] == "invalid_input"
        assert resp.json()["detail"]["errors"][0]["field"] == "principal"

    def test_cd_withdrawal_after_maturity(self, client, tracker):
        resp = client.post("/api/v1/savings/cd", json={
            "principal": "10000", "apy": "5", "term_months": 12, "withdrawal_month": 13, "penalty_months": 3,
        })
        assert resp.status_code == 422
        detail = resp.json()["detail"]
        assert [e["field"] for e in detail["errors"]] == ["withdrawal_month"]
        assert tracker.calls == []

    def test_cd_negative_penalty(self, client):
        resp = client.post("/api/v1/savings/cd", json={
            "principal": "10000", "apy": "5", "term_months": 12, "withdrawal_month": 6, "penalty_months": -6,
        })
        assert resp.status_code == 422
        assert resp.json()["detail"]["errors"][0]["field"] == "penalty_months"

    def test_cd_negative_rungs(self, client):
        resp = client.post("/api/v1/savings/cd", json={
            "principal": "10000", "apy": "5", "term_months": 12, "ladder_rungs": -2,
        })
        assert resp.status_code == 422
        assert resp.json()["detail"]["errors"][0]["field"] == "ladder_rungs"
