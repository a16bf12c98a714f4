from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from src.api.app import app
from src.api.deps import get_today


@pytest.fixture
def client(base_date):
    app.dependency_overrides[get_today] = lambda: base_date
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:
    def test_ok(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestStartup:
    def test_logging_configured_on_startup(self, monkeypatch):
        from src.api import app as app_module
        from src.config import settings

        calls = []
        monkeypatch.setattr(app_module.logging, "basicConfig", lambda **kw: calls.append(kw))
        with TestClient(app) as started:
            assert started.get("/health").status_code == 200
        assert calls == [{"level": settings.log_level}]


class TestPaymentRoute:
    def test_plain_payment(self, client):
        resp = client.post("/api/v1/loans/payment", json={
            "loan_amount": 20000, "rate": 0.075, "period": 5,
        })
        assert resp.status_code == 200
        body = resp.json()
        assert Decimal(body["monthly_payment"]) == Decimal("400.76")
        assert Decimal(body["monthly_payment_with_fees"]) == Decimal("400.76")

    def test_loose_fee_values(self, client):
        resp = client.post("/api/v1/loans/payment", json={
            "loan_amount": 2100000, "rate": 0.0197, "period": 25,
            "principal_fees": ["2000", 1000, None, "n/a"],
            "period_fees": [100, ""],
        })
        assert resp.status_code == 200
        body = resp.json()
        assert Decimal(body["monthly_payment"]) == Decimal("8870.30")
        assert Decimal(body["monthly_payment_with_fees"]) == Decimal("8982.97")
        assert Decimal(body["principal_fees_total"]) == Decimal("3000")
        assert Decimal(body["period_fees_total"]) == Decimal("100")

    @pytest.mark.parametrize("payload", [
        {"loan_amount": 20000, "rate": 0, "period": 5},
        {"loan_amount": 20000, "rate": 7.5, "period": 5},
        {"loan_amount": 0, "rate": 0.075, "period": 5},
        {"loan_amount": 20000, "rate": 0.075, "period": 0},
        {"loan_amount": 20000, "rate": 0.075, "period": 41},
    ])
    def test_invalid_terms_rejected(self, client, payload):
        assert client.post("/api/v1/loans/payment", json=payload).status_code == 422


class TestEffectiveRateRoute:
    def test_known_rate(self, client):
        resp = client.post("/api/v1/loans/effective-rate", json={
            "loan_amount": 17000, "monthly_payment": 518, "period": 5,
        })
        assert resp.status_code == 200
        rate = Decimal(resp.json()["effective_rate"])
        assert Decimal("0.3043") <= rate <= Decimal("0.3049")

    def test_convergence_failure(self, client, monkeypatch):
        from src.config import settings

        monkeypatch.setattr(settings, "solver_max_iterations", 2)
        resp = client.post("/api/v1/loans/effective-rate", json={
            "loan_amount": 17000, "monthly_payment": 518, "period": 5,
        })
        assert resp.status_code == 422
        assert "did not converge" in resp.json()["detail"]


class TestScheduleRoute:
    def test_defaults_to_injected_today(self, client):
        resp = client.post("/api/v1/loans/schedule", json={
            "loan_amount": 20000, "rate": 0.075, "period": 5,
        })
        assert resp.status_code == 200
        body = resp.json()
        assert body["start_date"] == "1985-10-26"
        assert len(body["entries"]) == 60
        assert (body["entries"][0]["year"], body["entries"][0]["month"]) == (1985, 10)

    def test_explicit_start_and_fees(self, client):
        resp = client.post("/api/v1/loans/schedule", json={
            "loan_amount": 4000000, "rate": 0.025, "period": 25,
            "principal_fees": [2000, 1000], "period_fees": [100],
            "start_date": "2025-01-15",
        })
        body = resp.json()
        entries = body["entries"]
        assert len(entries) == 300
        assert Decimal(entries[0]["fees_paid"]) == Decimal("3100")
        assert Decimal(entries[-1]["remainder"]) == 0
        assert body["yearly"][0]["year"] == 2025
        assert body["yearly"][0]["payments"] == 11
        assert date.fromisoformat(body["start_date"]) == date(2025, 1, 15)


class TestLTVRoute:
    def test_ratio(self, client):
        resp = client.post("/api/v1/loans/ltv", json={
            "loan_amount": 3000000, "purchase_price": 4000000,
        })
        assert Decimal(resp.json()["ltv"]) == Decimal("0.75")

    def test_zero_price(self, client):
        resp = client.post("/api/v1/loans/ltv", json={
            "loan_amount": 3000000, "purchase_price": 0,
        })
        assert Decimal(resp.json()["ltv"]) == Decimal("1")
