import pytest

from loan_payoff_web.app import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def _form(**overrides):
    form = {
        "amount": "1000",
        "apr": "12",
        "compounding": "yearly",
        "payment": "2000",
        "every": "30",
        "currency": "USD",
        "action": "run",
    }
    form.update(overrides)
    return form


def test_index_shows_default_plan(client):
    response = client.get("/")
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "Total time:" in body
    assert 'value="43524.71"' in body
    assert "Take a snapshot to view multiple payment plans" in body


def test_post_recomputes(client):
    body = client.post("/", data=_form()).get_data(as_text=True)
    assert "1 months 0 days" in body
    assert "$0.00" in body


def test_unpayable_message(client):
    body = client.post("/", data=_form(apr="1200", compounding="daily", payment="1", every="1")).get_data(as_text=True)
    assert "Invalid payment!" in body


def test_bad_number_reported(client):
    response = client.post("/", data=_form(amount="lots"))
    assert response.status_code == 200
    assert "Invalid numeric value: lots" in response.get_data(as_text=True)


def test_snapshot_then_clear(client):
    client.post("/", data=_form(action="snapshot"))
    body = client.post("/", data=_form(action="snapshot", payment="600")).get_data(as_text=True)
    assert body.count("<td>$1,000.00</td>") == 2
    assert "<td>$600.00</td>" in body

    response = client.post("/snapshots/clear")
    assert response.status_code == 302
    body = client.get("/").get_data(as_text=True)
    assert "Take a snapshot to view multiple payment plans" in body


def test_failed_run_is_not_snapshotted(client):
    body = client.post(
        "/", data=_form(action="snapshot", apr="1200", compounding="daily", payment="1", every="1")
    ).get_data(as_text=True)
    assert "Take a snapshot to view multiple payment plans" in body


def test_api_success(client):
    response = client.post(
        "/api/payoff",
        json={"amount": 1000, "apr": 12, "compounding": "yearly", "payment": 2000, "payment_interval_days": 30},
    )
    assert response.status_code == 200
    data = response.get_json()
    assert data["ok"] is True
    assert data["snapshot"]["days"] == 30
    assert data["snapshot"]["human_duration"] == "1 months 0 days"
    assert data["snapshot"]["interest"] == 0


def test_api_unpayable(client):
    response = client.post(
        "/api/payoff",
        json={"amount": 1000, "apr": 1200, "compounding": "daily", "payment": 1, "payment_interval_days": 1},
    )
    assert response.status_code == 422
    assert response.get_json() == {"ok": False, "error": "UnpayableSchedule"}


def test_api_invalid_input(client):
    response = client.post("/api/payoff", json={"amount": "lots", "apr": 5, "payment": 10})
    assert response.status_code == 400
    assert response.get_json()["error"] == "InvalidInput"


def test_api_rejects_non_object_body(client):
    response = client.post("/api/payoff", json=[1, 2])
    assert response.status_code == 400
    assert response.get_json()["error"] == "InvalidInput"


def test_api_rejects_negative_amount(client):
    response = client.post(
        "/api/payoff",
        json={"amount": -1000, "apr": 5, "compounding": "daily", "payment": 10, "payment_interval_days": 30},
    )
    assert response.status_code == 400
    assert "Amount must not be negative" in response.get_json()["detail"]


def test_api_rejects_interval_beyond_cap(client):
    response = client.post(
        "/api/payoff",
        json={"amount": 1000, "apr": 5, "compounding": "daily", "payment": 10, "payment_interval_days": 10**12},
    )
    assert response.status_code == 400
    assert "Payment interval must be at most" in response.get_json()["detail"]


def test_form_rejects_negative_amount(client):
    body = client.post("/", data=_form(amount="-1000", action="snapshot")).get_data(as_text=True)
    assert "Amount must not be negative" in body
    assert "Take a snapshot to view multiple payment plans" in body


def test_form_rejects_interval_beyond_cap(client):
    body = client.post("/", data=_form(every=str(10**12))).get_data(as_text=True)
    assert "Payment interval must be at most" in body
