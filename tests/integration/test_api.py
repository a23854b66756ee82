"""Integration tests for API endpoints"""

import pytest
from fastapi.testclient import TestClient
from expense_tracker.config import settings


def add(client: TestClient, person: str, item: str, cost) -> dict:
    response = client.post("/v1/expenses", json={"person": person, "item": item, "cost": cost})
    assert response.status_code == 201, response.text
    return response.json()


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "X-Request-ID" in response.headers


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    add(client, "Mama", "Bread", "2")
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "expense_actions_total" in response.text


def test_people_endpoint(client: TestClient):
    response = client.get("/v1/people")
    assert response.status_code == 200
    assert response.json()["names"] == settings.prefilled_names


def test_add_expense(client: TestClient):
    """Test POST /v1/expenses trims input and formats cost"""
    data = add(client, "  Martyna ", " Groceries ", 50.75)

    assert data["person"] == "Martyna"
    assert data["item"] == "Groceries"
    assert data["cost"] == "50.75"
    assert data["cost_formatted"] == "€ 50,75"
    assert data["status"] == "unpaid"
    assert data["paid_at"] is None
    assert data["paid_batch_id"] is None
    assert data["prefill_person"] == "Martyna"


def test_add_expense_unknown_person_has_no_prefill(client: TestClient):
    assert add(client, "Stranger", "Gift", "5")["prefill_person"] is None


@pytest.mark.parametrize(
    "body",
    [
        {"person": "", "item": "Taxi", "cost": "5"},
        {"person": "Mama", "item": "   ", "cost": "5"},
        {"person": "Mama", "item": "Taxi", "cost": "five"},
        {"person": "Mama", "item": "Taxi", "cost": "-5"},
        {"person": "Mama", "item": "Taxi"},
        {"person": "Mama", "item": "Taxi", "cost": True},
    ],
)
def test_add_expense_invalid_input(client: TestClient, body: dict):
    response = client.post("/v1/expenses", json=body)
    assert response.status_code == 422
    assert client.get("/v1/expenses").json()["expenses"] == []


def test_martyna_report_and_history_flow(client: TestClient):
    """Test the add -> report -> pay-by-person -> history walkthrough"""
    add(client, "Martyna", "Groceries", 50.75)
    report = client.get("/v1/report").json()
    assert report["people"][0]["person"] == "Martyna"
    assert report["people"][0]["total"] == "50.75"

    add(client, "Martyna", "Taxi", "20.00")
    report = client.get("/v1/report").json()
    martyna = report["people"][0]
    assert martyna["total"] == "70.75"
    assert martyna["total_formatted"] == "€ 70,75"
    assert [i["item"] for i in martyna["items"]] == ["Groceries", "Taxi"]

    response = client.post("/v1/report/Martyna/pay")
    assert response.status_code == 200
    batch = response.json()
    assert batch["person"] == "Martyna"
    assert len(batch["items"]) == 2

    report = client.get("/v1/report").json()
    assert report["people"] == []
    assert report["grand_total"] == "0"

    history = client.get("/v1/history").json()["batches"]
    assert len(history) == 1
    assert history[0]["batch_id"] == batch["batch_id"]
    assert history[0]["person"] == "Martyna"
    assert history[0]["total"] == "70.75"
    assert len(history[0]["items"]) == 2


def test_pay_person_not_found(client: TestClient):
    add(client, "Mama", "Bread", "2")
    response = client.post("/v1/report/Martyna/pay")
    assert response.status_code == 404


def test_pay_single_expense(client: TestClient):
    expense = add(client, "Joint", "Rent", "800")

    response = client.post(f"/v1/expenses/{expense['id']}/pay")
    assert response.status_code == 200
    assert [i["id"] for i in response.json()["items"]] == [expense["id"]]

    again = client.post(f"/v1/expenses/{expense['id']}/pay")
    assert again.status_code == 409


def test_history_most_recent_first(client: TestClient):
    first = add(client, "Mama", "Bread", "2")
    second = add(client, "Joint", "Rent", "800")
    client.post(f"/v1/expenses/{first['id']}/pay")
    client.post(f"/v1/expenses/{second['id']}/pay")

    batches = client.get("/v1/history").json()["batches"]

    assert [b["person"] for b in batches] == ["Joint", "Mama"]


def test_toggle_paid(client: TestClient):
    expense = add(client, "Mama", "Bread", "2")

    paid = client.post(f"/v1/expenses/{expense['id']}/toggle-paid").json()
    assert paid["status"] == "paid"
    assert paid["paid_batch_id"] is not None

    unpaid = client.post(f"/v1/expenses/{expense['id']}/toggle-paid").json()
    assert unpaid["status"] == "unpaid"
    assert unpaid["paid_at"] is None
    assert unpaid["paid_batch_id"] is None

    assert client.post("/v1/expenses/missing/toggle-paid").status_code == 404


def test_get_and_edit_expense(client: TestClient):
    expense = add(client, "Mama", "Bread", "2")

    fetched = client.get(f"/v1/expenses/{expense['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["item"] == "Bread"

    response = client.put(
        f"/v1/expenses/{expense['id']}",
        json={"person": "Joint", "item": "Sourdough", "cost": "4.5"},
    )
    assert response.status_code == 200
    edited = response.json()
    assert (edited["person"], edited["item"], edited["cost"]) == ("Joint", "Sourdough", "4.5")
    assert edited["added_at"] == expense["added_at"]
    assert edited["status"] == "unpaid"


def test_edit_expense_errors(client: TestClient):
    expense = add(client, "Mama", "Bread", "2")

    missing = client.put("/v1/expenses/missing", json={"person": "Mama", "item": "Bread", "cost": "2"})
    assert missing.status_code == 404

    invalid = client.put(f"/v1/expenses/{expense['id']}", json={"person": "Mama", "item": "Bread", "cost": "0"})
    assert invalid.status_code == 422

    assert client.get("/v1/expenses/missing").status_code == 404


def test_edit_paid_expense_policy(client: TestClient, monkeypatch):
    expense = add(client, "Mama", "Bread", "2")
    client.post(f"/v1/expenses/{expense['id']}/pay")
    body = {"person": "Mama", "item": "Bread", "cost": "3"}

    monkeypatch.setattr(settings, "allow_edit_paid", False)
    assert client.put(f"/v1/expenses/{expense['id']}", json=body).status_code == 409

    monkeypatch.setattr(settings, "allow_edit_paid", True)
    response = client.put(f"/v1/expenses/{expense['id']}", json=body)
    assert response.status_code == 200
    assert response.json()["status"] == "paid"


def test_delete_expense(client: TestClient):
    keep = add(client, "Mama", "Bread", "2")
    drop = add(client, "Mama", "Milk", "1")

    response = client.delete(f"/v1/expenses/{drop['id']}")
    assert response.status_code == 204

    remaining = client.get("/v1/expenses").json()["expenses"]
    assert [e["id"] for e in remaining] == [keep["id"]]
    assert client.delete(f"/v1/expenses/{drop['id']}").status_code == 404


def test_json_file_backend(client: TestClient, monkeypatch, tmp_path):
    """Test the same API persists through the JSON file store"""
    data_file = tmp_path / "data.json"
    monkeypatch.setattr(settings, "store_backend", "json")
    monkeypatch.setattr(settings, "data_file_path", str(data_file))

    add(client, "Mama", "Bread", "2")

    assert data_file.exists()
    assert client.get("/v1/report").json()["people"][0]["person"] == "Mama"


def test_store_failure_returns_503(client: TestClient, monkeypatch, tmp_path):
    broken = tmp_path / "data.json"
    broken.write_text("not json", encoding="utf-8")
    monkeypatch.setattr(settings, "store_backend", "json")
    monkeypatch.setattr(settings, "data_file_path", str(broken))

    assert client.get("/v1/report").status_code == 503
