from __future__ import annotations

from datetime import UTC, datetime

import pytest


def _login(client, email: str) -> dict[str, str]:
    client.post("/users", json={"name": "Tester", "email": email, "password": "secret123"})
    token = client.post(
        "/users/login", json={"email": email, "password": "secret123"}
    ).get_json()["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def ann(client) -> dict[str, str]:
    return _login(client, "ann@x.com")


@pytest.fixture()
def labels(client, ann) -> tuple[int, int]:
    category = client.post("/categories", json={"name": "Food", "color": "#f00"}, headers=ann)
    method = client.post("/payment-methods", json={"name": "Card"}, headers=ann)
    assert category.status_code == 201
    assert method.status_code == 201
    return category.get_json()["id"], method.get_json()["id"]


def _transaction(client, headers, labels, amount: str, date: str, description="Groceries"):
    category_id, method_id = labels
    return client.post(
        "/transactions",
        json={
            "description": description,
            "amount": amount,
            "date": date,
            "categoryId": category_id,
            "paymentMethodId": method_id,
        },
        headers=headers,
    )


@pytest.mark.parametrize(
    "path", ["/categories", "/payment-methods", "/transactions", "/transactions/summary"]
)
def test_finance_routes_require_token(client, path: str) -> None:
    response = client.get(path)

    assert response.status_code == 401
    assert response.get_json()["message"] == "Token missing"


def test_create_and_list_transactions(client, ann, labels) -> None:
    older = _transaction(client, ann, labels, "-42.50", "2024-01-01T10:00:00Z")
    newer = _transaction(client, ann, labels, "1000", "2024-02-01T10:00:00Z", "Salary")
    assert older.status_code == 201
    assert newer.status_code == 201
    assert older.get_json()["category"]["name"] == "Food"
    assert older.get_json()["paymentMethod"]["name"] == "Card"

    listing = client.get("/transactions", headers=ann).get_json()
    assert [t["description"] for t in listing] == ["Salary", "Groceries"]
    assert listing[1]["amount"] == -42.5


def test_summary_aggregates(client, ann, labels) -> None:
    _transaction(client, ann, labels, "1000", "2024-01-01T00:00:00Z")
    _transaction(client, ann, labels, "-250.25", "2024-01-02T00:00:00Z")
    _transaction(client, ann, labels, "-49.75", "2024-01-03T00:00:00Z")

    summary = client.get("/transactions/summary", headers=ann).get_json()

    assert summary == {"balance": 700.0, "count": 3, "income": 1000.0, "expense": -300.0}


def test_transaction_with_foreign_category_is_rejected(client, ann, labels) -> None:
    bob = _login(client, "bob@x.io")
    bob_method = client.post("/payment-methods", json={"name": "Cash"}, headers=bob).get_json()

    response = _transaction(client, bob, (labels[0], bob_method["id"]), "10", "2024-01-01")

    assert response.status_code == 404
    assert response.get_json()["error"] == "category_not_found"


def test_transaction_validation(client, ann, labels) -> None:
    response = _transaction(client, ann, labels, "abc", "2024-01-01", description="ok")

    assert response.status_code == 422
    assert response.get_json()["error"] == "validation_error"


def test_reads_and_deletes_are_scoped_to_owner(client, ann, labels) -> None:
    created = _transaction(client, ann, labels, "5", "2024-01-01T00:00:00Z").get_json()
    bob = _login(client, "bob@x.io")

    assert client.get("/transactions", headers=bob).get_json() == []
    assert client.get("/categories", headers=bob).get_json() == []
    assert client.delete(f"/transactions/{created['id']}", headers=bob).status_code == 204
    assert len(client.get("/transactions", headers=ann).get_json()) == 1

    assert client.delete(f"/transactions/{created['id']}", headers=ann).status_code == 204
    assert client.get("/transactions", headers=ann).get_json() == []


def test_category_in_use_cannot_be_deleted(client, ann, labels) -> None:
    _transaction(client, ann, labels, "5", "2024-01-01T00:00:00Z")

    response = client.delete(f"/categories/{labels[0]}", headers=ann)

    assert response.status_code == 409
    assert response.get_json()["error"] == "category_in_use"


def test_delete_unused_labels(client, ann, labels) -> None:
    category_id, method_id = labels

    assert client.delete(f"/categories/{category_id}", headers=ann).status_code == 204
    assert client.delete(f"/payment-methods/{method_id}", headers=ann).status_code == 204
    assert client.get("/categories", headers=ann).get_json() == []
    assert client.get("/payment-methods", headers=ann).get_json() == []


def test_transaction_dates_keep_their_instant_across_offsets(client, ann, labels) -> None:
    evening = _transaction(client, ann, labels, "-10", "2024-01-15T22:00:00-03:00", "Dinner")
    _transaction(client, ann, labels, "-5", "2024-01-16T00:30:00Z", "Snack")
    assert evening.status_code == 201

    listing = client.get("/transactions", headers=ann).get_json()

    assert [t["description"] for t in listing] == ["Dinner", "Snack"]
    stored = datetime.fromisoformat(listing[0]["date"].replace("Z", "+00:00"))
    assert stored == datetime(2024, 1, 16, 1, 0, tzinfo=UTC)
