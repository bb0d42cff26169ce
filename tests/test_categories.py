"""Category endpoint tests."""

from datetime import UTC, datetime

import pytest

from pocketbook.models.category import Category
from pocketbook.models.transaction import Transaction


@pytest.fixture
def spending(db, categories):
    """Transactions spread over the three categories."""
    rows = [
        Transaction(username="tester", type=type_, amount=amount, date=datetime(2023, 5, day, tzinfo=UTC))
        for day, (type_, amount) in enumerate(
            [("food", 10), ("food", 20), ("health", 30), ("travel", 40)], start=1
        )
    ]
    db.add_all(rows)
    db.commit()
    return rows


def types_in_use(db) -> list[str]:
    return sorted(t for (t,) in db.query(Transaction.type).all())


def test_create_category(client, admin_user, login_as):
    login_as(admin_user)

    response = client.post("/api/categories", json={"type": "food", "color": "red"})
    assert response.status_code == 201
    assert response.json()["data"] == {"type": "food", "color": "red"}


def test_create_category_requires_admin(client, db, regular_user, login_as):
    login_as(regular_user)

    response = client.post("/api/categories", json={"type": "food", "color": "red"})
    assert response.status_code == 401
    assert db.query(Category).count() == 0


def test_create_duplicate_category(client, admin_user, login_as, categories):
    login_as(admin_user)

    response = client.post("/api/categories", json={"type": "food", "color": "pink"})
    assert response.status_code == 400


def test_create_category_blank_color(client, admin_user, login_as):
    login_as(admin_user)

    response = client.post("/api/categories", json={"type": "food", "color": " "})
    assert response.status_code == 400
    assert response.json()["detail"] == "Some parameter is an empty string"


def test_update_category_moves_transactions(client, db, admin_user, login_as, spending):
    login_as(admin_user)

    response = client.patch("/api/categories/food", json={"type": "groceries", "color": "yellow"})
    assert response.status_code == 200
    assert response.json()["data"]["count"] == 2

    db.expire_all()
    assert db.query(Category).filter(Category.type == "groceries").one().color == "yellow"
    assert types_in_use(db) == ["groceries", "groceries", "health", "travel"]


def test_update_category_color_only(client, admin_user, login_as, spending):
    login_as(admin_user)

    response = client.patch("/api/categories/food", json={"type": "food", "color": "black"})
    assert response.status_code == 200
    assert response.json()["data"]["count"] == 0


def test_update_unknown_category(client, admin_user, login_as, categories):
    login_as(admin_user)

    response = client.patch("/api/categories/unknown", json={"type": "x", "color": "y"})
    assert response.status_code == 404


def test_update_category_to_existing_type(client, admin_user, login_as, categories):
    login_as(admin_user)

    response = client.patch("/api/categories/food", json={"type": "health", "color": "y"})
    assert response.status_code == 400


def test_delete_category_reassigns_to_oldest_remaining(client, db, admin_user, login_as, spending):
    login_as(admin_user)

    response = client.request("DELETE", "/api/categories", json={"types": ["food", "travel"]})
    assert response.status_code == 200
    assert response.json()["data"]["count"] == 3

    db.expire_all()
    assert [c.type for c in db.query(Category).all()] == ["health"]
    assert types_in_use(db) == ["health", "health", "health", "health"]


def test_delete_all_categories_keeps_oldest(client, db, admin_user, login_as, spending):
    login_as(admin_user)

    response = client.request(
        "DELETE", "/api/categories", json={"types": ["food", "health", "travel"]}
    )
    assert response.status_code == 200
    assert response.json()["data"]["count"] == 2

    db.expire_all()
    assert [c.type for c in db.query(Category).all()] == ["food"]
    assert types_in_use(db) == ["food", "food", "food", "food"]


def test_delete_categories_all_or_nothing(client, db, admin_user, login_as, spending):
    login_as(admin_user)

    response = client.request("DELETE", "/api/categories", json={"types": ["food", "missing"]})
    assert response.status_code == 404

    db.expire_all()
    assert db.query(Category).count() == 3
    assert types_in_use(db) == ["food", "food", "health", "travel"]


def test_delete_only_category(client, db, admin_user, login_as):
    db.add(Category(type="food", color="red"))
    db.commit()
    login_as(admin_user)

    response = client.request("DELETE", "/api/categories", json={"types": ["food"]})
    assert response.status_code == 400
    assert db.query(Category).count() == 1


def test_delete_categories_empty_list(client, admin_user, login_as, categories):
    login_as(admin_user)

    response = client.request("DELETE", "/api/categories", json={"types": []})
    assert response.status_code == 400


def test_get_categories_as_user(client, regular_user, login_as, categories):
    login_as(regular_user)

    response = client.get("/api/categories")
    assert response.status_code == 200
    assert response.json()["data"] == [
        {"type": "food", "color": "red"},
        {"type": "health", "color": "green"},
        {"type": "travel", "color": "blue"},
    ]


def test_get_categories_without_session(client, categories):
    response = client.get("/api/categories")
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid cookies"
