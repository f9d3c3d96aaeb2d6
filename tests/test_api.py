"""Integration tests for the HTTP endpoints."""
from fastapi.testclient import TestClient
from sqlalchemy import text

from storefront.config import Settings
from storefront.main import create_app
from tests.helpers import add_failure_trigger, count_rows

ORDER = {
    "customer": {"phone": "555", "name": "A", "address": "X"},
    "items": [{"name": "Widget", "price": 9.99}],
    "total": 9.99,
    "paymentMethod": "COD",
}


class TestProductsEndpoint:
    def test_lists_products_newest_first(self, client, sync_engine):
        with sync_engine.begin() as conn:
            conn.execute(text("INSERT INTO products (name, price, category) VALUES ('Soap', 3.00, 'Cleaners')"))
            conn.execute(text("INSERT INTO products (name, price, category) VALUES ('Wax', 12.50, 'Coatings')"))

        response = client.get("/api/products")

        assert response.status_code == 200
        data = response.json()
        assert [p["name"] for p in data] == ["Wax", "Soap"]
        assert data[0]["price"] == 12.5
        assert data[0]["category"] == "Coatings"

    def test_legacy_catalog_rows_pass_through(self, db_path, sync_engine):
        # A catalog table left by an earlier deployment, with its own columns
        with sync_engine.begin() as conn:
            conn.execute(text("CREATE TABLE products (id INTEGER PRIMARY KEY, name TEXT, price NUMERIC, image TEXT)"))
            conn.execute(text("INSERT INTO products (name, price, image) VALUES ('Wax', 12.5, 'wax.png')"))
        settings = Settings(database_url=f"sqlite+aiosqlite:///{db_path}", db_ssl=False, create_tables=True)

        with TestClient(create_app(settings)) as client:
            response = client.get("/api/products")

        assert response.status_code == 200
        assert response.json() == [{"id": 1, "name": "Wax", "price": 12.5, "image": "wax.png"}]

    def test_store_error_is_500_with_message(self, client, sync_engine):
        with sync_engine.begin() as conn:
            conn.execute(text("DROP TABLE products"))

        response = client.get("/api/products")

        assert response.status_code == 500
        assert "no such table" in response.json()["error"]


class TestOrdersEndpoint:
    def test_end_to_end_order_and_history(self, client):
        response = client.post("/api/orders", json=ORDER)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Order placed successfully!"
        assert isinstance(body["orderId"], int)

        history = client.get("/api/user/555")
        assert history.status_code == 200
        data = history.json()
        assert data["user"] == {"phone": "555", "name": "A", "city": "X"}
        assert len(data["orders"]) == 1
        order = data["orders"][0]
        assert order["id"] == body["orderId"]
        assert order["user_phone"] == "555"
        assert order["total_amount"] == 9.99
        assert order["status"] == "Processing"
        assert order["payment_method"] == "COD"
        assert order["shipping_address"] == "X"
        assert [(i["product_name"], i["price"], i["quantity"]) for i in order["items"]] == [
            ("Widget", 9.99, 1)
        ]

    def test_empty_items_is_400_and_writes_nothing(self, client, sync_engine):
        response = client.post("/api/orders", json={**ORDER, "items": []})

        assert response.status_code == 400
        assert response.json() == {"message": "Missing order details"}
        assert count_rows(sync_engine, "users") == 0
        assert count_rows(sync_engine, "orders") == 0
        assert count_rows(sync_engine, "order_items") == 0

    def test_missing_customer_is_400(self, client):
        body = {k: v for k, v in ORDER.items() if k != "customer"}
        response = client.post("/api/orders", json=body)
        assert response.status_code == 400
        assert response.json() == {"message": "Missing order details"}

    def test_missing_items_is_400(self, client):
        body = {k: v for k, v in ORDER.items() if k != "items"}
        response = client.post("/api/orders", json=body)
        assert response.status_code == 400

    def test_failed_items_insert_is_500_and_rolled_back(self, client, sync_engine):
        add_failure_trigger(sync_engine)
        body = {**ORDER, "items": [{"name": "Widget", "price": 9.99}, {"name": "Explode", "price": 1}]}

        response = client.post("/api/orders", json=body)

        assert response.status_code == 500
        assert "forced order_items failure" in response.json()["error"]
        assert count_rows(sync_engine, "users") == 0
        assert count_rows(sync_engine, "orders") == 0
        assert client.get("/api/user/555").status_code == 404

    def test_same_phone_twice_keeps_one_customer(self, client, sync_engine):
        client.post("/api/orders", json=ORDER)
        second = {**ORDER, "customer": {"phone": "555", "name": "B", "address": "Y"}}
        client.post("/api/orders", json=second)

        assert count_rows(sync_engine, "users") == 1
        data = client.get("/api/user/555").json()
        assert data["user"] == {"phone": "555", "name": "B", "city": "Y"}
        assert [o["shipping_address"] for o in data["orders"]] == ["Y", "X"]


class TestUserEndpoint:
    def test_unknown_phone_is_404(self, client):
        response = client.get("/api/user/000")
        assert response.status_code == 404
        assert response.json() == {"message": "User not found"}


class TestHealth:
    def test_pool_is_idle_after_requests(self, client):
        for _ in range(3):
            client.post("/api/orders", json=ORDER)

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "pool": {"size": 5, "in_use": 0, "waiting": 0}}


def test_hidden_error_details(db_path, sync_engine):
    settings = Settings(
        database_url=f"sqlite+aiosqlite:///{db_path}",
        db_ssl=False,
        create_tables=True,
        expose_errors=False,
    )
    with TestClient(create_app(settings)) as client:
        with sync_engine.begin() as conn:
            conn.execute(text("DROP TABLE products"))
        response = client.get("/api/products")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_starts_even_when_store_is_unreachable(tmp_path):
    settings = Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'x.db'}",
        db_ssl=False,
    )
    with TestClient(create_app(settings)) as client:
        assert client.get("/health").status_code == 200
        response = client.get("/api/products")

    assert response.status_code == 500
    assert "error" in response.json()


def test_starts_when_table_creation_cannot_reach_the_store(tmp_path):
    settings = Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'x.db'}",
        db_ssl=False,
        create_tables=True,
    )
    with TestClient(create_app(settings)) as client:
        health = client.get("/health")

    assert health.status_code == 200
    assert health.json()["status"] == "healthy"


def test_order_against_unreachable_store_is_500(tmp_path):
    settings = Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'x.db'}",
        db_ssl=False,
    )
    with TestClient(create_app(settings)) as client:
        response = client.post("/api/orders", json=ORDER)
        pool_status = client.get("/health").json()["pool"]

    assert response.status_code == 500
    assert "unable to open database file" in response.json()["error"]
    assert pool_status["in_use"] == 0
