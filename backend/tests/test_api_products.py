"""
Product API tests.

Verifies:
- CRUD over /api/products with the {success, ...} envelope
- validation errors map to 400, unknown ids to 404
- stock edits show up in /api/products/movements
"""

import pytest

from mypos import create_app


def _create(client, headers, **overrides):
    body = {"name": "Latte", "price": 3.5, "stock": 40, "category": "Drinks"}
    body.update(overrides)
    return client.post("/api/products", json=body, headers=headers)


class TestProductCrud:

    def test_create_and_fetch(self, client, admin_headers):
        resp = _create(client, admin_headers)
        assert resp.status_code == 201
        product = resp.get_json()["product"]
        assert product == {
            "id": 1, "name": "Latte", "sku": "PRD-001", "stock": 40,
            "price": 3.5, "category": "Drinks", "image": "",
        }

        resp = client.get("/api/products/1", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.get_json()["product"]["name"] == "Latte"

    def test_list(self, client, admin_headers, cashier_headers):
        _create(client, admin_headers, name="A")
        _create(client, admin_headers, name="B")
        resp = client.get("/api/products", headers=cashier_headers)
        data = resp.get_json()
        assert data["success"] is True
        assert [p["name"] for p in data["products"]] == ["A", "B"]

    def test_create_missing_field(self, client, admin_headers):
        resp = client.post("/api/products", json={"name": "Latte", "price": 3}, headers=admin_headers)
        assert resp.status_code == 400
        assert resp.get_json()["success"] is False

    def test_create_bad_price(self, client, admin_headers):
        resp = _create(client, admin_headers, price="three")
        assert resp.status_code == 400

    def test_update_only_present_fields(self, client, admin_headers):
        _create(client, admin_headers)
        resp = client.put("/api/products/1", json={"price": 4}, headers=admin_headers)
        assert resp.status_code == 200
        product = resp.get_json()["product"]
        assert product["price"] == 4.0
        assert product["name"] == "Latte"
        assert product["stock"] == 40

    def test_update_stock_to_zero(self, client, admin_headers):
        _create(client, admin_headers)
        resp = client.put("/api/products/1", json={"stock": 0}, headers=admin_headers)
        assert resp.get_json()["product"]["stock"] == 0

    def test_update_negative_stock(self, client, admin_headers):
        _create(client, admin_headers)
        resp = client.put("/api/products/1", json={"stock": -3}, headers=admin_headers)
        assert resp.status_code == 400

    def test_update_missing(self, client, admin_headers):
        resp = client.put("/api/products/42", json={"name": "Ghost"}, headers=admin_headers)
        assert resp.status_code == 404
        assert resp.get_json()["success"] is False

    def test_delete(self, client, admin_headers):
        _create(client, admin_headers)
        resp = client.delete("/api/products/1", headers=admin_headers)
        assert resp.status_code == 200
        assert client.get("/api/products/1", headers=admin_headers).status_code == 404
        assert client.delete("/api/products/1", headers=admin_headers).status_code == 404


class TestMovements:

    def test_stock_changes_are_listed_newest_first(self, client, clock, admin_headers):
        _create(client, admin_headers, stock=10)
        clock.advance(minutes=1)
        client.put("/api/products/1", json={"stock": 4, "reason": "Breakage"}, headers=admin_headers)

        resp = client.get("/api/products/movements", headers=admin_headers)
        assert resp.status_code == 200
        movements = resp.get_json()["movements"]
        assert [(m["type"], m["quantity"], m["reason"]) for m in movements] == [
            ("out", 6, "Breakage"),
            ("in", 10, "Initial stock"),
        ]
        assert movements[0]["productName"] == "Latte"

    def test_dashboard_counts_movements(self, client, admin_headers):
        _create(client, admin_headers, stock=10)
        client.put("/api/products/1", json={"stock": 4}, headers=admin_headers)
        stats = client.get("/api/dashboard", headers=admin_headers).get_json()["stats"]
        assert stats["productMovements"] == {"in": 10, "out": 6, "net": 4}


class TestDemoCatalog:

    @pytest.fixture
    def seeded_client(self, clock):
        app = create_app({"TESTING": True, "BCRYPT_ROUNDS": 4, "SEED_DEMO_DATA": True}, clock=clock)
        return app.test_client()

    def test_seeded_catalog(self, seeded_client):
        token = seeded_client.post("/api/auth/login", json={
            "username": "cashier", "password": "cashier123", "role": "cashier",
        }).get_json()["token"]
        resp = seeded_client.get("/api/products", headers={"Authorization": f"Bearer {token}"})
        products = resp.get_json()["products"]
        assert len(products) == 8
        assert products[0] == {
            "id": 1, "name": "Product A", "sku": "PRD-001", "stock": 45,
            "price": 22.75, "category": "Electronics", "image": "",
        }
