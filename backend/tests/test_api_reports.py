"""
Reporting API tests (sales report, inventory alerts, dashboard).
"""

from datetime import datetime, timezone

import pytest


def _add_product(client, headers, name, stock, price=10, category="General"):
    resp = client.post("/api/products", json={
        "name": name, "price": price, "stock": stock, "category": category,
    }, headers=headers)
    assert resp.status_code == 201
    return resp.get_json()["product"]


def _sell(client, headers, product, quantity):
    total = product["price"] * quantity
    resp = client.post("/api/transactions", json={
        "customerName": "Walk-in",
        "items": [{"id": product["id"], "name": product["name"],
                   "price": product["price"], "quantity": quantity}],
        "total": total,
    }, headers=headers)
    assert resp.status_code == 201
    return resp.get_json()["transaction"]


class TestSalesReport:

    def test_single_sale_today(self, client, admin_headers):
        product = _add_product(client, admin_headers, "A", stock=5, price=10)
        _sell(client, admin_headers, product, 3)

        resp = client.get("/api/reports/sales?period=day", headers=admin_headers)
        assert resp.status_code == 200
        report = resp.get_json()["salesReport"]
        assert report["totalSales"] == 30
        assert report["totalTransactions"] == 1
        assert report["topProducts"] == [{"name": "A", "sales": 30, "quantity": 3, "percentage": 100}]

    def test_defaults_to_day(self, client, clock, admin_headers):
        product = _add_product(client, admin_headers, "A", stock=5)
        clock.set(datetime(2026, 10, 17, 9, 0, tzinfo=timezone.utc))
        _sell(client, admin_headers, product, 1)
        clock.set(datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc))

        report = client.get("/api/reports/sales", headers=admin_headers).get_json()["salesReport"]
        assert report["period"] == "day"
        assert report["totalTransactions"] == 0

        report = client.get("/api/reports/sales?period=week", headers=admin_headers).get_json()["salesReport"]
        assert report["totalTransactions"] == 1

    def test_invalid_period(self, client, admin_headers):
        resp = client.get("/api/reports/sales?period=decade", headers=admin_headers)
        assert resp.status_code == 400
        assert resp.get_json()["success"] is False

    def test_invalid_group_by(self, client, admin_headers):
        resp = client.get("/api/reports/sales?groupBy=sku", headers=admin_headers)
        assert resp.status_code == 400

    def test_group_by_name(self, client, admin_headers):
        first = _add_product(client, admin_headers, "Cookie", stock=50, price=2)
        second = _add_product(client, admin_headers, "Cookie", stock=50, price=3)
        _sell(client, admin_headers, first, 1)
        _sell(client, admin_headers, second, 1)

        by_id = client.get("/api/reports/sales", headers=admin_headers).get_json()["salesReport"]
        by_name = client.get("/api/reports/sales?groupBy=name", headers=admin_headers).get_json()["salesReport"]
        assert len(by_id["topProducts"]) == 2
        assert by_name["topProducts"] == [{"name": "Cookie", "sales": 5.0, "quantity": 2, "percentage": 100.0}]


class TestInventoryAlerts:

    def test_low_and_out_of_stock(self, client, admin_headers):
        a = _add_product(client, admin_headers, "A", stock=5, category="Drinks")
        _add_product(client, admin_headers, "B", stock=0, category="Food")
        _add_product(client, admin_headers, "C", stock=80)
        _sell(client, admin_headers, a, 3)

        resp = client.get("/api/reports/inventory-alerts", headers=admin_headers)
        assert resp.status_code == 200
        alerts = resp.get_json()["inventoryAlerts"]
        assert alerts["lowStock"] == [
            {"id": 1, "name": "A", "currentStock": 5, "minThreshold": 20, "category": "Drinks"}
        ]
        assert [p["name"] for p in alerts["outOfStock"]] == ["B"]
        assert alerts["fastMoving"] == [{"name": "A", "salesCount": 3, "category": "Drinks"}]

    def test_threshold_query_param(self, client, admin_headers):
        _add_product(client, admin_headers, "C", stock=80)
        alerts = client.get("/api/reports/inventory-alerts?threshold=100",
                            headers=admin_headers).get_json()["inventoryAlerts"]
        assert alerts["lowStock"][0]["minThreshold"] == 100

    @pytest.mark.parametrize("threshold", ["abc", "-5", "2.5", ""])
    def test_invalid_threshold(self, client, admin_headers, threshold):
        resp = client.get(f"/api/reports/inventory-alerts?threshold={threshold}", headers=admin_headers)
        assert resp.status_code == 400
        data = resp.get_json()
        assert data["success"] is False
        assert "threshold" in data["error"]


class TestDashboard:

    def test_stats_and_recent(self, client, clock, admin_headers):
        product = _add_product(client, admin_headers, "A", stock=50, price=25)
        clock.set(datetime(2026, 10, 17, 10, 0, tzinfo=timezone.utc))
        _sell(client, admin_headers, product, 2)
        clock.set(datetime(2026, 10, 18, 10, 0, tzinfo=timezone.utc))
        _sell(client, admin_headers, product, 4)

        resp = client.get("/api/dashboard", headers=admin_headers)
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["stats"]["today"] == {"amount": 100.0, "transactions": 1, "change": 100.0}
        assert data["stats"]["week"]["amount"] == 150.0
        assert [t["total"] for t in data["recentTransactions"]] == [100.0, 50.0]

    def test_recent_is_capped(self, client, clock, admin_headers):
        product = _add_product(client, admin_headers, "A", stock=50)
        for _ in range(7):
            clock.advance(minutes=1)
            _sell(client, admin_headers, product, 1)
        data = client.get("/api/dashboard", headers=admin_headers).get_json()
        assert len(data["recentTransactions"]) == 5
