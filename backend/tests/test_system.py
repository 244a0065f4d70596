"""
Health endpoint and cross-origin header tests.
"""


def test_health_is_public(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["success"] is True
    assert data["status"] == "healthy"
    assert data["checked_at"] == "2026-10-18T14:30:00Z"
    assert data["checks"]["stores"]["details"] == {
        "products": 0, "transactions": 0, "movements": 0, "sessions": 0,
    }


def test_health_counts_sessions(client, admin_headers):
    details = client.get("/api/health").get_json()["checks"]["stores"]["details"]
    assert details["sessions"] == 1


def test_cors_allowed_origin(client):
    resp = client.get("/api/health", headers={"Origin": "http://localhost:3000"})
    assert resp.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"
    assert "Authorization" in resp.headers["Access-Control-Allow-Headers"]


def test_cors_other_origin(client):
    resp = client.get("/api/health", headers={"Origin": "http://evil.example"})
    assert "Access-Control-Allow-Origin" not in resp.headers


def test_error_envelope_on_unknown_product(client, admin_headers):
    resp = client.get("/api/products/999", headers=admin_headers)
    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "error": "Product not found"}


def test_unmatched_route_uses_json_envelope(client, admin_headers):
    resp = client.get("/api/products/abc", headers=admin_headers)
    assert resp.status_code == 404
    data = resp.get_json()
    assert data["success"] is False
    assert data["error"]


def test_unsupported_method_uses_json_envelope(client, admin_headers):
    resp = client.patch("/api/products", headers=admin_headers, json={})
    assert resp.status_code == 405
    assert resp.get_json()["success"] is False


def test_unexpected_error_is_logged_and_enveloped(client, stores, admin_headers, monkeypatch, caplog):
    def boom():
        raise RuntimeError("store exploded")

    monkeypatch.setattr(stores.products, "list_all", boom)
    resp = client.get("/api/products", headers=admin_headers)

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "error": "Internal server error"}
    assert "store exploded" not in resp.get_data(as_text=True)
    assert any("Unhandled error" in r.getMessage() for r in caplog.records)
