# backend/mypos/routes/system.py
"""
System health endpoint.

Reports store sizes so a poller can tell the process is alive and serving
the same in-memory state it was a moment ago.
"""

import time
from flask import Blueprint, current_app, jsonify

from ..extensions import get_stores
from ..time_utils import to_utc_z

system_bp = Blueprint("system", __name__)


def check_store_health() -> dict:
    start_time = time.time()
    try:
        stores = get_stores()
        details = {
            "products": stores.products.count(),
            "transactions": stores.transactions.count(),
            "movements": stores.movements.count(),
            "sessions": stores.sessions.count(),
        }
        elapsed_ms = (time.time() - start_time) * 1000
        return {"status": "healthy", "latency_ms": round(elapsed_ms, 2), "details": details}
    except Exception:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Store health check failed")
        return {"status": "unhealthy", "latency_ms": round(elapsed_ms, 2), "error": "Store error"}


@system_bp.get("/api/health")
def health():
    stores_health = check_store_health()
    healthy = stores_health["status"] == "healthy"
    return jsonify({
        "success": healthy,
        "status": stores_health["status"],
        "checked_at": to_utc_z(get_stores().clock()) if healthy else None,
        "checks": {"stores": stores_health},
    }), 200 if healthy else 503
