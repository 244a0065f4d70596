# Overview: Admin dashboard endpoint (window totals, movements, recent sales).

from flask import Blueprint, jsonify, current_app

from ..decorators import require_auth, require_role
from ..extensions import get_stores
from ..models import ROLE_ADMIN
from ..services import reporting_service


dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")


@dashboard_bp.get("")
@require_auth
@require_role(ROLE_ADMIN)
def dashboard_route():
    stores = get_stores()
    try:
        transactions = stores.transactions.list_all()
        stats = reporting_service.dashboard_stats(
            transactions,
            stores.movements.list_all(),
            stores.today(),
        )
        recent = reporting_service.recent_transactions(
            transactions, current_app.config["RECENT_TRANSACTIONS_LIMIT"]
        )
        return jsonify({
            "success": True,
            "stats": stats,
            "recentTransactions": [tx.to_dict() for tx in recent],
        }), 200
    except Exception:
        current_app.logger.exception("Failed to build dashboard")
        return jsonify({"success": False, "error": "Failed to fetch dashboard data"}), 500
