from flask import Blueprint, jsonify, request, current_app

from ..decorators import require_auth, require_role
from ..extensions import get_stores
from ..models import ROLE_ADMIN
from ..services import reporting_service
from ..validation import ValidationError, coerce_int


reports_bp = Blueprint("reports", __name__, url_prefix="/api/reports")


@reports_bp.get("/sales")
@require_auth
@require_role(ROLE_ADMIN)
def sales_report():
    period = request.args.get("period", "day")
    group_by = request.args.get("groupBy", current_app.config["REPORT_GROUP_BY"])

    stores = get_stores()
    try:
        report = reporting_service.sales_report(
            stores.transactions.list_all(),
            period,
            stores.today(),
            group_by=group_by,
            limit=current_app.config["TOP_PRODUCTS_LIMIT"],
        )
        return jsonify({"success": True, "salesReport": report}), 200
    except reporting_service.ReportError as exc:
        return jsonify({"success": False, "error": str(exc)}), 400
    except Exception:
        current_app.logger.exception("Failed to build sales report")
        return jsonify({"success": False, "error": "Failed to build sales report"}), 500


@reports_bp.get("/inventory-alerts")
@require_auth
@require_role(ROLE_ADMIN)
def inventory_alerts_report():
    raw_threshold = request.args.get("threshold")
    group_by = request.args.get("groupBy", current_app.config["REPORT_GROUP_BY"])

    try:
        threshold = (
            current_app.config["LOW_STOCK_THRESHOLD"]
            if raw_threshold is None
            else coerce_int("threshold", raw_threshold, minimum=0)
        )
    except ValidationError as exc:
        return jsonify({"success": False, "error": str(exc)}), 400

    stores = get_stores()
    try:
        alerts = reporting_service.inventory_alerts(
            stores.products.list_all(),
            stores.transactions.list_all(),
            threshold=threshold,
            limit=current_app.config["FAST_MOVING_LIMIT"],
            group_by=group_by,
        )
        return jsonify({"success": True, "inventoryAlerts": alerts}), 200
    except reporting_service.ReportError as exc:
        return jsonify({"success": False, "error": str(exc)}), 400
    except Exception:
        current_app.logger.exception("Failed to build inventory alerts")
        return jsonify({"success": False, "error": "Failed to build inventory alerts"}), 500
