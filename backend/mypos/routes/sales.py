# Overview: Flask API routes for transactions (checkout, kitchen board, void).

# backend/mypos/routes/sales.py
"""Transaction API routes with role enforcement"""

from flask import Blueprint, request, jsonify, g, current_app

from ..decorators import require_auth, require_role
from ..extensions import get_stores
from ..models import ROLE_ADMIN, ROLE_CASHIER, ROLE_KITCHEN, ROLES
from ..time_utils import parse_calendar_date
from ..validation import NotFoundError, ValidationError


sales_bp = Blueprint("sales", __name__, url_prefix="/api/transactions")


@sales_bp.get("")
@require_auth
@require_role(*ROLES)
def list_transactions_route():
    """
    List transactions, most recent first.

    Query params:
    - startDate, endDate: calendar dates (YYYY-MM-DD), inclusive, either optional
    - kitchenStatus: preparing | completed (kitchen board polling)
    """
    try:
        start = parse_calendar_date(request.args.get("startDate"))
        end = parse_calendar_date(request.args.get("endDate"))
    except ValueError:
        return jsonify({"success": False, "error": "startDate/endDate must be YYYY-MM-DD"}), 400

    kitchen_status = request.args.get("kitchenStatus")
    store = get_stores().transactions

    try:
        if start is not None or end is not None:
            transactions = store.list_by_date_range(start, end)
        else:
            transactions = store.list_all()

        if kitchen_status:
            wanted = {tx.id for tx in store.list_by_status(kitchen_status)}
            transactions = [tx for tx in transactions if tx.id in wanted]

        return jsonify({
            "success": True,
            "transactions": [tx.to_dict() for tx in transactions],
        }), 200

    except ValidationError as e:
        return jsonify({"success": False, "error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to list transactions")
        return jsonify({"success": False, "error": "Failed to fetch transactions"}), 500


@sales_bp.post("")
@require_auth
@require_role(ROLE_ADMIN, ROLE_CASHIER)
def create_transaction_route():
    """
    Checkout: record a transaction from the cart.

    Body: {customerName, items: [{id, name, price, quantity}], total}
    """
    try:
        data = request.get_json(silent=True) or {}
        tx = get_stores().transactions.create(
            customer_name=data.get("customerName"),
            items=data.get("items"),
            total=data.get("total"),
            user_id=g.current_user.id,
        )
        current_app.logger.info(
            "Checkout %s by user %s total=%s", tx.receipt_number, g.current_user.id, tx.total_cents
        )
        return jsonify({
            "success": True,
            "transaction": tx.to_dict(),
            "message": "Transaction created successfully",
        }), 201

    except ValidationError as e:
        return jsonify({"success": False, "error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to create transaction")
        return jsonify({"success": False, "error": "Failed to create transaction"}), 500


@sales_bp.get("/<string:transaction_id>")
@require_auth
@require_role(*ROLES)
def get_transaction_route(transaction_id: str):
    """Get one transaction by id or receipt number."""
    try:
        tx = get_stores().transactions.find(transaction_id)
        return jsonify({"success": True, "transaction": tx.to_dict()}), 200
    except NotFoundError as e:
        return jsonify({"success": False, "error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to fetch transaction")
        return jsonify({"success": False, "error": "Failed to fetch transaction"}), 500


@sales_bp.put("/<string:transaction_id>")
@require_auth
@require_role(ROLE_ADMIN, ROLE_KITCHEN)
def update_transaction_route(transaction_id: str):
    """
    Update kitchen status.

    Body: {kitchenStatus: preparing | completed}. Other values leave the
    transaction unchanged and still succeed.
    """
    try:
        data = request.get_json(silent=True) or {}
        tx = get_stores().transactions.update_kitchen_status(
            transaction_id, data.get("kitchenStatus")
        )
        return jsonify({
            "success": True,
            "transaction": tx.to_dict(),
            "message": "Transaction updated successfully",
        }), 200

    except NotFoundError as e:
        return jsonify({"success": False, "error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to update transaction")
        return jsonify({"success": False, "error": "Failed to update transaction"}), 500


@sales_bp.delete("/<string:transaction_id>")
@require_auth
@require_role(ROLE_ADMIN)
def void_transaction_route(transaction_id: str):
    """Void a transaction. The record is removed; nothing is kept."""
    try:
        tx = get_stores().transactions.void(transaction_id)
        current_app.logger.info("Voided %s by user %s", tx.receipt_number, g.current_user.id)
        return jsonify({"success": True, "message": "Transaction voided successfully"}), 200

    except NotFoundError as e:
        return jsonify({"success": False, "error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to void transaction")
        return jsonify({"success": False, "error": "Failed to void transaction"}), 500
