# Overview: Flask API routes for products operations; parses input and returns JSON responses.

# backend/mypos/routes/products.py
"""
Product management routes.

SECURITY: All routes require authentication.
- Read operations are open to every role (the cashier screen lists products)
- Write operations and the movement ledger are admin-only
"""
from flask import Blueprint, request, current_app, g

from ..decorators import require_auth, require_role
from ..extensions import get_stores
from ..models import ROLE_ADMIN, ROLES
from ..services.products_service import ProductPatch
from ..validation import NotFoundError, ValidationError

products_bp = Blueprint("products", __name__, url_prefix="/api/products")


@products_bp.get("")
@require_auth
@require_role(*ROLES)
def list_products():
    """List all products in insertion order."""
    products = get_stores().products.list_all()
    return {"success": True, "products": [p.to_dict() for p in products]}, 200


@products_bp.post("")
@require_auth
@require_role(ROLE_ADMIN)
def create_product_route():
    """
    Create a new product.

    Required: name, price, stock, category. sku defaults to PRD-nnn.
    """
    payload = request.get_json(silent=True) or {}

    try:
        created = get_stores().products.create(payload)
    except ValidationError as e:
        return {"success": False, "error": str(e)}, 400
    except Exception:
        current_app.logger.exception("Failed to create product")
        return {"success": False, "error": "Failed to create product"}, 500

    return {
        "success": True,
        "product": created.to_dict(),
        "message": "Product created successfully",
    }, 201


@products_bp.get("/movements")
@require_auth
@require_role(ROLE_ADMIN)
def list_movements_route():
    """Stock movement ledger, most recent first."""
    movements = get_stores().movements.list_all()
    return {"success": True, "movements": [m.to_dict() for m in movements]}, 200


@products_bp.get("/<int:product_id>")
@require_auth
@require_role(*ROLES)
def get_product_route(product_id: int):
    try:
        product = get_stores().products.get(product_id)
    except NotFoundError as e:
        return {"success": False, "error": str(e)}, 404
    return {"success": True, "product": product.to_dict()}, 200


@products_bp.put("/<int:product_id>")
@require_auth
@require_role(ROLE_ADMIN)
def update_product_route(product_id: int):
    """
    Update a product.

    Only fields present in the body change; {"stock": 0} empties stock.
    Optional "reason" labels the stock movement.
    """
    payload = request.get_json(silent=True) or {}

    try:
        patch = ProductPatch.from_payload(payload)
        updated = get_stores().products.update(product_id, patch)
    except ValidationError as e:
        return {"success": False, "error": str(e)}, 400
    except NotFoundError as e:
        return {"success": False, "error": str(e)}, 404
    except Exception:
        current_app.logger.exception("Failed to update product")
        return {"success": False, "error": "Failed to update product"}, 500

    return {
        "success": True,
        "product": updated.to_dict(),
        "message": "Product updated successfully",
    }, 200


@products_bp.delete("/<int:product_id>")
@require_auth
@require_role(ROLE_ADMIN)
def delete_product_route(product_id: int):
    try:
        deleted = get_stores().products.delete(product_id)
    except NotFoundError as e:
        return {"success": False, "error": str(e)}, 404

    current_app.logger.info("Deleted product %s (%s) by user %s", deleted.id, deleted.sku, g.current_user.id)
    return {"success": True, "message": "Product deleted successfully"}, 200
