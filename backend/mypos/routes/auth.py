# Overview: Flask API routes for login/logout; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify, current_app, g

from ..decorators import require_auth
from ..extensions import get_stores


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.post("/login")
def login_route():
    """
    Authenticate username + password for the requested role.

    Returns the user and a bearer token for the Authorization header.
    """
    try:
        data = request.get_json(silent=True) or {}
        username = data.get("username")
        password = data.get("password")
        role = data.get("role")

        if not all([username, password, role]):
            return jsonify({
                "success": False,
                "error": "Username, password, and role are required",
            }), 400

        stores = get_stores()
        user = stores.users.authenticate(str(username), str(password), str(role))
        if user is None:
            current_app.logger.info("Failed login for %s as %s", username, role)
            return jsonify({"success": False, "error": "Invalid credentials"}), 401

        token = stores.sessions.create(user.id)
        return jsonify({
            "success": True,
            "user": user.to_dict(),
            "token": token,
            "message": "Login successful!",
        }), 200

    except Exception:
        current_app.logger.exception("Login failed")
        return jsonify({"success": False, "error": "Server error"}), 500


@auth_bp.post("/logout")
@require_auth
def logout_route():
    get_stores().sessions.revoke(g.session_token)
    return jsonify({"success": True, "message": "Logged out successfully"}), 200


@auth_bp.get("/me")
@require_auth
def me_route():
    return jsonify({"success": True, "user": g.current_user.to_dict()}), 200
