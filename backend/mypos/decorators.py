# Overview: Request decorators for API routes (bearer auth and role checks).

from functools import wraps
from flask import request, jsonify, g, current_app

from .extensions import get_stores


def _bearer_token() -> str | None:
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    return auth_header.split(" ", 1)[1].strip() or None


def require_auth(f):
    """
    Require a valid session token.

    Sets on flask.g:
    - g.current_user: the authenticated User
    - g.session_token: the bearer token (for logout)

    Returns 401 when the header is missing, the token is unknown or the
    session has gone idle.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = _bearer_token()
        if not token:
            return jsonify({"success": False, "error": "Authentication required"}), 401

        stores = get_stores()
        user_id = stores.sessions.validate(token)
        user = stores.users.get(user_id) if user_id is not None else None
        if user is None:
            return jsonify({"success": False, "error": "Invalid or expired token"}), 401

        g.current_user = user
        g.session_token = token
        return f(*args, **kwargs)

    return decorated_function


def require_role(*roles: str):
    """
    Require the authenticated user to hold one of the given roles.

    Must be stacked under @require_auth.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user = getattr(g, "current_user", None)
            if user is None:
                return jsonify({"success": False, "error": "Authentication required"}), 401

            if user.role not in roles:
                current_app.logger.info(
                    "Role %s denied on %s %s", user.role, request.method, request.path
                )
                return jsonify({
                    "success": False,
                    "error": "Permission denied",
                    "required_roles": list(roles),
                }), 403

            return f(*args, **kwargs)
        return decorated_function
    return decorator
