from functools import wraps
from flask import jsonify
from flask_jwt_extended import get_jwt, get_jwt_identity

EDITOR_ROLES = ("editor", "admin", "super_admin")
ADMIN_ROLES = ("admin", "super_admin")


def roles_required(*allowed_roles):
    """
    Must sit below @jwt_required(); reads the "role" claim of the token.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            claims = get_jwt()

            if claims.get("role") not in allowed_roles:
                return jsonify({"error": "Insufficient permissions"}), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator


def current_actor_id() -> str:
    return get_jwt_identity() or "system"
