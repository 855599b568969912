import datetime as dt
import hmac
from functools import wraps
from flask import request, jsonify, current_app, session, redirect, url_for
import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from app.utils.enums import UserRole, DRIVER_ROLES

HASH_PREFIXES = ("pbkdf2:", "scrypt:")


def hash_password(plain: str) -> str:
    return generate_password_hash(plain)


def verify_password(stored: str, plain: str) -> bool:
    if not stored or not plain:
        return False
    if stored.startswith(HASH_PREFIXES):
        return check_password_hash(stored, plain)
    # Accounts imported from the old store kept plaintext passwords
    return hmac.compare_digest(stored, plain)


def _jwt_secret() -> str:
    return current_app.config.get("JWT_SECRET") or current_app.config["SECRET_KEY"]


def create_token(user_id: int, role: str) -> str:
    now = dt.datetime.now(dt.timezone.utc)
    hours = current_app.config.get("JWT_EXPIRES_HOURS", 168)
    payload = {
        "sub": str(user_id),
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + dt.timedelta(hours=hours)).timestamp()),
    }
    return jwt.encode(payload, _jwt_secret(), algorithm="HS256")


def decode_token(token: str):
    return jwt.decode(token, _jwt_secret(), algorithms=["HS256"])


def _unauthorized(message: str, status: int = 401):
    code = "UNAUTHORIZED" if status == 401 else "FORBIDDEN"
    return jsonify({"error": {"code": code, "message": message}}), status


def require_auth(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        auth_header = request.headers.get("Authorization", "")
        if not auth_header.startswith("Bearer "):
            return _unauthorized("Missing Bearer token")
        token = auth_header.split(" ", 1)[1]
        try:
            payload = decode_token(token)
            request.user_id = int(payload["sub"])  # type: ignore
            request.user_role = payload.get("role")  # type: ignore
        except (jwt.PyJWTError, KeyError, ValueError):
            return _unauthorized("Invalid token")
        return f(*args, **kwargs)
    return wrapper


def require_role(*roles):
    def decorator(f):
        @require_auth
        @wraps(f)
        def wrapper(*args, **kwargs):
            if request.user_role not in roles:  # type: ignore
                return _unauthorized("Not allowed for this role", 403)
            return f(*args, **kwargs)
        return wrapper
    return decorator


require_admin = require_role(UserRole.ADMIN.value)
require_driver = require_role(*DRIVER_ROLES)


# ---------------------------------------------------------------------------
# Cookie-session guards for the server-rendered pages
# ---------------------------------------------------------------------------

def login_user(user) -> None:
    session["user_id"] = user.id
    session["user_role"] = user.role_name


def login_required(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not session.get("user_id"):
            return redirect(url_for("auth.login_page"))
        return f(*args, **kwargs)
    return wrapper


def roles_required(*roles):
    def decorator(f):
        @login_required
        @wraps(f)
        def wrapper(*args, **kwargs):
            if session.get("user_role") not in roles:
                return "Not authorized for this area", 403
            return f(*args, **kwargs)
        return wrapper
    return decorator


__all__ = [
    "hash_password", "verify_password", "create_token", "decode_token",
    "require_auth", "require_role", "require_admin", "require_driver",
    "login_user", "login_required", "roles_required",
]
