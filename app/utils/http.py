import logging
from typing import Any, Dict, Optional, Tuple

from flask import request, jsonify, render_template
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


def ok(payload: Any, status: int = 200):
    return jsonify(payload), status


def error(code: str, message: str, status: int = 400, **extra):
    body: Dict[str, Any] = {"error": {"code": code, "message": message}}
    if extra:
        body["error"].update(extra)
    return jsonify(body), status


def json_body() -> Dict[str, Any]:
    # force=True allows a missing Content-Type header
    data = request.get_json(force=True, silent=True)
    if data is not None:
        return data
    # Fall back to form data; repeated keys (checkbox lists) stay as lists
    if request.form:
        return {
            k: (v if len(v) > 1 else v[0])
            for k, v in request.form.to_dict(flat=False).items()
        }
    return {}


def validate_schema(schema_cls, data: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
    try:
        return schema_cls().load(data), None
    except ValidationError as e:
        return None, e.messages


def wants_json() -> bool:
    """True when the caller is an XHR/fetch client rather than a browser form."""
    if request.is_json:
        return True
    if request.headers.get("X-Requested-With") == "XMLHttpRequest":
        return True
    return "application/json" in (request.headers.get("Accept") or "")


def arg_str(name: str, default: Optional[str] = None) -> Optional[str]:
    val = request.args.get(name)
    if val is None:
        return default
    return val


def arg_int(name: str, default: int, min_value: Optional[int] = None, max_value: Optional[int] = None) -> int:
    try:
        v = int(request.args.get(name, default))
    except (TypeError, ValueError):
        v = default
    if min_value is not None:
        v = max(min_value, v)
    if max_value is not None:
        v = min(max_value, v)
    return v


def safe_number(value: Any, fallback=None):
    try:
        n = float(value)
    except (TypeError, ValueError):
        return fallback
    if n != n or n in (float("inf"), float("-inf")):
        return fallback
    return n


def public_base_url(base: Optional[str] = None) -> str:
    from flask import current_app
    base = base or current_app.config.get("BASE_PUBLIC_URL") or request.host_url
    return base.rstrip("/")


def normalize_image(base: str, image_url: Optional[str]) -> Optional[str]:
    if not image_url:
        return None
    if image_url.lower().startswith(("http://", "https://")):
        return image_url
    if image_url.startswith("/"):
        return f"{base}{image_url}"
    return f"{base}/{image_url}"


def register_error_handlers(app):
    @app.errorhandler(404)
    def not_found(e):
        if request.path.startswith("/api"):
            return error("NOT_FOUND", "API route not found", 404, path=request.path)
        return render_template("errors/404.html", url=request.path), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        if request.path.startswith("/api"):
            return error("METHOD_NOT_ALLOWED", "Method not allowed", 405)
        return "Method not allowed", 405

    @app.errorhandler(Exception)
    def unhandled(e):
        if isinstance(e, HTTPException):
            return e
        from app.extensions import db
        db.session.rollback()
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        if request.path.startswith("/api") or wants_json():
            return error("UNKNOWN_ERROR", str(e), 500)
        return render_template("errors/500.html", message="Server error"), 500
