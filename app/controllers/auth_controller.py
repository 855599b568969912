import logging

from flask import session, redirect, render_template, url_for

from app.schemas.user_schema import LoginSchema, MobileRegisterSchema
from app.services import user_service
from app.services.errors import ConflictError
from app.utils.auth import create_token, login_user
from app.utils.enums import UserRole, DRIVER_ROLES
from app.utils.http import ok, error, json_body, validate_schema

logger = logging.getLogger(__name__)


def _landing_for(role):
    if role in (UserRole.ADMIN.value, UserRole.SUPPORT.value):
        return url_for("dashboard.dashboard_page")
    if role == UserRole.DATA_ENTRY.value:
        return url_for("dashboard.restaurant_form")
    if role in DRIVER_ROLES:
        return url_for("delivery.available_page")
    return url_for("home.intro")


# ---------------------------------------------------------------------------
# Web session login
# ---------------------------------------------------------------------------

def login_page_handler():
    return render_template("login.html", error=None)


def login_submit_handler():
    data = json_body()
    user = user_service.authenticate(data.get("username"), data.get("password") or "")
    if not user:
        return render_template("login.html", error="Invalid username or password"), 401
    login_user(user)
    logger.info("Logged in as %s role=%s", user.username, user.role_name)
    return redirect(_landing_for(user.role_name))


def logout_handler():
    session.clear()
    return redirect(url_for("auth.login_page"))


# ---------------------------------------------------------------------------
# Token login
# ---------------------------------------------------------------------------

def _user_payload(user):
    return {"id": user.id, "name": user.display_name, "username": user.username,
            "email": user.email, "role": user.role_name}


def api_login_handler():
    data = json_body()
    identifier = (data.get("username") or data.get("email") or "").strip()
    password = data.get("password") or ""
    if not identifier or not password:
        return error("VALIDATION_ERROR", "username and password required", 400)

    user = user_service.authenticate(identifier, password)
    if not user:
        return error("INVALID_CREDENTIALS", "Username or password incorrect", 401)
    return ok({"token": create_token(user.id, user.role_name), "user": _user_payload(user)})


def driver_login_handler():
    data, errors = validate_schema(LoginSchema, json_body())
    if errors:
        return ok({"success": False, "error": "MISSING_USERNAME_OR_PASSWORD"}, 400)

    user = user_service.authenticate_driver(data["username"].strip(), data["password"])
    if not user:
        return ok({"success": False, "error": "Invalid credentials or not a driver"}, 401)

    return ok({
        "success": True,
        "token": create_token(user.id, user.role_name),
        "driverId": str(user.id),
        "name": user.display_name,
        "username": user.username,
        "role": user.role_name,
    })


def mobile_register_handler():
    data, errors = validate_schema(MobileRegisterSchema, json_body())
    if errors:
        return ok({"success": False, "error": "MISSING_FIELDS", "details": errors}, 400)
    try:
        user = user_service.register_mobile_customer(
            data["name"].strip(), data["mobile"].strip(), data["password"], data.get("email"),
        )
    except ConflictError as e:
        code = str(e)
        if code == "USERNAME_TAKEN":
            code = "MOBILE_ALREADY_REGISTERED"
        return ok({"success": False, "error": code}, 400)
    return ok({"success": True, "userId": str(user.id), "name": user.name})
