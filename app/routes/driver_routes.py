from flask import Blueprint, session
from app.controllers.auth_controller import driver_login_handler
from app.controllers.driver_controller import (
    available_orders_handler,
    my_orders_handler,
    claim_order_handler,
    update_status_handler,
    available_page_handler,
    my_orders_page_handler,
    claim_page_handler,
    update_status_page_handler,
)
from app.utils.auth import require_driver, roles_required
from app.utils.enums import DRIVER_ROLES

driver_bp = Blueprint("driver", __name__, url_prefix="/api/driver")
delivery_bp = Blueprint("delivery", __name__, url_prefix="/delivery")

driver_area = roles_required(*DRIVER_ROLES)

@driver_bp.post("/login")
def login():
    return driver_login_handler()

@driver_bp.get("/available")
@require_driver
def available():
    return available_orders_handler()

@driver_bp.get("/my-orders")
@require_driver
def my_orders():
    return my_orders_handler()

@driver_bp.post("/claim/<int:order_id>")
@require_driver
def claim(order_id):
    return claim_order_handler(order_id)

@driver_bp.post("/update-status/<int:order_id>")
@require_driver
def update_status(order_id):
    return update_status_handler(order_id)


@delivery_bp.get("/available")
@driver_area
def available_page():
    return available_page_handler()

@delivery_bp.get("/my-orders")
@driver_area
def my_orders_page():
    return my_orders_page_handler()

@delivery_bp.post("/claim/<int:order_id>")
@driver_area
def claim_page(order_id):
    return claim_page_handler(order_id)

@delivery_bp.post("/update-status/<int:order_id>")
@driver_area
def update_status_page(order_id):
    return update_status_page_handler(order_id)

@delivery_bp.get("/api/available")
@driver_area
def api_available():
    return available_orders_handler()

@delivery_bp.get("/api/my-orders")
@driver_area
def api_my_orders():
    return my_orders_handler(session["user_id"])

@delivery_bp.post("/api/claim/<int:order_id>")
@driver_area
def api_claim(order_id):
    return claim_order_handler(order_id, session["user_id"])

@delivery_bp.post("/api/update-status/<int:order_id>")
@driver_area
def api_update_status(order_id):
    return update_status_handler(order_id, session["user_id"])
