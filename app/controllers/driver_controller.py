from flask import request, session, redirect, render_template, url_for

from app.models.user import User
from app.schemas.order_schema import DriverStatusSchema
from app.services import order_service
from app.services.errors import NotFoundError, InvalidTransitionError
from app.utils.http import ok, json_body, validate_schema


def _status_payload():
    data = dict(json_body())
    # The web forms post "newStatus", the driver app posts "status"
    if "status" not in data and "newStatus" in data:
        data["status"] = data["newStatus"]
    return validate_schema(DriverStatusSchema, data)


def _claim(order_id, driver_id):
    driver = User.query.get(driver_id)
    return order_service.claim_order(order_id, driver_id, driver.display_name if driver else None)


# ---------------------------------------------------------------------------
# Driver app (JWT)
# ---------------------------------------------------------------------------

def available_orders_handler():
    orders = order_service.list_available_orders()
    return ok({"success": True, "orders": [order_service.serialize_order(o) for o in orders]})


def my_orders_handler(driver_id=None):
    driver_id = driver_id or request.user_id
    orders = order_service.list_driver_orders(driver_id)
    return ok({"success": True, "orders": [order_service.serialize_order(o) for o in orders]})


def claim_order_handler(order_id, driver_id=None):
    driver_id = driver_id or request.user_id
    try:
        order = _claim(order_id, driver_id)
    except NotFoundError as e:
        return ok({"success": False, "error": str(e)}, 404)
    return ok({
        "success": True,
        "orderId": str(order.id),
        "newStatus": order.status,
        "driverId": str(driver_id),
        "driverName": order.delivery_person_name or None,
    })


def update_status_handler(order_id, driver_id=None):
    driver_id = driver_id or request.user_id
    data, errors = _status_payload()
    if errors:
        return ok({"success": False, "error": "INVALID_STATUS", "details": errors}, 400)
    try:
        order = order_service.update_status(order_id, driver_id, data["status"])
    except PermissionError:
        return ok({"success": False, "error": "UNAUTHORIZED_OR_NOT_FOUND"}, 403)
    except InvalidTransitionError as e:
        return ok({"success": False, "error": "INVALID_TRANSITION", "message": str(e)}, 400)
    return ok({"success": True, "orderId": str(order.id), "newStatus": order.status})


# ---------------------------------------------------------------------------
# Delivery pages (cookie session)
# ---------------------------------------------------------------------------

def available_page_handler():
    return render_template("delivery_available.html", orders=order_service.list_available_orders())


def my_orders_page_handler():
    orders = order_service.list_driver_orders(session["user_id"])
    return render_template(
        "delivery_my_orders.html",
        orders=[order_service.serialize_order(o) for o in orders],
    )


def claim_page_handler(order_id):
    try:
        _claim(order_id, session["user_id"])
    except NotFoundError:
        return "Order already claimed", 404
    return redirect(url_for("delivery.my_orders_page"))


def update_status_page_handler(order_id):
    data, errors = _status_payload()
    if errors:
        return "Invalid status transition", 400
    try:
        order_service.update_status(order_id, session["user_id"], data["status"])
    except PermissionError:
        return "Unauthorized", 403
    except InvalidTransitionError:
        return "Invalid status transition", 400
    return redirect(url_for("delivery.my_orders_page"))
