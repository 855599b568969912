import json
import logging
import secrets

from flask import current_app, request, session, redirect, render_template, url_for

from app.models.order import Order
from app.schemas.order_schema import CheckoutSchema, CustomerInfoSchema
from app.services import cart_service, order_service, payment_service
from app.services.errors import PaymentGatewayError
from app.utils.http import ok, error, json_body, validate_schema

logger = logging.getLogger(__name__)


def _customer_and_address(data):
    customer = {
        "name": data.get("customerName"),
        "mobile": data.get("customerMobile"),
        "email": data.get("customerEmail"),
    }
    address = {
        "city": data.get("city"),
        "street": data.get("street"),
        "building": data.get("building"),
        "floor": data.get("floor"),
        "zone": data.get("zone"),
        "apt_no": data.get("aptNo"),
        "address_note": data.get("addressNote"),
        "latitude": data.get("latitude"),
        "longitude": data.get("longitude"),
    }
    return customer, address


def _callback_urls(order_id):
    base = current_app.config["APP_BASE_URL"].rstrip("/")
    return (
        f"{base}/order/mobile-payment-success?orderId={order_id}",
        f"{base}/order/mobile-payment-error?orderId={order_id}",
    )


def start_payment(client, order, customer_email=None):
    """
    Open a MyFatoorah invoice for ``order`` and return the payment URL.

    On gateway failure the order is marked as failed (and cancelled) before
    the PaymentGatewayError propagates.
    """
    success_url, error_url = _callback_urls(order.id)
    body = payment_service.build_execute_payment_body(client, order, success_url, error_url, customer_email)
    try:
        data = client.execute_payment(body)
        if not data.get("PaymentURL"):
            raise PaymentGatewayError("No payment URL returned from MyFatoorah.", response=data)
    except PaymentGatewayError as e:
        order_service.record_payment_result(order.id, paid=False, raw_response=e.response)
        raise
    order_service.attach_invoice(order, data.get("InvoiceId"), raw_response=data)
    return data["PaymentURL"]


# ---------------------------------------------------------------------------
# JSON endpoints
# ---------------------------------------------------------------------------

def create_order_handler():
    data, errors = validate_schema(CheckoutSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Invalid order payload", 400, details=errors)
    customer, address = _customer_and_address(data)
    try:
        order = order_service.create_order(customer, address, data["cartItems"],
                                           source=data["source"])
    except ValueError as e:
        return ok({"success": False, "message": str(e)}, 400)
    return ok({"success": True, "orderId": str(order.id)}, 201)


def mobile_checkout_handler():
    data, errors = validate_schema(CheckoutSchema, json_body())
    if errors:
        return ok({"success": False, "message": "Invalid checkout payload.", "details": errors}, 400)

    try:
        order_service.check_items(data["cartItems"])
    except ValueError as e:
        return ok({"success": False, "message": str(e)}, 400)

    client = payment_service.client_from_config()
    if client is None:
        logger.error("MF_TOKEN missing, cannot start mobile checkout")
        return ok({"success": False, "message": "Payment gateway not configured."}, 500)

    customer, address = _customer_and_address(data)
    order = order_service.create_order(customer, address, data["cartItems"], source="mobile")

    try:
        payment_url = start_payment(client, order, customer["email"])
    except PaymentGatewayError as e:
        return ok({
            "success": False,
            "message": "MyFatoorah ExecutePayment failed.",
            "gatewayMessage": str(e),
            "orderId": str(order.id),
        }, 502)

    return ok({
        "success": True,
        "paymentUrl": payment_url,
        "invoiceId": order.gateway_invoice_id,
        "orderId": str(order.id),
    })


# ---------------------------------------------------------------------------
# Gateway callbacks
# ---------------------------------------------------------------------------

def payment_callback_handler():
    order_id = request.args.get("orderId", "")
    payment_id = request.args.get("paymentId", "")
    invoice_id = request.args.get("Id", "")
    order = Order.query.get(int(order_id)) if order_id.isdigit() else None

    client = payment_service.client_from_config()
    status_data = None
    outcome = None
    if order is None or not order.gateway_invoice_id:
        # Cash on delivery and unknown orders have no invoice to verify
        logger.warning("Payment callback for order %r without a gateway invoice", order_id)
    elif client is None:
        logger.warning("Cannot verify payment for order %s: gateway not configured", order.id)
    else:
        key = payment_id or invoice_id or order.gateway_invoice_id
        try:
            status_data = client.get_payment_status(key, "PaymentId" if payment_id else "InvoiceId")
        except PaymentGatewayError as e:
            logger.error("GetPaymentStatus failed for order %s: %s", order.id, e)
        outcome = payment_service.invoice_outcome(status_data, order)

    if outcome is None:
        status = "pending"
    else:
        order_service.record_payment_result(order.id, outcome, payment_id or None, status_data)
        status = "success" if outcome else "error"

    return render_template(
        "payment_result.html",
        status=status,
        order_id=order_id,
        payment_id=payment_id,
        debug_json=json.dumps(status_data, indent=2) if status_data else "No extra info available.",
    )


# ---------------------------------------------------------------------------
# Web checkout
# ---------------------------------------------------------------------------

def register_page_handler():
    return render_template("register.html", title="Customer Registration",
                           customer=session.get("customer_info") or {}, errors={})


def register_submit_handler():
    form = json_body()
    if session.get("phone_verified") and not form.get("phone"):
        form["phone"] = session.get("phone")
    data, errors = validate_schema(CustomerInfoSchema, form)
    if errors:
        return render_template("register.html", title="Customer Registration", customer=form, errors=errors), 400
    session["customer_info"] = data
    return redirect(url_for("order.confirm_page"))


def confirm_page_handler():
    cart = session.get("cart") or []
    if not cart:
        return redirect(url_for("cart.view_cart"))
    customer = session.get("customer_info")
    if not customer:
        return redirect(url_for("order.register_page"))
    return render_template("order_confirm.html", summary=cart_service.summarize(cart), customer=customer)


def confirm_submit_handler():
    cart = session.get("cart") or []
    customer = session.get("customer_info")
    if not customer:
        return redirect(url_for("order.register_page"))

    items = [
        {"mealId": i.get("meal_id"), "name": i.get("name"), "price": i.get("price"),
         "quantity": i.get("quantity"), "restaurantId": i.get("restaurant_id")}
        for i in cart
    ]
    try:
        order = order_service.create_order(
            {"name": customer.get("name"), "mobile": customer.get("phone"), "email": customer.get("email")},
            {
                "city": customer.get("city"), "street": customer.get("street"),
                "building": customer.get("building"), "floor": customer.get("floor"),
                "zone": customer.get("zone"), "apt_no": customer.get("aptNo"),
                "address_note": customer.get("addressNote"),
                "latitude": customer.get("latitude"), "longitude": customer.get("longitude"),
            },
            items,
            source="web",
        )
    except ValueError:
        return redirect(url_for("cart.view_cart"))

    session["cart"] = []
    client = payment_service.client_from_config()
    if client is None:
        # No gateway: the order is kept as cash on delivery
        return render_template("payment_result.html", status="pending", order_id=str(order.id),
                               payment_id="", debug_json="Payment gateway not configured.")
    try:
        payment_url = start_payment(client, order, customer.get("email"))
    except PaymentGatewayError as e:
        return render_template("payment_result.html", status="error", order_id=str(order.id),
                               payment_id="", debug_json=str(e)), 502
    return redirect(payment_url)


# ---------------------------------------------------------------------------
# Phone verification
# ---------------------------------------------------------------------------

def enter_phone_handler():
    return render_template("enter_phone.html")


def send_otp_handler():
    phone = (json_body().get("phone") or "").strip()
    if not phone:
        return render_template("enter_phone.html", error="Phone number is required"), 400
    session["otp"] = f"{secrets.randbelow(900000) + 100000}"
    session["phone"] = phone
    session["phone_verified"] = False
    return redirect(url_for("order.verify_otp_page"))


def verify_otp_page_handler():
    return render_template("verify_otp.html", phone=session.get("phone"))


def verify_otp_submit_handler():
    otp = (json_body().get("otp") or "").strip()
    expected = session.get("otp")
    if expected and secrets.compare_digest(otp, expected):
        session["phone_verified"] = True
        session.pop("otp", None)
        return f"Phone verified: {session.get('phone')}"
    return "Invalid OTP. Please try again.", 400
