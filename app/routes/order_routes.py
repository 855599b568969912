from flask import Blueprint
from app.controllers.order_controller import (
    mobile_checkout_handler,
    payment_callback_handler,
    register_page_handler,
    register_submit_handler,
    confirm_page_handler,
    confirm_submit_handler,
    enter_phone_handler,
    send_otp_handler,
    verify_otp_page_handler,
    verify_otp_submit_handler,
)

order_bp = Blueprint("order", __name__)

@order_bp.post("/order/mobile-checkout")
def mobile_checkout():
    return mobile_checkout_handler()

@order_bp.get("/order/mobile-payment-success")
def mobile_payment_success():
    return payment_callback_handler()

@order_bp.get("/order/mobile-payment-error")
def mobile_payment_error():
    return payment_callback_handler()

@order_bp.get("/register")
def register_page():
    return register_page_handler()

@order_bp.post("/register")
def register_submit():
    return register_submit_handler()

@order_bp.get("/order/confirm")
def confirm_page():
    return confirm_page_handler()

@order_bp.post("/order/confirm")
def confirm_submit():
    return confirm_submit_handler()

@order_bp.get("/enter-phone")
def enter_phone():
    return enter_phone_handler()

@order_bp.post("/send-otp")
def send_otp():
    return send_otp_handler()

@order_bp.get("/verify-otp")
def verify_otp_page():
    return verify_otp_page_handler()

@order_bp.post("/verify-otp")
def verify_otp_submit():
    return verify_otp_submit_handler()
