from types import SimpleNamespace

import pytest

from app.models.order import Order
from app.models.payment import Payment
from app.services import payment_service
from app.services.payment_service import MyFatoorahClient
from tests.helpers import driver_headers

CHECKOUT = {
    "customerName": "Omar",
    "customerMobile": "96551111111",
    "customerEmail": "omar@example.com",
    "city": "Hawalli",
    "cartItems": [
        {"mealId": "1", "name": "Shawarma", "price": 1.5, "quantity": 2, "restaurantId": "1"},
        {"mealId": "2", "name": "Falafel", "price": 0.75, "quantity": 1},
    ],
}


def _execute_ok(gateway, invoice_id=555, url="https://pay.test/invoice/555"):
    gateway.reply("/v2/ExecutePayment", {"IsSuccess": True, "Data": {"InvoiceId": invoice_id, "PaymentURL": url}})


@pytest.mark.parametrize("response, expected", [
    ({"IsSuccess": True, "Data": {"InvoiceStatus": "Paid"}}, True),
    ({"IsSuccess": True, "Data": {"InvoiceStatus": "Unpaid"}}, False),
    ({"IsSuccess": False, "Data": {"InvoiceStatus": "Paid"}}, False),
    ({"IsSuccess": True, "Data": {"InvoiceStatusEn": "PAID"}}, True),
    (None, False),
])
def test_is_paid(response, expected):
    assert payment_service.is_paid(response) is expected


@pytest.mark.parametrize("response, expected", [
    ({"IsSuccess": True, "Data": {"InvoiceId": 111, "InvoiceStatus": "Paid"}}, True),
    ({"IsSuccess": True, "Data": {"InvoiceId": "111", "InvoiceStatus": "Unpaid"}}, False),
    ({"IsSuccess": True, "Data": {"CustomerReference": "12", "InvoiceStatus": "Paid"}}, True),
    ({"IsSuccess": True, "Data": {"InvoiceId": 999, "InvoiceStatus": "Paid", "CustomerReference": "424242"}}, None),
    ({"IsSuccess": True, "Data": {"InvoiceId": 111}}, None),
    ({"IsSuccess": False, "Message": "Invalid key"}, None),
    (None, None),
])
def test_invoice_outcome_is_tied_to_the_order(response, expected):
    order = SimpleNamespace(id=12, gateway_invoice_id="111")
    assert payment_service.invoice_outcome(response, order) is expected


def test_gateway_message_prefers_validation_errors():
    data = {"Message": "Bad", "ValidationErrors": [{"Name": "InvoiceValue", "Error": "Required"}]}
    assert "InvoiceValue" in payment_service.gateway_message(data)
    assert payment_service.gateway_message({"Message": "Bad"}) == "Bad"
    assert payment_service.gateway_message("oops") == "Unknown error from MyFatoorah"


def test_build_execute_payment_body():
    client = MyFatoorahClient("https://mf.test/", "tok", payment_method_id=2, currency="KWD")
    order = SimpleNamespace(
        id=12, customer_name="  ", customer_mobile="965", total_amount=3.75,
        items=[SimpleNamespace(name="Shawarma", quantity=2, price=1.5),
               SimpleNamespace(name=None, quantity=1, price=0.75)],
    )
    body = payment_service.build_execute_payment_body(client, order, "http://ok", "http://err", "not-an-email")
    assert body["CustomerName"] == "Mobile Customer"
    assert body["InvoiceValue"] == 3.75
    assert body["CustomerReference"] == "12"
    assert body["InvoiceItems"][1]["ItemName"] == "Item"
    assert "CustomerEmail" not in body

    body = payment_service.build_execute_payment_body(client, order, "http://ok", "http://err", "a@b.com")
    assert body["CustomerEmail"] == "a@b.com"


def test_mobile_checkout_success(client, app, gateway):
    _execute_ok(gateway)
    r = client.post("/order/mobile-checkout", json=CHECKOUT)
    assert r.status_code == 200, r.data
    body = r.get_json()
    assert body["success"] is True
    assert body["paymentUrl"] == "https://pay.test/invoice/555"
    assert body["invoiceId"] == "555"

    sent = gateway.calls[0]
    assert sent["headers"]["Authorization"] == "Bearer test-mf-token"
    assert sent["json"]["InvoiceValue"] == 3.75
    assert sent["json"]["CallBackUrl"] == f"http://testserver/order/mobile-payment-success?orderId={body['orderId']}"

    with app.app_context():
        order = Order.query.get(int(body["orderId"]))
        assert order.status == "Pending"
        assert order.payment_status == "Pending"
        assert order.source == "mobile"
        assert Payment.query.filter_by(order_id=order.id).one().invoice_id == "555"


def test_mobile_checkout_rejects_bad_cart(client, gateway):
    r = client.post("/order/mobile-checkout", json=dict(CHECKOUT, cartItems=[]))
    assert r.status_code == 400
    assert r.get_json()["message"] == "Cart is empty."

    bad = [{"name": "Free", "price": 0, "quantity": 1}]
    r = client.post("/order/mobile-checkout", json=dict(CHECKOUT, cartItems=bad))
    assert r.status_code == 400
    assert r.get_json()["message"] == "Invalid invoice amount."
    assert gateway.calls == []


def test_mobile_checkout_without_gateway(client, app):
    app.config["MF_TOKEN"] = None
    r = client.post("/order/mobile-checkout", json=CHECKOUT)
    assert r.status_code == 500
    assert r.get_json()["message"] == "Payment gateway not configured."


def test_mobile_checkout_gateway_failure_cancels_order(client, app, gateway):
    gateway.reply("/v2/ExecutePayment", {"IsSuccess": False, "Message": "Invalid token"}, 401)
    r = client.post("/order/mobile-checkout", json=CHECKOUT)
    assert r.status_code == 502
    body = r.get_json()
    assert body["message"] == "MyFatoorah ExecutePayment failed."
    assert body["gatewayMessage"] == "Invalid token"

    with app.app_context():
        order = Order.query.get(int(body["orderId"]))
        assert order.status == "Cancelled"
        assert order.payment_status == "Failed"

    r = client.get("/api/driver/available", headers=driver_headers(client))
    assert r.get_json()["orders"] == []


def test_paid_callback_keeps_order_available(client, app, gateway):
    _execute_ok(gateway)
    order_id = client.post("/order/mobile-checkout", json=CHECKOUT).get_json()["orderId"]
    gateway.reply("/v2/GetPaymentStatus", {"IsSuccess": True, "Data": {"InvoiceId": 555, "InvoiceStatus": "Paid"}})

    r = client.get(f"/order/mobile-payment-success?orderId={order_id}&paymentId=PAY-1")
    assert r.status_code == 200
    assert gateway.calls[-1]["json"] == {"Key": "PAY-1", "KeyType": "PaymentId"}

    with app.app_context():
        order = Order.query.get(int(order_id))
        assert order.status == "Pending"
        assert order.payment_status == "Paid"
        payment = Payment.query.filter_by(order_id=order.id).one()
        assert payment.status == "paid"
        assert payment.payment_id == "PAY-1"

    orders = client.get("/api/driver/available", headers=driver_headers(client)).get_json()["orders"]
    assert orders[0]["paymentStatus"] == "Paid"


def test_error_callback_uses_stored_invoice(client, app, gateway):
    _execute_ok(gateway, invoice_id=777)
    order_id = client.post("/order/mobile-checkout", json=CHECKOUT).get_json()["orderId"]
    gateway.reply("/v2/GetPaymentStatus", {"IsSuccess": True, "Data": {"InvoiceId": 777, "InvoiceStatus": "Unpaid"}})

    r = client.get(f"/order/mobile-payment-error?orderId={order_id}")
    assert r.status_code == 200
    assert gateway.calls[-1]["json"] == {"Key": "777", "KeyType": "InvoiceId"}

    with app.app_context():
        order = Order.query.get(int(order_id))
        assert order.status == "Cancelled"
        assert order.payment_status == "Failed"


def test_unverifiable_callback_changes_nothing(client, app, gateway):
    _execute_ok(gateway)
    order_id = client.post("/order/mobile-checkout", json=CHECKOUT).get_json()["orderId"]
    app.config["MF_TOKEN"] = None

    r = client.get(f"/order/mobile-payment-success?orderId={order_id}&paymentId=PAY-9")
    assert r.status_code == 200
    with app.app_context():
        assert Order.query.get(int(order_id)).payment_status == "Pending"


def _payment_state(app, order_id):
    with app.app_context():
        order = Order.query.get(int(order_id))
        return order.status, order.payment_status


def test_callback_for_cash_order_changes_nothing(client, app, gateway):
    order_id = client.post("/api/orders", json=CHECKOUT).get_json()["orderId"]
    gateway.reply("/v2/GetPaymentStatus", {"IsSuccess": False})

    r = client.get(f"/order/mobile-payment-error?orderId={order_id}&paymentId=junk")
    assert r.status_code == 200
    assert b"Order Received" in r.data
    assert gateway.calls == []
    assert _payment_state(app, order_id) == ("Pending", None)


def test_failed_status_lookup_changes_nothing(client, app, gateway):
    _execute_ok(gateway)
    order_id = client.post("/order/mobile-checkout", json=CHECKOUT).get_json()["orderId"]
    gateway.reply("/v2/GetPaymentStatus", {"IsSuccess": False, "Message": "Invalid key"}, 400)

    r = client.get(f"/order/mobile-payment-error?orderId={order_id}&paymentId=junk")
    assert b"Order Received" in r.data
    assert gateway.paths()[-1] == "GetPaymentStatus"
    assert _payment_state(app, order_id) == ("Pending", "Pending")


def test_payment_for_another_invoice_is_ignored(client, app, gateway):
    _execute_ok(gateway, invoice_id=111)
    order_id = client.post("/order/mobile-checkout", json=CHECKOUT).get_json()["orderId"]
    gateway.reply("/v2/GetPaymentStatus", {"IsSuccess": True, "Data": {
        "InvoiceId": 999, "InvoiceStatus": "Paid", "CustomerReference": "424242"}})

    r = client.get(f"/order/mobile-payment-success?orderId={order_id}&paymentId=OTHER-PAY")
    assert b"Order Received" in r.data
    assert _payment_state(app, order_id) == ("Pending", "Pending")

    orders = client.get("/api/driver/available", headers=driver_headers(client)).get_json()["orders"]
    assert orders[0]["paymentStatus"] == "Pending"


def test_payment_matched_by_customer_reference(client, app, gateway):
    _execute_ok(gateway, invoice_id=111)
    order_id = client.post("/order/mobile-checkout", json=CHECKOUT).get_json()["orderId"]
    gateway.reply("/v2/GetPaymentStatus", {"IsSuccess": True, "Data": {
        "InvoiceStatus": "Paid", "CustomerReference": str(order_id)}})

    r = client.get(f"/order/mobile-payment-success?orderId={order_id}&paymentId=PAY-2")
    assert b"Payment Successful" in r.data
    assert _payment_state(app, order_id) == ("Pending", "Paid")


def test_failed_then_paid_restores_order(client, app, gateway):
    _execute_ok(gateway, invoice_id=321)
    order_id = client.post("/order/mobile-checkout", json=CHECKOUT).get_json()["orderId"]

    gateway.reply("/v2/GetPaymentStatus", {"IsSuccess": True, "Data": {"InvoiceId": 321, "InvoiceStatus": "Unpaid"}})
    client.get(f"/order/mobile-payment-error?orderId={order_id}&paymentId=PAY-A")
    assert _payment_state(app, order_id) == ("Cancelled", "Failed")

    gateway.reply("/v2/GetPaymentStatus", {"IsSuccess": True, "Data": {"InvoiceId": 321, "InvoiceStatus": "Paid"}})
    client.get(f"/order/mobile-payment-success?orderId={order_id}&paymentId=PAY-B")
    assert _payment_state(app, order_id) == ("Pending", "Paid")

    orders = client.get("/api/driver/available", headers=driver_headers(client)).get_json()["orders"]
    assert [o["orderId"] for o in orders] == [str(order_id)]


def test_error_after_paid_keeps_order_paid(client, app, gateway):
    _execute_ok(gateway, invoice_id=321)
    order_id = client.post("/order/mobile-checkout", json=CHECKOUT).get_json()["orderId"]

    gateway.reply("/v2/GetPaymentStatus", {"IsSuccess": True, "Data": {"InvoiceId": 321, "InvoiceStatus": "Paid"}})
    client.get(f"/order/mobile-payment-success?orderId={order_id}&paymentId=PAY-A")

    gateway.reply("/v2/GetPaymentStatus", {"IsSuccess": True, "Data": {"InvoiceId": 321, "InvoiceStatus": "Unpaid"}})
    client.get(f"/order/mobile-payment-error?orderId={order_id}&paymentId=PAY-B")
    assert _payment_state(app, order_id) == ("Pending", "Paid")
    with app.app_context():
        payment = Payment.query.filter_by(order_id=int(order_id)).one()
        assert (payment.status, payment.payment_id) == ("paid", "PAY-A")


def test_mobile_checkout_accepts_numeric_address_fields(client, app, gateway):
    _execute_ok(gateway)
    body = dict(CHECKOUT, building=12, floor=3, zone=7.0, customerMobile=96551111111)
    r = client.post("/order/mobile-checkout", json=body)
    assert r.status_code == 200, r.data
    with app.app_context():
        order = Order.query.get(int(r.get_json()["orderId"]))
        assert (order.building, order.floor, order.zone) == ("12", "3", "7")
        assert order.customer_mobile == "96551111111"

    r = client.post("/order/mobile-checkout", json=dict(CHECKOUT, floor={"level": 3}))
    assert r.status_code == 400
    assert "floor" in r.get_json()["details"]


def test_web_checkout_flow(client, app, gateway, meal_ids):
    _execute_ok(gateway, url="https://pay.test/web")
    client.post("/cart/add", json={"mealId": meal_ids["Shawarma"], "qty": 2})

    r = client.get("/order/confirm")
    assert r.headers["Location"].endswith("/register")

    r = client.post("/register", data={"name": "Lina", "email": "bad"})
    assert r.status_code == 400

    r = client.post("/register", data={"name": "Lina", "phone": "96552222222", "city": "Salmiya"})
    assert r.headers["Location"].endswith("/order/confirm")
    assert client.get("/order/confirm").status_code == 200

    r = client.post("/order/confirm")
    assert r.status_code == 302
    assert r.headers["Location"] == "https://pay.test/web"

    with client.session_transaction() as sess:
        assert sess["cart"] == []
    with app.app_context():
        order = Order.query.filter_by(customer_mobile="96552222222").one()
        assert order.source == "web"
        assert float(order.total_amount) == 3.0


def test_phone_verification(client):
    r = client.post("/send-otp", data={})
    assert r.status_code == 400

    r = client.post("/send-otp", data={"phone": "96553333333"})
    assert r.headers["Location"].endswith("/verify-otp")
    with client.session_transaction() as sess:
        code = sess["otp"]
        assert len(code) == 6

    assert client.post("/verify-otp", data={"otp": "000000" if code != "000000" else "111111"}).status_code == 400
    r = client.post("/verify-otp", data={"otp": code})
    assert r.data == b"Phone verified: 96553333333"
    with client.session_transaction() as sess:
        assert sess["phone_verified"] is True
        assert "otp" not in sess
