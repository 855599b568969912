"""
Payment Service

Thin client for the MyFatoorah v2 REST API (ExecutePayment and
GetPaymentStatus) plus the helpers that map our orders onto its payloads.
"""

import json
import logging
from typing import Any, Dict, Optional

import requests
from flask import current_app

from app.services.errors import PaymentGatewayError

logger = logging.getLogger(__name__)


class MyFatoorahClient:
    def __init__(self, base_url: str, token: str, payment_method_id: int = 2,
                 currency: str = "KWD", timeout: float = 30):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.payment_method_id = payment_method_id
        self.currency = currency
        self.timeout = timeout

    def _post(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.debug("MyFatoorah %s body=%s", path, json.dumps(body))
        try:
            resp = requests.post(
                url,
                json=body,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.token}",
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("MyFatoorah %s request failed: %s", path, e)
            raise PaymentGatewayError(f"Gateway unreachable: {e}") from e

        logger.debug("MyFatoorah %s status=%s body=%s", path, resp.status_code, resp.text)
        try:
            data = resp.json()
        except ValueError:
            logger.error("MyFatoorah %s returned non-JSON body (HTTP %s)", path, resp.status_code)
            raise PaymentGatewayError(resp.text or "Unknown error from MyFatoorah")

        if not isinstance(data, dict) or not data.get("IsSuccess"):
            raise PaymentGatewayError(gateway_message(data), response=data)
        return data

    def execute_payment(self, body: Dict[str, Any]) -> Dict[str, Any]:
        data = self._post("/v2/ExecutePayment", body)
        return data.get("Data") or {}

    def get_payment_status(self, key: str, key_type: str = "InvoiceId") -> Dict[str, Any]:
        return self._post("/v2/GetPaymentStatus", {"Key": key, "KeyType": key_type})


def client_from_config() -> Optional[MyFatoorahClient]:
    """Build a client from app config; None when no MF_TOKEN is configured."""
    cfg = current_app.config
    token = cfg.get("MF_TOKEN")
    if not token:
        return None
    return MyFatoorahClient(
        base_url=cfg.get("MF_API_URL", "https://apitest.myfatoorah.com"),
        token=token,
        payment_method_id=cfg.get("MF_PAYMENT_METHOD_ID", 2),
        currency=cfg.get("MF_CURRENCY", "KWD"),
        timeout=cfg.get("MF_TIMEOUT", 30),
    )


def gateway_message(data: Any) -> str:
    if not isinstance(data, dict):
        return "Unknown error from MyFatoorah"
    if data.get("ValidationErrors"):
        return json.dumps(data["ValidationErrors"])
    return data.get("Message") or "Unknown error from MyFatoorah"


def build_execute_payment_body(client: MyFatoorahClient, order, success_url: str, error_url: str,
                               customer_email: Optional[str] = None) -> Dict[str, Any]:
    body = {
        "PaymentMethodId": client.payment_method_id,
        "CustomerName": (order.customer_name or "").strip() or "Mobile Customer",
        "CustomerMobile": order.customer_mobile or "",
        "DisplayCurrencyIso": client.currency,
        "InvoiceValue": round(float(order.total_amount), 3),
        "CallBackUrl": success_url,
        "ErrorUrl": error_url,
        "CustomerReference": str(order.id),
        "UserDefinedField": str(order.id),
        "InvoiceItems": [
            {"ItemName": item.name or "Item", "Quantity": item.quantity, "UnitPrice": float(item.price)}
            for item in order.items
        ],
    }
    # Only send CustomerEmail when it looks like a real address
    if customer_email and "@" in str(customer_email):
        body["CustomerEmail"] = str(customer_email).strip()
    return body


def _invoice_status(data: Dict[str, Any]) -> str:
    return str(data.get("InvoiceStatus") or data.get("InvoiceStatusEn") or "").strip()


def is_paid(status_response: Optional[Dict[str, Any]]) -> bool:
    if not status_response or status_response.get("IsSuccess") is not True:
        return False
    status = _invoice_status(status_response.get("Data") or {}).lower()
    return "paid" in status and "unpaid" not in status


def belongs_to_order(data: Dict[str, Any], order) -> bool:
    """True when a GetPaymentStatus ``Data`` block describes ``order``'s invoice."""
    invoice_id = str(data.get("InvoiceId") or "")
    if invoice_id and order.gateway_invoice_id and invoice_id == str(order.gateway_invoice_id):
        return True
    reference = str(order.id)
    return reference in (str(data.get("CustomerReference") or ""), str(data.get("UserDefinedField") or ""))


def invoice_outcome(status_response: Optional[Dict[str, Any]], order) -> Optional[bool]:
    """
    Read a GetPaymentStatus reply for ``order``.

    Returns True when the invoice is paid and False when it reports an
    explicit unpaid status. None means the reply says nothing we can act on:
    the lookup failed, the invoice status is missing, or the invoice belongs
    to another order.
    """
    if not status_response or status_response.get("IsSuccess") is not True:
        return None
    data = status_response.get("Data") or {}
    if not belongs_to_order(data, order):
        logger.warning("Payment status for order %s refers to invoice %r", order.id, data.get("InvoiceId"))
        return None
    if not _invoice_status(data):
        return None
    return is_paid(status_response)
