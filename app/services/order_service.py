"""
Order Service

Order creation, the driver claim/status lifecycle and the payment
bookkeeping that follows a MyFatoorah callback.

Lifecycle::

    Pending --claim--> Picked Up --deliver--> Delivered

The notification attached to each order mirrors its status
(unpicked / picked / delivered) so the admin dashboard can show it.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from app.extensions import db
from app.models.customer import Customer
from app.models.notification import Notification
from app.models.order import Order, OrderItem
from app.models.payment import Payment
from app.services.errors import NotFoundError, InvalidTransitionError
from app.utils.enums import OrderStatus, PaymentStatus, NotificationStatus
from app.utils.http import safe_number

logger = logging.getLogger(__name__)

ORDER_TRANSITIONS = {
    OrderStatus.PENDING.value: [OrderStatus.PICKED_UP.value],
    OrderStatus.PICKED_UP.value: [OrderStatus.DELIVERED.value],
}

NOTIFICATION_STATUS = {
    OrderStatus.PICKED_UP.value: NotificationStatus.PICKED.value,
    OrderStatus.DELIVERED.value: NotificationStatus.DELIVERED.value,
}

ADDRESS_FIELDS = ("city", "street", "building", "apt_no", "floor", "zone", "address_note")


def can_transition(current: str, new: str) -> bool:
    return new in ORDER_TRANSITIONS.get(current, [])


def normalize_items(raw_items: Optional[Iterable[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    items = []
    for it in raw_items or []:
        it = it or {}
        meal_id = it.get("mealId") or it.get("meal_id") or it.get("id")
        items.append({
            "meal_id": int(meal_id) if str(meal_id or "").isdigit() else None,
            "name": it.get("name") or "Item",
            "quantity": int(safe_number(it.get("quantity"), 1) or 0),
            "price": safe_number(it.get("price"), 0.0),
            "restaurant_id": it.get("restaurantId") or it.get("restaurant_id") or None,
        })
    return items


def order_total(items: Iterable[Dict[str, Any]]) -> float:
    return sum(i["quantity"] * i["price"] for i in items)


def check_items(raw_items) -> List[Dict[str, Any]]:
    """Normalize line items; ValueError when the cart is empty or the total is not positive."""
    items = normalize_items(raw_items)
    if not items:
        raise ValueError("Cart is empty.")
    total = order_total(items)
    if not total or total <= 0:
        raise ValueError("Invalid invoice amount.")
    return items


def upsert_customer(name: str, phone: str, address: Dict[str, Any]) -> Optional[Customer]:
    if not phone:
        return None
    customer = Customer.query.filter_by(phone=phone).first()
    if not customer:
        customer = Customer(phone=phone, name=name or "Customer")
        db.session.add(customer)
    elif name:
        customer.name = name
    for field in ADDRESS_FIELDS:
        if address.get(field):
            setattr(customer, field, address[field])
    if address.get("latitude") is not None and address.get("longitude") is not None:
        customer.latitude = address["latitude"]
        customer.longitude = address["longitude"]
    return customer


def create_order(customer: Dict[str, Any], address: Dict[str, Any], raw_items, source: str = "web",
                 payment_status: Optional[str] = None) -> Order:
    """
    Create a Pending order with its line items and notification.

    Raises ValueError when the cart is empty or the total is not positive.
    The restaurant is taken from the first line item.
    """
    items = check_items(raw_items)
    total = order_total(items)

    restaurant_id = items[0]["restaurant_id"]
    lat = safe_number(address.get("latitude"))
    lng = safe_number(address.get("longitude"))

    order = Order(
        restaurant_id=int(restaurant_id) if str(restaurant_id or "").isdigit() else None,
        customer_name=customer.get("name") or "Mobile Customer",
        customer_mobile=customer.get("mobile") or "",
        customer_email=customer.get("email") or None,
        latitude=lat,
        longitude=lng,
        total_amount=total,
        status=OrderStatus.PENDING.value,
        payment_status=payment_status,
        source=source,
        **{f: (address.get(f) or "") for f in ADDRESS_FIELDS},
    )
    for it in items:
        order.items.append(OrderItem(
            meal_id=it["meal_id"], name=it["name"], price=it["price"], quantity=it["quantity"],
        ))
    db.session.add(order)
    db.session.flush()

    order.notification = Notification(
        message=f"New order #{order.id} from {order.customer_name}",
        status=NotificationStatus.UNPICKED.value,
    )
    upsert_customer(order.customer_name, order.customer_mobile,
                    dict(address, latitude=lat, longitude=lng))
    db.session.commit()
    logger.info("Created order %s total=%.3f source=%s", order.id, total, source)
    return order


def get_order(order_id) -> Order:
    order = Order.query.get(order_id)
    if not order:
        raise NotFoundError("Order not found")
    return order


def _sync_notification(order_id: int, order_status: str) -> None:
    status = NOTIFICATION_STATUS.get(order_status)
    if status:
        Notification.query.filter_by(order_id=order_id).update(
            {"status": status}, synchronize_session=False
        )


def list_available_orders() -> List[Order]:
    return (
        Order.query
        .filter(Order.status == OrderStatus.PENDING.value)
        .filter(db.or_(Order.payment_status.is_(None), Order.payment_status != PaymentStatus.FAILED.value))
        .order_by(Order.created_at.asc())
        .all()
    )


def list_driver_orders(driver_id: int) -> List[Order]:
    return Order.query.filter_by(delivery_person_id=driver_id).order_by(Order.created_at.desc()).all()


def claim_order(order_id: int, driver_id: int, driver_name: Optional[str] = None) -> Order:
    """
    Attach a driver to a Pending order.

    The update is conditional on the row still being Pending, so of two
    concurrent claims only one matches; the other gets NotFoundError.
    """
    values = {
        "status": OrderStatus.PICKED_UP.value,
        "delivery_person_id": driver_id,
        "updated_at": datetime.utcnow(),
    }
    if driver_name:
        values["delivery_person_name"] = driver_name

    claimed = (
        Order.query
        .filter(Order.id == order_id, Order.status == OrderStatus.PENDING.value)
        .update(values, synchronize_session=False)
    )
    if not claimed:
        db.session.rollback()
        raise NotFoundError("ORDER_NOT_FOUND_OR_ALREADY_CLAIMED")

    _sync_notification(order_id, OrderStatus.PICKED_UP.value)
    db.session.commit()
    logger.info("Order %s claimed by driver %s", order_id, driver_id)
    order = Order.query.get(order_id)
    db.session.refresh(order)
    return order


def update_status(order_id: int, driver_id: int, new_status: str) -> Order:
    order = Order.query.filter_by(id=order_id, delivery_person_id=driver_id).first()
    if not order:
        raise PermissionError("Unauthorized or order not found")
    if not can_transition(order.status, new_status):
        raise InvalidTransitionError(f"Invalid status transition: {order.status} -> {new_status}")

    order.status = new_status
    _sync_notification(order.id, new_status)
    db.session.commit()
    logger.info("Order %s moved to %s by driver %s", order.id, new_status, driver_id)
    return order


# ---------------------------------------------------------------------------
# Payment bookkeeping
# ---------------------------------------------------------------------------

def attach_invoice(order: Order, invoice_id, raw_response: Optional[Dict[str, Any]] = None) -> Payment:
    order.gateway_invoice_id = str(invoice_id) if invoice_id else None
    order.payment_status = PaymentStatus.PENDING.value
    payment = Payment(order_id=order.id, invoice_id=order.gateway_invoice_id, status="pending",
                      raw_response=raw_response)
    db.session.add(payment)
    db.session.commit()
    return payment


def record_payment_result(order_id, paid: bool, payment_id: Optional[str] = None,
                          raw_response: Optional[Dict[str, Any]] = None) -> Optional[Order]:
    """
    Apply a gateway verdict.

    A failed payment cancels a Pending order so drivers never see it. A later
    paid verdict puts an order cancelled that way back to Pending, and a
    failed verdict never downgrades an order that is already paid.
    """
    order = Order.query.get(order_id) if str(order_id or "").isdigit() else None
    if not order:
        logger.warning("Payment callback for unknown order %r", order_id)
        return None

    if paid:
        if (order.status == OrderStatus.CANCELLED.value
                and order.payment_status == PaymentStatus.FAILED.value):
            order.status = OrderStatus.PENDING.value
        order.payment_status = PaymentStatus.PAID.value
    elif order.payment_status == PaymentStatus.PAID.value:
        logger.warning("Ignoring failed payment verdict for paid order %s", order.id)
        return order
    else:
        order.payment_status = PaymentStatus.FAILED.value
        if order.status == OrderStatus.PENDING.value:
            order.status = OrderStatus.CANCELLED.value

    payment = (
        Payment.query.filter_by(order_id=order.id).order_by(Payment.id.desc()).first()
        or Payment(order_id=order.id, invoice_id=order.gateway_invoice_id)
    )
    payment.payment_id = payment_id or payment.payment_id
    payment.status = "paid" if paid else "failed"
    if raw_response is not None:
        payment.raw_response = raw_response
    db.session.add(payment)
    db.session.commit()
    logger.info("Order %s payment %s", order.id, order.payment_status)
    return order


# ---------------------------------------------------------------------------
# Presentation helpers
# ---------------------------------------------------------------------------

def format_customer_address(order) -> str:
    parts = [
        order.city,
        f"Zone {order.zone}" if order.zone else "",
        f"Street {order.street}" if order.street else "",
        f"Bldg {order.building}" if order.building else "",
        f"Floor {order.floor}" if order.floor else "",
        f"Apt {order.apt_no}" if order.apt_no else "",
        order.address_note,
    ]
    return ", ".join(p for p in parts if p)


def serialize_order(order: Order) -> Dict[str, Any]:
    restaurant = order.restaurant
    data = {
        "_id": str(order.id),
        "orderId": str(order.id),
        "restaurantName": restaurant.display_name if restaurant else "Unknown",
        "mealName": ", ".join(i.name for i in order.items),
        "totalAmount": float(order.total_amount or 0),
        "status": order.status,
        "paymentStatus": order.payment_status,
        "customerName": order.customer_name or "Mobile Customer",
        "customerPhone": order.customer_mobile or "",
        "customerAddress": format_customer_address(order),
        "driverId": str(order.delivery_person_id) if order.delivery_person_id else None,
        "driverName": order.delivery_person_name or None,
        "createdAt": order.created_at.isoformat() if order.created_at else None,
        "items": [
            {"mealId": str(i.meal_id) if i.meal_id else None, "name": i.name,
             "price": float(i.price), "quantity": i.quantity}
            for i in order.items
        ],
        "customerLat": order.latitude,
        "customerLng": order.longitude,
        "restaurantLat": restaurant.latitude if restaurant else None,
        "restaurantLng": restaurant.longitude if restaurant else None,
    }
    return data
