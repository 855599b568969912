"""
Report Service

Aggregates for the admin dashboard and the per-driver meals report.
"""

from typing import Any, Dict, List

from sqlalchemy import func

from app.extensions import db
from app.models.meal import Meal
from app.models.notification import Notification
from app.models.order import Order
from app.models.restaurant import Restaurant
from app.models.user import User
from app.services.order_service import format_customer_address
from app.utils.enums import OrderStatus, PaymentStatus


def driver_meals() -> List[Dict[str, Any]]:
    """
    Group the line items of every assigned order by driver.

    Returns a list of ``{"driverId", "driverName", "orders": [...]}`` where
    each entry in ``orders`` is one meal line of one order.
    """
    orders = (
        Order.query
        .filter(Order.delivery_person_id.isnot(None))
        .order_by(Order.created_at.desc())
        .all()
    )

    grouped: Dict[str, Dict[str, Any]] = {}
    for order in orders:
        driver = order.delivery_person
        driver_id = str(driver.id) if driver else "UNASSIGNED"
        bucket = grouped.setdefault(driver_id, {
            "driverId": driver_id,
            "driverName": driver.username if driver else "Unassigned",
            "orders": [],
        })
        for item in order.items:
            bucket["orders"].append({
                "orderId": order.id,
                "status": order.status,
                "createdAt": order.created_at,
                "customerName": order.customer_name,
                "customerMobile": order.customer_mobile,
                "customerAddress": format_customer_address(order),
                "mealName": item.name,
                "quantity": item.quantity,
                "price": float(item.price or 0),
                "lineTotal": item.line_total,
                "totalAmount": float(order.total_amount or 0),
            })
    return list(grouped.values())


def dashboard_stats() -> Dict[str, Any]:
    by_status = dict(
        db.session.query(Order.status, func.count(Order.id)).group_by(Order.status).all()
    )
    revenue = (
        db.session.query(func.coalesce(func.sum(Order.total_amount), 0))
        .filter(Order.payment_status == PaymentStatus.PAID.value)
        .scalar()
    )
    return {
        "total_users": User.query.count(),
        "total_restaurants": Restaurant.query.count(),
        "total_meals": Meal.query.count(),
        "total_orders": sum(by_status.values()),
        "orders_by_status": {s.value: by_status.get(s.value, 0) for s in OrderStatus},
        "paid_revenue": round(float(revenue or 0), 3),
    }


def recent_notifications(limit: int = 100) -> List[Notification]:
    return (
        Notification.query
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit)
        .all()
    )
