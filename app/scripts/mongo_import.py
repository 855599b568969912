"""
Import ``mongoexport`` dumps of the legacy MongoDB store.

Each collection is read from ``<name>.json`` in the export directory, either
one document per line (the mongoexport default) or a single JSON array
(``--jsonArray``). Rows keep the Mongo ``_id`` in ``mongo_id`` so re-running
the import updates instead of duplicating.
"""

import json
import logging
import os
import re
from typing import Any, Dict, Iterator, Optional

from app.extensions import db
from app.models.meal import Meal
from app.models.notification import Notification
from app.models.order import Order, OrderItem
from app.models.restaurant import Restaurant
from app.models.user import User
from app.services.user_service import get_role
from app.utils.enums import OrderStatus, PaymentStatus, NotificationStatus, UserRole
from app.utils.http import safe_number

logger = logging.getLogger(__name__)

COLLECTIONS = ("users", "restaurants", "meals", "orders")


def unwrap(value: Any) -> Any:
    """Collapse MongoDB extended JSON wrappers ($oid, $date, $numberDecimal, ...)."""
    if isinstance(value, dict):
        if len(value) == 1:
            key = next(iter(value))
            if key in ("$oid", "$numberDecimal", "$numberInt", "$numberLong", "$numberDouble"):
                return value[key]
            if key == "$date":
                inner = value[key]
                return inner.get("$numberLong") if isinstance(inner, dict) else inner
        return {k: unwrap(v) for k, v in value.items()}
    if isinstance(value, list):
        return [unwrap(v) for v in value]
    return value


def text(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def pick_role(raw: Any) -> str:
    r = (text(raw) or "").lower()
    if r in (UserRole.DELIVERY.value, UserRole.DRIVER.value):
        return UserRole.DRIVER.value
    if r in ("dataentry", UserRole.DATA_ENTRY.value):
        return UserRole.DATA_ENTRY.value
    if r in (UserRole.ADMIN.value, UserRole.SUPPORT.value, UserRole.CUSTOMER.value):
        return r
    return UserRole.CUSTOMER.value


def normalize_order_status(raw: Any):
    """Map a legacy order status onto ``(status, payment_status)``."""
    v = text(raw) or ""
    known = {s.value for s in OrderStatus}
    if v in known:
        return v, None
    if v.lower() == "paid":
        return OrderStatus.PENDING.value, PaymentStatus.PAID.value
    if re.search(r"picked", v, re.I):
        return OrderStatus.PICKED_UP.value, None
    if re.search(r"deliver", v, re.I):
        return OrderStatus.DELIVERED.value, None
    if re.search(r"fail", v, re.I):
        return OrderStatus.CANCELLED.value, PaymentStatus.FAILED.value
    if re.search(r"cancel", v, re.I):
        return OrderStatus.CANCELLED.value, None
    return OrderStatus.PENDING.value, None


def normalize_payment_status(raw: Any) -> Optional[str]:
    v = (text(raw) or "").lower()
    if not v:
        return None
    if "fail" in v:
        return PaymentStatus.FAILED.value
    if "paid" in v and "unpaid" not in v:
        return PaymentStatus.PAID.value
    return PaymentStatus.PENDING.value


def read_export(path: str) -> Iterator[Dict[str, Any]]:
    with open(path, encoding="utf-8") as fh:
        content = fh.read().strip()
    if not content:
        return
    if content.startswith("["):
        docs = json.loads(content)
    else:
        docs = (json.loads(line) for line in content.splitlines() if line.strip())
    for doc in docs:
        yield unwrap(doc)


class MongoImporter:
    def __init__(self):
        self.users: Dict[str, int] = {}
        self.restaurants: Dict[str, int] = {}
        self.meals: Dict[str, int] = {}
        self.counts = {name: 0 for name in COLLECTIONS}

    def _upsert(self, model, mongo_id: Optional[str], **fields):
        row = model.query.filter_by(mongo_id=mongo_id).first() if mongo_id else None
        if row is None:
            row = model(mongo_id=mongo_id) if hasattr(model, "mongo_id") else model()
            db.session.add(row)
        for key, value in fields.items():
            if value is not None:
                setattr(row, key, value)
        db.session.flush()
        return row

    def import_user(self, doc):
        mongo_id = text(doc.get("_id"))
        username = text(doc.get("username")) or text(doc.get("mobile")) or text(doc.get("email")) or mongo_id
        user = User.query.filter_by(username=username).first() or User(username=username)
        user.name = text(doc.get("name")) or user.name
        user.email = (text(doc.get("email")) or "").lower() or user.email
        user.mobile = text(doc.get("mobile")) or user.mobile
        # Plaintext legacy passwords are still accepted at login
        user.password = text(doc.get("password")) or user.password
        user.role = get_role(pick_role(doc.get("role")))
        db.session.add(user)
        db.session.flush()
        if mongo_id:
            self.users[mongo_id] = user.id

    def import_restaurant(self, doc):
        mongo_id = text(doc.get("_id"))
        coords = doc.get("coordinates") or doc.get("location") or {}
        lat = lng = None
        if isinstance(coords, dict) and isinstance(coords.get("coordinates"), list) and len(coords["coordinates"]) == 2:
            lng, lat = (safe_number(c) for c in coords["coordinates"])
        elif isinstance(coords, dict):
            lat = safe_number(coords.get("lat") or coords.get("latitude"))
            lng = safe_number(coords.get("lng") or coords.get("longitude"))
        restaurant = self._upsert(
            Restaurant, mongo_id,
            name_en=text(doc.get("restaurant_en")) or text(doc.get("name_en")) or text(doc.get("name")) or "Unknown",
            name_ar=text(doc.get("restaurant_ar")) or text(doc.get("name_ar")),
            address=text(doc.get("address")),
            logo_url=text(doc.get("logo")) or text(doc.get("logo_url")),
            latitude=safe_number(doc.get("lat") or doc.get("latitude"), lat),
            longitude=safe_number(doc.get("lng") or doc.get("longitude"), lng),
        )
        if mongo_id:
            self.restaurants[mongo_id] = restaurant.id

    def _restaurant_for(self, doc) -> Optional[int]:
        for key in ("restaurantId", "restaurant_id", "restaurant"):
            ref = text(doc.get(key))
            if ref and ref in self.restaurants:
                return self.restaurants[ref]
        name = text(doc.get("restaurant_en")) or text(doc.get("restaurant_ar"))
        if name:
            found = Restaurant.query.filter(db.or_(Restaurant.name_en == name, Restaurant.name_ar == name)).first()
            return found.id if found else None
        return None

    def import_meal(self, doc):
        mongo_id = text(doc.get("_id"))
        period = safe_number(doc.get("period"), 0)
        meal = self._upsert(
            Meal, mongo_id,
            restaurant_id=self._restaurant_for(doc),
            name_en=text(doc.get("name")) or text(doc.get("name_en")) or "Meal",
            name_ar=text(doc.get("name_ar")),
            price=safe_number(doc.get("price"), 0),
            offer=bool(doc.get("offer")),
            period=int(period or 0),
            cuisine=text(doc.get("cuisine")),
            image_url=text(doc.get("image")) or text(doc.get("image_url")),
            details_en=text(doc.get("details")) or text(doc.get("details_en")),
            details_ar=text(doc.get("details_ar")),
            address=text(doc.get("address")),
        )
        if mongo_id:
            self.meals[mongo_id] = meal.id

    def import_order(self, doc):
        mongo_id = text(doc.get("_id"))
        details = doc.get("deliveryDetails") or {}
        status, payment_status = normalize_order_status(doc.get("status"))
        driver_ref = text(doc.get("deliveryPersonId")) or text(doc.get("driverId"))
        order = self._upsert(
            Order, mongo_id,
            restaurant_id=self._restaurant_for(doc),
            customer_name=text(doc.get("customerName")),
            customer_mobile=text(doc.get("customerMobile")) or text(doc.get("customerPhone")),
            city=text(details.get("city")),
            street=text(details.get("street")),
            building=text(details.get("building")),
            apt_no=text(details.get("aptNo")),
            floor=text(details.get("floor")),
            zone=text(details.get("zone")),
            address_note=text(details.get("addressNote")) or text(doc.get("customerAddress")),
            latitude=safe_number(details.get("latitude")),
            longitude=safe_number(details.get("longitude")),
            total_amount=safe_number(doc.get("totalAmount") or doc.get("total"), 0),
            status=status,
            payment_status=payment_status or normalize_payment_status(doc.get("paymentStatus")),
            gateway_invoice_id=text(doc.get("gatewayInvoiceId")),
            delivery_person_id=self.users.get(driver_ref) if driver_ref else None,
            delivery_person_name=text(doc.get("deliveryPersonName")),
            source=text(doc.get("source")) or "web",
        )

        if not order.items:
            for it in doc.get("mealItems") or doc.get("items") or doc.get("cartItems") or []:
                meal_ref = text(it.get("mealId"))
                order.items.append(OrderItem(
                    meal_id=self.meals.get(meal_ref) if meal_ref else None,
                    name=text(it.get("name")) or "Item",
                    price=safe_number(it.get("price"), 0),
                    quantity=int(safe_number(it.get("quantity"), 1) or 1),
                ))

        if order.notification is None:
            notification_status = {
                OrderStatus.PICKED_UP.value: NotificationStatus.PICKED.value,
                OrderStatus.DELIVERED.value: NotificationStatus.DELIVERED.value,
            }.get(order.status, NotificationStatus.UNPICKED.value)
            order.notification = Notification(message=f"Imported order #{order.id}", status=notification_status)
        db.session.flush()

    def run(self, export_dir: str):
        handlers = {
            "users": self.import_user,
            "restaurants": self.import_restaurant,
            "meals": self.import_meal,
            "orders": self.import_order,
        }
        for name in COLLECTIONS:
            path = os.path.join(export_dir, f"{name}.json")
            if not os.path.exists(path):
                logger.warning("Skipping %s: %s not found", name, path)
                continue
            for doc in read_export(path):
                handlers[name](doc)
                self.counts[name] += 1
            db.session.commit()
            logger.info("Imported %d %s", self.counts[name], name)
        return self.counts
