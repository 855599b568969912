from datetime import datetime

from app.extensions import db
from app.utils.enums import OrderStatus, PaymentStatus


class Order(db.Model):
    __tablename__ = "orders"

    id = db.Column(db.Integer, primary_key=True)
    mongo_id = db.Column(db.String(40), unique=True)
    restaurant_id = db.Column(db.Integer, db.ForeignKey("restaurants.id", ondelete="SET NULL"))

    customer_name = db.Column(db.String(120))
    customer_mobile = db.Column(db.String(30))
    customer_email = db.Column(db.String(120))

    # Delivery details snapshot
    city = db.Column(db.String(80))
    street = db.Column(db.String(80))
    building = db.Column(db.String(40))
    apt_no = db.Column(db.String(20))
    floor = db.Column(db.String(20))
    zone = db.Column(db.String(20))
    address_note = db.Column(db.Text)
    latitude = db.Column(db.Float)
    longitude = db.Column(db.Float)

    total_amount = db.Column(db.Numeric(12, 3), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=OrderStatus.PENDING.value, index=True)
    payment_status = db.Column(db.String(20))
    gateway_invoice_id = db.Column(db.String(64))
    source = db.Column(db.String(20), nullable=False, default="web")

    delivery_person_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), index=True)
    delivery_person_name = db.Column(db.String(120), nullable=False, default="")

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    restaurant = db.relationship("Restaurant")
    delivery_person = db.relationship("User")
    items = db.relationship("OrderItem", backref="order", cascade="all, delete-orphan", order_by="OrderItem.id")
    notification = db.relationship("Notification", backref="order", uselist=False, cascade="all, delete-orphan")
    payments = db.relationship("Payment", backref="order", cascade="all, delete-orphan")

    @property
    def coordinates(self):
        """GeoJSON point ([lng, lat]) for the map views, or None."""
        if self.latitude is None or self.longitude is None:
            return None
        return {"type": "Point", "coordinates": [self.longitude, self.latitude]}

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID.value

    def __repr__(self):
        return f"<Order {self.id}: {self.status}>"


class OrderItem(db.Model):
    __tablename__ = "order_items"

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    meal_id = db.Column(db.Integer, db.ForeignKey("meals.id", ondelete="SET NULL"))
    name = db.Column(db.String(150), nullable=False, default="Item")
    price = db.Column(db.Numeric(12, 3), nullable=False, default=0)
    quantity = db.Column(db.Integer, nullable=False, default=1)

    @property
    def line_total(self) -> float:
        return float(self.price or 0) * (self.quantity or 0)
