from datetime import datetime

from app.extensions import db
from app.utils.enums import GroceryCategory, GroceryUnit


class GroceryItem(db.Model):
    __tablename__ = "grocery_items"

    id = db.Column(db.Integer, primary_key=True)
    name_en = db.Column(db.String(150), nullable=False)
    name_ar = db.Column(db.String(150), nullable=False)
    description_en = db.Column(db.Text, default="")
    description_ar = db.Column(db.Text, default="")
    price = db.Column(db.Numeric(12, 3), nullable=False)
    offer = db.Column(db.Boolean, nullable=False, default=False)
    offer_price = db.Column(db.Numeric(12, 3))
    image_url = db.Column(db.String(500), default="/uploads/default.png")
    category = db.Column(db.Enum(*[c.value for c in GroceryCategory], name="grocery_category"), nullable=False)
    # Supermarkets are stored alongside restaurants
    supermarket_id = db.Column(db.Integer, db.ForeignKey("restaurants.id"), nullable=False, index=True)
    unit = db.Column(db.Enum(*[u.value for u in GroceryUnit], name="grocery_unit"), nullable=False, default=GroceryUnit.PIECE.value)
    stock_quantity = db.Column(db.Integer, nullable=False, default=100)
    available = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    supermarket = db.relationship("Restaurant")

    @property
    def effective_price(self) -> float:
        if self.offer and self.offer_price is not None:
            return float(self.offer_price)
        return float(self.price)
