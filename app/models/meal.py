from datetime import datetime

from app.extensions import db


class Meal(db.Model):
    __tablename__ = "meals"

    id = db.Column(db.Integer, primary_key=True)
    mongo_id = db.Column(db.String(40), unique=True)
    restaurant_id = db.Column(db.Integer, db.ForeignKey("restaurants.id", ondelete="SET NULL"), index=True)
    name_en = db.Column(db.String(150), nullable=False)
    name_ar = db.Column(db.String(150))
    price = db.Column(db.Numeric(12, 3), nullable=False, default=0)
    offer = db.Column(db.Boolean, nullable=False, default=False, index=True)
    period = db.Column(db.Integer, nullable=False, default=0)  # preparation minutes
    cuisine = db.Column(db.String(80))
    image_url = db.Column(db.String(500))
    details_en = db.Column(db.Text)
    details_ar = db.Column(db.Text)
    address = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    @property
    def restaurant_name(self) -> str:
        return self.restaurant.display_name if self.restaurant else ""

    def __repr__(self):
        return f"<Meal {self.id}: {self.name_en}>"
