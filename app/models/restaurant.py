from datetime import datetime

from app.extensions import db


class Restaurant(db.Model):
    __tablename__ = "restaurants"

    id = db.Column(db.Integer, primary_key=True)
    mongo_id = db.Column(db.String(40), unique=True)
    name_en = db.Column(db.String(150), nullable=False, index=True)
    name_ar = db.Column(db.String(150))
    address = db.Column(db.String(255))
    logo_url = db.Column(db.String(500))
    latitude = db.Column(db.Float)
    longitude = db.Column(db.Float)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    meals = db.relationship("Meal", backref="restaurant", lazy="dynamic")

    @property
    def display_name(self) -> str:
        return self.name_en or self.name_ar or "Unknown"

    def __repr__(self):
        return f"<Restaurant {self.id}: {self.name_en}>"
