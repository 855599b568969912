from datetime import datetime

from app.extensions import db


class Customer(db.Model):
    __tablename__ = "customers"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    phone = db.Column(db.String(30), nullable=False, unique=True)
    city = db.Column(db.String(80))
    street = db.Column(db.String(80))
    building = db.Column(db.String(40))
    floor = db.Column(db.String(20))
    zone = db.Column(db.String(20))
    apt_no = db.Column(db.String(20))
    address_note = db.Column(db.Text)
    latitude = db.Column(db.Float)
    longitude = db.Column(db.Float)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
