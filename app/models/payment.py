from datetime import datetime

from app.extensions import db


class Payment(db.Model):
    __tablename__ = "payments"

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    provider = db.Column(db.String(30), nullable=False, default="myfatoorah")
    invoice_id = db.Column(db.String(64))
    payment_id = db.Column(db.String(64))
    status = db.Column(db.String(20), nullable=False, default="pending")  # pending, paid, failed
    raw_response = db.Column(db.JSON)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
