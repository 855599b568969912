from datetime import datetime

from app.extensions import db
from app.utils.enums import NotificationStatus


class Notification(db.Model):
    __tablename__ = "notifications"

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, unique=True)
    message = db.Column(db.String(255))
    status = db.Column(db.String(20), nullable=False, default=NotificationStatus.UNPICKED.value)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
