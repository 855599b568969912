from datetime import datetime

from app.extensions import db


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120))
    username = db.Column(db.String(120), unique=True, nullable=False, index=True)
    email = db.Column(db.String(120), unique=True)
    mobile = db.Column(db.String(30), unique=True)
    password = db.Column(db.String(255))
    role_id = db.Column(db.Integer, db.ForeignKey("roles.id"))
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    role = db.relationship("Role", backref="users")

    @property
    def role_name(self) -> str:
        return self.role.name if self.role else ""

    @property
    def display_name(self) -> str:
        return self.name or self.username

    def __repr__(self):
        return f"<User {self.id}: {self.username}>"
