"""
User Service

Credential checks for staff, drivers and mobile customers.
"""

import logging
from typing import Optional

from sqlalchemy import or_

from app.extensions import db
from app.models.role import Role
from app.models.user import User
from app.services.errors import ConflictError
from app.utils.auth import hash_password, verify_password
from app.utils.enums import UserRole, DRIVER_ROLES

logger = logging.getLogger(__name__)


def get_role(name: str) -> Role:
    """Return the role row, creating it on first use."""
    role = Role.query.filter_by(name=name).first()
    if not role:
        role = Role(name=name)
        db.session.add(role)
        db.session.flush()
    return role


def authenticate(identifier: str, password: str) -> Optional[User]:
    """Match ``identifier`` against username, email or mobile and check the password."""
    identifier = (identifier or "").strip()
    if not identifier or not password:
        return None
    user = User.query.filter(or_(
        User.username == identifier,
        User.email == identifier.lower(),
        User.mobile == identifier,
    )).first()
    if not user or not verify_password(user.password, password):
        return None
    return user


def authenticate_driver(username: str, password: str) -> Optional[User]:
    user = authenticate(username, password)
    if not user or user.role_name not in DRIVER_ROLES:
        logger.info("Driver login rejected for %r", username)
        return None
    return user


def create_user(username: str, password: str, role: str, name: str = "",
                email: Optional[str] = None, mobile: Optional[str] = None) -> User:
    if User.query.filter_by(username=username).first():
        raise ConflictError("USERNAME_TAKEN")
    if mobile and User.query.filter_by(mobile=mobile).first():
        raise ConflictError("MOBILE_ALREADY_REGISTERED")
    if email and User.query.filter_by(email=email.lower()).first():
        raise ConflictError("EMAIL_IN_USE")

    user = User(
        username=username,
        name=name or username,
        email=email.lower() if email else None,
        mobile=mobile or None,
        password=hash_password(password),
        role=get_role(role),
    )
    db.session.add(user)
    db.session.commit()
    logger.info("Created %s account %s", role, username)
    return user


def register_mobile_customer(name: str, mobile: str, password: str, email: Optional[str] = None) -> User:
    # Mobile customers sign in with their number, so it doubles as the username
    return create_user(mobile, password, UserRole.CUSTOMER.value, name=name, email=email, mobile=mobile)
