from flask import request
from sqlalchemy import or_
from app.extensions import db
from app.models.user import User
from app.models.role import Role
from app.schemas.user_schema import RoleUpdateSchema
from app.services.user_service import get_role
from app.utils.http import ok, error, json_body, arg_int, validate_schema


def _user_dict(u):
    return {
        "id": u.id,
        "name": u.name,
        "username": u.username,
        "email": u.email,
        "mobile": u.mobile,
        "role": u.role_name or None,
        "created_at": u.created_at.isoformat() if u.created_at else None
    }


def list_users_handler():
    page = arg_int("page", 1, min_value=1)
    limit = arg_int("limit", 10, min_value=1, max_value=100)
    search = (request.args.get("search") or "").strip()
    role_filter = (request.args.get("role") or "").strip()

    query = User.query

    if search:
        term = f"%{search}%"
        query = query.filter(or_(User.name.ilike(term), User.username.ilike(term),
                                 User.email.ilike(term), User.mobile.ilike(term)))

    if role_filter:
        query = query.join(Role).filter(Role.name == role_filter)

    pagination = query.order_by(User.id).paginate(page=page, per_page=limit, error_out=False)

    return ok({
        "items": [_user_dict(u) for u in pagination.items],
        "total": pagination.total,
        "page": page,
        "limit": limit,
        "pages": pagination.pages
    })


def get_user_detail_handler(id):
    user = User.query.get(id)
    if not user:
        return error("NOT_FOUND", "User not found", 404)
    return ok(_user_dict(user))


def update_user_role_handler(id):
    user = User.query.get(id)
    if not user:
        return error("NOT_FOUND", "User not found", 404)

    data, errors = validate_schema(RoleUpdateSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Invalid role", 400, details=errors)

    try:
        user.role = get_role(data["role"])
        db.session.commit()
        return ok(_user_dict(user))
    except Exception as e:
        db.session.rollback()
        return error("UNKNOWN_ERROR", str(e), 500)
