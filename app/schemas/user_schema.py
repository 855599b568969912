from marshmallow import fields, validate

from app.schemas.base import FormSchema
from app.utils.enums import UserRole


class LoginSchema(FormSchema):
    username = fields.Str(required=True)
    password = fields.Str(required=True)


class MobileRegisterSchema(FormSchema):
    name = fields.Str(required=True, validate=validate.Length(min=1, max=120))
    mobile = fields.Str(required=True, validate=validate.Length(min=3, max=30))
    password = fields.Str(required=True, validate=validate.Length(min=6))
    email = fields.Email(load_default=None)


class RoleUpdateSchema(FormSchema):
    role = fields.Str(required=True, validate=validate.OneOf([e.value for e in UserRole]))
