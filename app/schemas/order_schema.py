from marshmallow import fields, validate

from app.schemas.base import FormSchema, Text
from app.utils.enums import OrderStatus


class CheckoutSchema(FormSchema):
    """Flat mobile checkout payload; line items are normalized by the order service."""
    customerName = Text(load_default="")
    customerMobile = Text(load_default="")
    customerEmail = Text(load_default="")
    city = Text(load_default="")
    street = Text(load_default="")
    building = Text(load_default="")
    floor = Text(load_default="")
    zone = Text(load_default="")
    aptNo = Text(load_default="")
    addressNote = Text(load_default="")
    latitude = fields.Raw(load_default=None)
    longitude = fields.Raw(load_default=None)
    cartItems = fields.List(fields.Dict(), load_default=list)
    source = fields.Str(load_default="mobile", validate=validate.Length(max=20))


class CustomerInfoSchema(FormSchema):
    name = Text(required=True, validate=validate.Length(min=1, max=120))
    phone = Text(required=True, validate=validate.Length(min=3, max=30))
    email = fields.Email(load_default=None)
    city = Text(load_default="")
    street = Text(load_default="")
    building = Text(load_default="")
    floor = Text(load_default="")
    zone = Text(load_default="")
    aptNo = Text(load_default="")
    addressNote = Text(load_default="")
    latitude = fields.Raw(load_default=None)
    longitude = fields.Raw(load_default=None)


class DriverStatusSchema(FormSchema):
    status = fields.Str(
        required=True,
        validate=validate.OneOf([OrderStatus.PICKED_UP.value, OrderStatus.DELIVERED.value]),
    )
