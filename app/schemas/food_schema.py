from marshmallow import fields, validate

from app.schemas.base import FormSchema


class MealFormSchema(FormSchema):
    name = fields.Str(required=True, validate=validate.Length(min=1, max=150))
    name_ar = fields.Str(load_default="")
    price = fields.Float(required=True, validate=validate.Range(min=0))
    restaurant_en = fields.Str(required=True, validate=validate.Length(min=1, max=150))
    restaurant_ar = fields.Str(load_default="")
    details = fields.Str(load_default="")
    details_ar = fields.Str(load_default="")
    address = fields.Str(load_default="")
    cuisine = fields.Str(load_default="")
    image = fields.Str(load_default="")  # URL, uploads are not accepted
    offer = fields.Bool(load_default=False, truthy={True, "true", "on", "1", 1}, falsy={False, "false", "off", "0", 0})
    period = fields.Int(load_default=0, validate=validate.Range(min=0))


class MealUpdateSchema(MealFormSchema):
    restaurant_en = fields.Str(load_default="")


class RestaurantFormSchema(FormSchema):
    restaurant_en = fields.Str(required=True, validate=validate.Length(min=1, max=150))
    restaurant_ar = fields.Str(load_default="")
    address = fields.Str(load_default="")
    logo = fields.Str(load_default="")
