from marshmallow import Schema, EXCLUDE, fields, pre_load


class FormSchema(Schema):
    """Schema for HTML forms and loose mobile payloads: unknown keys are ignored, blank strings count as missing."""

    class Meta:
        unknown = EXCLUDE

    @pre_load
    def drop_blank(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        return {k: v for k, v in data.items() if not (isinstance(v, str) and not v.strip())}


class Text(fields.Field):
    """String field that also takes JSON numbers, e.g. ``floor: 3`` or a numeric phone."""

    default_error_messages = {"invalid": "Not a valid string."}

    def _deserialize(self, value, attr, data, **kwargs):
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise self.make_error("invalid")
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return str(value)
