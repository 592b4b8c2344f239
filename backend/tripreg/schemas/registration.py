"""Registration ledger schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class RegistrationSubmitSchema(Schema):
    """Payload for submitting (creating or overwriting) a registration.

    Date ordering is checked by the service so the response matches the
    ledger's ``BadRequest``.
    """

    class Meta:
        unknown = EXCLUDE

    arrival_date = fields.Date(required=True)
    departure_date = fields.Date(required=True)
    event = fields.String(load_default=None, validate=validate.Length(min=1, max=100))
    food_restrictions = fields.String(load_default="", validate=validate.Length(max=1000))
    children_count = fields.Integer(load_default=0, validate=validate.Range(min=0, max=50))
    cancelled = fields.Boolean(load_default=False)
    note = fields.String(load_default="", validate=validate.Length(max=2000))


class RegistrationSchema(Schema):
    """Current registration state (flattened field set)."""

    id = fields.Integer(required=True)
    user_id = fields.Integer(required=True)
    event = fields.String(required=True)
    arrival_date = fields.Date(attribute="fields.arrival_date")
    departure_date = fields.Date(attribute="fields.departure_date")
    food_restrictions = fields.String(attribute="fields.food_restrictions")
    children_count = fields.Integer(attribute="fields.children_count")
    cancelled = fields.Boolean(attribute="fields.cancelled")
    note = fields.String(attribute="fields.note")
    updated_at = fields.DateTime(allow_none=True)


class RegistrationWithUserSchema(Schema):
    """Organizer listing row: registration plus owner display fields."""

    registration = fields.Nested(RegistrationSchema)
    username = fields.String()
    email = fields.String(allow_none=True)
    avatar = fields.String(allow_none=True)


class HistoryQuerySchema(Schema):
    """Query parameters for ``GET /history``."""

    class Meta:
        unknown = EXCLUDE

    diff = fields.Boolean(load_default=True)
    event = fields.String(load_default=None)


class RegistrationListQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    event = fields.String(load_default=None)


class HistoryEntrySchema(Schema):
    """One rendered history snapshot; ``fields`` holds only changes when diffing."""

    id = fields.Integer(required=True)
    registration_id = fields.Integer(required=True)
    user_id = fields.Integer(required=True)
    event = fields.String(required=True)
    created_at = fields.DateTime(required=True)
    changes = fields.Method("render_fields", data_key="fields")

    def render_fields(self, obj) -> dict:
        return {
            key: value.isoformat() if hasattr(value, "isoformat") else value
            for key, value in obj.fields.items()
        }
