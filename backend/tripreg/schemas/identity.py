"""Identity (``/me``) schemas."""

from __future__ import annotations

from marshmallow import Schema, fields

from .registration import RegistrationSchema


class UserSchema(Schema):
    """Public representation of an identity."""

    id = fields.Integer(required=True)
    discord_id = fields.String(required=True)
    username = fields.String(required=True)
    email = fields.String(allow_none=True)
    avatar = fields.String(allow_none=True)
    created_at = fields.DateTime(allow_none=True)


class MeSchema(Schema):
    """Profile of the acting identity, its paid flag and its registrations."""

    id = fields.Integer(attribute="user.id")
    username = fields.String(attribute="user.username")
    email = fields.String(attribute="user.email", allow_none=True)
    avatar = fields.String(attribute="user.avatar", allow_none=True)
    paid = fields.Boolean()
    registrations = fields.List(fields.Nested(RegistrationSchema))
