"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields


class CallbackQuerySchema(Schema):
    """Query string of the OAuth callback."""

    class Meta:
        unknown = EXCLUDE

    code = fields.String(load_default=None)
    state = fields.String(load_default=None)


class LoginResultSchema(Schema):
    """Response payload of a completed login."""

    message = fields.String(required=True)
    user_id = fields.Integer(required=True)
    expires_at = fields.DateTime(required=True)
