"""API key schemas."""

from __future__ import annotations

from datetime import timezone

from marshmallow import Schema, fields, validate


class ApiKeyCreateSchema(Schema):
    """Payload for minting an API key."""

    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    expires_at = fields.AwareDateTime(
        load_default=None, allow_none=True, default_timezone=timezone.utc
    )


class ApiKeySchema(Schema):
    """API key as shown to its owner; ``key`` is masked outside creation."""

    id = fields.Integer(required=True)
    name = fields.String(required=True)
    key = fields.String(required=True)
    created_at = fields.DateTime(allow_none=True)
    expires_at = fields.DateTime(allow_none=True)
    last_used_at = fields.DateTime(allow_none=True)
