"""Achievement schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class AchievementCreateSchema(Schema):
    """Payload for defining a new achievement (organizers only)."""

    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    image = fields.String(load_default="", validate=validate.Length(max=500))
    code = fields.String(required=True, validate=validate.Length(min=1, max=100))


class AchievementGrantSchema(Schema):
    """Payload for redeeming an achievement code."""

    code = fields.String(required=True, validate=validate.Length(min=1, max=100))
    user_id = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=1))


class AchievementSchema(Schema):
    id = fields.Integer(required=True)
    name = fields.String(required=True)
    image = fields.String()
    code = fields.String(required=True)
    discord_role_id = fields.String(required=True)


class AchievementGrantResultSchema(Schema):
    achievement = fields.Nested(AchievementSchema)
    user_id = fields.Integer(required=True)
    granted_by_id = fields.Integer(required=True)
