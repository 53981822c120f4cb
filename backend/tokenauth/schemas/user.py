"""User resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class UserCreateSchema(Schema):
    """Payload for registering a new user."""

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class UserSchema(Schema):
    """Public representation of a user (never includes the password hash)."""

    uuid = fields.UUID(required=True)
    email = fields.Email(required=True)
