"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class LoginSchema(Schema):
    """Input payload for authenticating a user.

    Email format is not validated here: a malformed email is simply an
    unknown identity and yields 401, not 422.
    """

    class Meta:
        unknown = EXCLUDE

    email = fields.String(required=True, validate=validate.Length(min=1, max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class RefreshSchema(Schema):
    """Input payload carrying a refresh token."""

    class Meta:
        unknown = EXCLUDE

    refresh_token = fields.String(
        required=True, data_key="refreshToken", validate=validate.Length(min=1)
    )


class TokenPairSchema(Schema):
    """Response payload returned by a successful login."""

    access_token = fields.String(required=True, data_key="accessToken")
    refresh_token = fields.String(required=True, data_key="refreshToken")


class AccessTokenSchema(Schema):
    """Response payload returned by a successful refresh."""

    access_token = fields.String(required=True, data_key="accessToken")
