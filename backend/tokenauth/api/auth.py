"""Authentication endpoints: login, refresh and logout."""

from __future__ import annotations

from flask import Blueprint, request

from tokenauth.api.deps import auth_service, json_response, timing
from tokenauth.core.errors import Unauthorized
from tokenauth.schemas import AccessTokenSchema, LoginSchema, RefreshSchema, TokenPairSchema
from tokenauth.services import LoginIn, LogoutIn, RefreshIn
from tokenauth.services._shared.errors import ServiceError

bp = Blueprint("auth", __name__)

login_schema = LoginSchema()
refresh_schema = RefreshSchema()
token_pair_schema = TokenPairSchema()
access_token_schema = AccessTokenSchema()


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and issue an access/refresh token pair."""

    data = login_schema.load(request.get_json(silent=True) or {})
    service = auth_service()
    try:
        pair = service.login(LoginIn(email=data["email"], password=data["password"]))
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    return json_response(token_pair_schema.dump(pair))


@bp.post("/refresh")
@timing
def refresh():
    """Exchange a refresh token for a new access token."""

    data = refresh_schema.load(request.get_json(silent=True) or {})
    access = auth_service().refresh(RefreshIn(refresh_token=data["refresh_token"]))
    if access is None:
        raise Unauthorized("Invalid refresh token")
    return json_response(access_token_schema.dump({"access_token": access}))


@bp.post("/logout")
@timing
def logout():
    """Forget a refresh token. Succeeds whether or not the token was known."""

    data = refresh_schema.load(request.get_json(silent=True) or {})
    auth_service().logout(LogoutIn(refresh_token=data["refresh_token"]))
    return "", 204
