"""User endpoints. Registration is public, everything else is admin-only."""

from __future__ import annotations

from uuid import UUID

from flask import Blueprint, request

from tokenauth.api.deps import json_response, require_role, timing, user_service
from tokenauth.models.user import Role
from tokenauth.schemas import UserCreateSchema, UserSchema
from tokenauth.security import SecurityContext
from tokenauth.services import UserCreateIn
from tokenauth.services._shared.errors import ServiceError

bp = Blueprint("users", __name__)

user_schema = UserSchema()
user_list_schema = UserSchema(many=True)
user_create_schema = UserCreateSchema()


@bp.post("")
@timing
def create_user():
    """Register a new user with role USER."""

    payload = user_create_schema.load(request.get_json(silent=True) or {})
    service = user_service()
    try:
        user = service.create_user(
            UserCreateIn(email=payload["email"], password=payload["password"])
        )
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    return json_response(user_schema.dump(user))


@bp.get("")
@require_role(Role.ADMIN)
@timing
def list_users(*, ctx: SecurityContext):
    """Return every registered user."""

    return json_response(user_list_schema.dump(user_service(ctx).list_users()))


@bp.get("/<uuid:user_id>")
@require_role(Role.ADMIN)
@timing
def get_user(user_id: UUID, *, ctx: SecurityContext):
    service = user_service(ctx)
    try:
        user = service.get_user(user_id)
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    return json_response(user_schema.dump(user))


@bp.delete("/<uuid:user_id>")
@require_role(Role.ADMIN)
@timing
def delete_user(user_id: UUID, *, ctx: SecurityContext):
    service = user_service(ctx)
    try:
        service.delete_user(user_id)
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    return "", 204
