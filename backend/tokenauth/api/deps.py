"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request

from tokenauth.core.errors import Forbidden, Unauthorized
from tokenauth.infra import get_adapters
from tokenauth.models.user import Role
from tokenauth.security import SecurityContext, request_context
from tokenauth.services import ArticleService, AuthService, AuthTokenConfig, UserService
from tokenauth.services._shared.policies.common import has_role

F = TypeVar("F", bound=Callable[..., Any])


def require_auth(func: F) -> F:
    """Ensure the gate attached a principal; pass the context as ``ctx``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        ctx = request_context()
        if not ctx.is_authenticated:
            raise Unauthorized("Authentication required")
        return func(*args, ctx=ctx, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_role(required: Role) -> Callable[[F], F]:
    """Ensure the authenticated principal holds ``required``.

    Anonymous callers get 401, authenticated callers lacking the role get 403.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            ctx = request_context()
            if not ctx.is_authenticated:
                raise Unauthorized("Authentication required")
            if not has_role(principal=ctx.principal, required=required):
                raise Forbidden("Insufficient role")
            return func(*args, ctx=ctx, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


# --------------------------------------------------------------------------- #
# Service factories
# --------------------------------------------------------------------------- #


def token_config() -> AuthTokenConfig:
    """Token lifetimes of the current app, as configured in milliseconds."""
    cfg = current_app.config
    return AuthTokenConfig.from_millis(
        int(cfg["JWT_ACCESS_TOKEN_EXPIRATION"]),
        int(cfg["JWT_REFRESH_TOKEN_EXPIRATION"]),
    )


def auth_service(ctx: SecurityContext | None = None) -> AuthService:
    adapters = get_adapters()
    return AuthService(
        users=adapters.users,
        ledger=adapters.ledger,
        tokens=adapters.tokens,
        token_cfg=token_config(),
        ctx=ctx or request_context(),
    )


def user_service(ctx: SecurityContext | None = None) -> UserService:
    return UserService(users=get_adapters().users, ctx=ctx or request_context())


def article_service(ctx: SecurityContext | None = None) -> ArticleService:
    return ArticleService(repo=get_adapters().articles, ctx=ctx or request_context())


# --------------------------------------------------------------------------- #
# Responses
# --------------------------------------------------------------------------- #


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
