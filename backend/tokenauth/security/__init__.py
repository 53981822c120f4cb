"""Request authentication wiring for the Flask pipeline."""

from __future__ import annotations

from flask import Flask, g, request

from tokenauth.core.logger import ensure_request_id

from .context import Principal, SecurityContext
from .gate import BEARER_PREFIX, RequestAuthenticationGate, extract_bearer_token

CONTEXT_ATTR = "security_context"


def request_context() -> SecurityContext:
    """Return the security context of the current request, creating it once."""
    ctx = g.get(CONTEXT_ATTR)
    if ctx is None:
        ctx = SecurityContext(request_id=ensure_request_id())
        setattr(g, CONTEXT_ATTR, ctx)
    return ctx


def init_app(app: Flask) -> None:
    """Run the authentication gate before every request.

    The gate is built from the application's adapters, so
    :func:`tokenauth.infra.init_app` must run first.
    """
    from tokenauth.infra import get_adapters

    adapters = get_adapters(app)
    gate = RequestAuthenticationGate(users=adapters.users, tokens=adapters.tokens)

    @app.before_request
    def _authenticate_request() -> None:
        ctx = SecurityContext(request_id=ensure_request_id())
        setattr(g, CONTEXT_ATTR, ctx)
        gate.authenticate(ctx, request.headers.get("Authorization"))


__all__ = [
    "BEARER_PREFIX",
    "Principal",
    "RequestAuthenticationGate",
    "SecurityContext",
    "extract_bearer_token",
    "init_app",
    "request_context",
]
