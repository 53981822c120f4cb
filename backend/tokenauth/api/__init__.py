"""API blueprint package aggregating the HTTP endpoints."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Register related blueprints beneath a common prefix.

    Parameters
    ----------
    app:
        Application instance receiving the blueprints.
    base_prefix:
        Prefix applied to all entries, such as ``"/api"`` or ``"/auth"``.
    entries:
        Iterable of ``(blueprint, relative_prefix)`` pairs where
        ``relative_prefix`` is appended to ``base_prefix``.

    Notes
    -----
    Empty relative prefixes are supported, allowing a blueprint to mount at the
    group root while others extend it with additional path segments.
    """

    for bp, rel_prefix in entries:
        full_prefix = "/".join(
            segment for segment in [base_prefix.rstrip("/"), rel_prefix.strip("/")] if segment
        )
        full_prefix = "/" + full_prefix if not full_prefix.startswith("/") else full_prefix
        app.register_blueprint(bp, url_prefix=full_prefix)


def init_app(app: Flask) -> None:
    """Mount the public auth endpoints and the protected resource API."""

    from .articles import bp as articles_bp
    from .auth import bp as auth_bp
    from .users import bp as users_bp

    register_blueprint_group(
        app,
        base_prefix=app.config.get("AUTH_PREFIX", "/auth"),
        entries=[(auth_bp, "")],  # -> /auth/login, /auth/refresh, /auth/logout
    )
    register_blueprint_group(
        app,
        base_prefix=app.config.get("API_BASE_PREFIX", "/api"),
        entries=[
            (users_bp, "/user"),
            (articles_bp, "/article"),
        ],
    )


__all__ = ["init_app", "register_blueprint_group"]
