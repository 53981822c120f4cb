"""CORS configuration helper for the auth and resource endpoints."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS


def init_app(app: Flask) -> None:
    """Configure CORS for the ``/api`` and ``/auth`` trees.

    Parameters
    ----------
    app: flask.Flask
        Application whose ``CORS_ORIGINS`` and ``CORS_MAX_AGE`` settings are
        consulted. When ``CORS_ORIGINS`` is blank or ``"*"`` the policy allows
        any origin but disables credential support.
    """
    raw_origins = app.config.get("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    wildcard = len(origins) == 0 or origins == ["*"]
    policy = {"origins": "*" if wildcard else origins}

    api_prefix = app.config.get("API_BASE_PREFIX", "/api").rstrip("/")
    auth_prefix = app.config.get("AUTH_PREFIX", "/auth").rstrip("/")
    CORS(
        app,
        resources={f"{api_prefix}/*": policy, f"{auth_prefix}/*": policy},
        supports_credentials=not wildcard,
        max_age=app.config.get("CORS_MAX_AGE", 600),
        expose_headers=["X-Request-ID"],
    )
