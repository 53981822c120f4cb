"""Reverse proxy awareness for the WSGI pipeline."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Wrap the WSGI app in :class:`~werkzeug.middleware.proxy_fix.ProxyFix`.

    Parameters
    ----------
    app: flask.Flask
        Application deployed behind ``PROXY_HOPS`` trusted proxies.

    Notes
    -----
    Skipped when ``USE_PROXYFIX`` is false (the testing config) or when no
    hop is trusted. Only ``X-Forwarded-For`` and ``X-Forwarded-Proto`` are
    honoured; the API builds no absolute URLs, so host and prefix headers are
    left alone.
    """
    hops = int(app.config.get("PROXY_HOPS", 1))
    if not app.config.get("USE_PROXYFIX", True) or hops < 1:
        return
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops)
