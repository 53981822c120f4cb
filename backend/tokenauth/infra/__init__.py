"""Concrete adapters and their per-application wiring.

One set of adapters (user store, refresh token ledger, token codec) is built
per Flask application and kept in ``app.extensions``, so every request
handled by that app shares the same stores.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import cast

from flask import Flask, current_app

from tokenauth.core import extensions
from tokenauth.infra.jwt.flask_jwt_token_codec import JWTTokenCodec
from tokenauth.repositories.article import ArticleRepository
from tokenauth.services._shared.ports import (
    InMemoryRefreshTokenLedger,
    InMemoryUserStore,
    RefreshTokenLedger,
    TokenCodec,
    UserStore,
)

log = logging.getLogger(__name__)

EXTENSION_KEY = "tokenauth.adapters"


@dataclass(slots=True)
class Adapters:
    """Adapters shared by every service of one application."""

    users: UserStore
    ledger: RefreshTokenLedger
    tokens: TokenCodec
    articles: ArticleRepository


def _build_user_store(app: Flask) -> UserStore:
    backend = app.config.get("USER_STORE_BACKEND", "memory")
    if backend == "memory":
        return InMemoryUserStore()
    if backend == "sqlalchemy":
        from tokenauth.infra.sqlalchemy.sqlalchemy_user_store import SQLAlchemyUserStore

        return SQLAlchemyUserStore(db=extensions.db)
    raise RuntimeError(f"Unknown USER_STORE_BACKEND {backend!r} (expected 'memory' or 'sqlalchemy')")


def _build_ledger(app: Flask) -> RefreshTokenLedger:
    if app.extensions.get("redis_client") is not None:
        from tokenauth.infra.redis.redis_refresh_token_ledger import RedisRefreshTokenLedger

        return RedisRefreshTokenLedger(r=extensions.get_redis())
    return InMemoryRefreshTokenLedger()


def init_app(app: Flask) -> None:
    """Build the adapters for ``app`` and seed demo users when enabled.

    Must run after :func:`tokenauth.core.extensions.init_app`.
    """
    adapters = Adapters(
        users=_build_user_store(app),
        ledger=_build_ledger(app),
        tokens=JWTTokenCodec(),
        articles=ArticleRepository(),
    )
    app.extensions[EXTENSION_KEY] = adapters
    log.info(
        "adapters.ready users=%s ledger=%s",
        type(adapters.users).__name__,
        type(adapters.ledger).__name__,
    )

    if app.config.get("SEED_USERS"):
        from tokenauth.seeds import seed_data

        with app.app_context():
            if app.config.get("USER_STORE_BACKEND") == "sqlalchemy":
                extensions.db.create_all()
            summary = seed_data.run_all(adapters.users)
        log.info("seed.users summary=%s", summary.get("users", {}))


def get_adapters(app: Flask | None = None) -> Adapters:
    """Return the adapters of ``app`` (defaults to the current app)."""
    target = app or current_app
    adapters = target.extensions.get(EXTENSION_KEY)
    if adapters is None:
        raise RuntimeError("Adapters are not initialized. Call infra.init_app() first.")
    return cast(Adapters, adapters)


__all__ = ["Adapters", "init_app", "get_adapters"]
