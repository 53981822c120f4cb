"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from datetime import timedelta

import redis  # type: ignore[import-untyped]
from flask import Flask
from flask_jwt_extended import JWTManager
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
jwt = JWTManager()
redis_client: redis.Redis | None = None


def _sync_token_lifetimes(app: Flask) -> None:
    """Derive flask-jwt-extended lifetimes from the millisecond settings.

    The millisecond values are the public configuration surface; the
    ``*_EXPIRES`` timedeltas are what the library reads when no explicit
    ``expires_delta`` is given.
    """
    access_ms = int(app.config["JWT_ACCESS_TOKEN_EXPIRATION"])
    refresh_ms = int(app.config["JWT_REFRESH_TOKEN_EXPIRATION"])
    app.config["JWT_ACCESS_TOKEN_EXPIRES"] = timedelta(milliseconds=access_ms)
    app.config["JWT_REFRESH_TOKEN_EXPIRES"] = timedelta(milliseconds=refresh_ms)


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, JWT and (optionally) Redis.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. SQLAlchemy is only
        bound when the ``sqlalchemy`` user store is selected; Redis only when
        ``REDIS_URL`` is configured.
    """
    _sync_token_lifetimes(app)
    jwt.init_app(app)

    if app.config.get("USER_STORE_BACKEND") == "sqlalchemy":
        db.init_app(app)

        # Ensure models are imported so metadata knows every table
        from tokenauth import models as _models  # noqa: F401

    global redis_client
    redis_url = app.config.get("REDIS_URL")
    if not redis_url:
        redis_client = None
        app.extensions.pop("redis_client", None)
        return

    redis_client = redis.Redis.from_url(redis_url)
    try:
        redis_client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
    app.extensions["redis_client"] = redis_client


def get_redis() -> redis.Redis:
    """Return the initialized Redis client."""
    if redis_client is None:
        raise RuntimeError("Redis client is not initialized. Call init_app() first.")
    return redis_client
