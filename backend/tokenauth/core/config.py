"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'


# Load .env in development (no-op when missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_millis(name: str, default: int) -> int:
    """Read a non-negative millisecond duration from the environment.

    Raises
    ------
    ValueError
        When the variable is set but is not a non-negative integer.
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = int(raw.strip())
    if value < 0:
        raise ValueError(f"{name} must be >= 0 (got {value})")
    return value


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for the resource blueprints (users, articles).
    AUTH_PREFIX: str
        Root path for the authentication blueprint.
    SECRET_KEY: str
        Flask secret. Defaults to a development-safe placeholder.
    JWT_SECRET_KEY: str
        Symmetric key used by ``flask-jwt-extended`` to sign every token.
    JWT_ACCESS_TOKEN_EXPIRATION: int
        Access token lifetime in milliseconds.
    JWT_REFRESH_TOKEN_EXPIRATION: int
        Refresh token lifetime in milliseconds.
    JWT_ACCESS_TOKEN_EXPIRES / JWT_REFRESH_TOKEN_EXPIRES: timedelta
        The same lifetimes in the shape ``flask-jwt-extended`` expects.
    USER_STORE_BACKEND: str
        ``"memory"`` (default) or ``"sqlalchemy"``.
    SQLALCHEMY_DATABASE_URI: str
        Connection string used when the SQL backend is selected.
    REDIS_URL: str | None
        When set, refresh tokens are recorded in Redis instead of memory.
    SEED_USERS: bool
        Seed the demo accounts into the user store on startup.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.
    USE_PROXYFIX: bool / PROXY_HOPS: int
        Trust ``X-Forwarded-*`` headers from that many proxies.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"
    AUTH_PREFIX = "/auth"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT")
    JWT_ALGORITHM = "HS256"

    JWT_ACCESS_TOKEN_EXPIRATION = env_millis("JWT_ACCESS_TOKEN_EXPIRATION", 3_600_000)
    JWT_REFRESH_TOKEN_EXPIRATION = env_millis("JWT_REFRESH_TOKEN_EXPIRATION", 86_400_000)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(milliseconds=JWT_ACCESS_TOKEN_EXPIRATION)
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(milliseconds=JWT_REFRESH_TOKEN_EXPIRATION)

    # Storage backends
    USER_STORE_BACKEND = os.getenv("USER_STORE_BACKEND", "memory").strip().lower()
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    REDIS_URL = os.getenv("REDIS_URL") or None
    SEED_USERS = env_bool("SEED_USERS", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    # Reverse proxy
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)
    PROXY_HOPS = int(os.getenv("PROXY_HOPS", "1"))

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode and seeds the demo accounts so the in-memory store is
    usable right after startup.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    SEED_USERS = env_bool("SEED_USERS", True)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and the in-memory backends.
    - Uses a fixed signing key so tokens are reproducible across fixtures.
    - Propagates exceptions so pytest can surface tracebacks directly.
    """

    TESTING = True
    DEBUG = False
    JWT_SECRET_KEY = "testing-secret-key-with-enough-entropy"
    USER_STORE_BACKEND = "memory"
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    REDIS_URL = None
    SEED_USERS = False
    USE_PROXYFIX = False
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments."""

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
