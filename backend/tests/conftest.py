"""Pytest fixtures building an isolated application per test.

Every test gets a fresh app, hence fresh in-memory stores, and runs inside
its application context so the token codec can reach the JWT settings.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest
from flask import Flask

from tests.factories import UserStoreRegistry
from tests.factories.user import DEFAULT_PASSWORD, AdminFactory, UserFactory
from tests.helpers.auth import bearer, login
from tokenauth.core.config import TestingConfig
from tokenauth.factory import create_app
from tokenauth.infra import Adapters, get_adapters
from tokenauth.models.user import User
from tokenauth.seeds import seed_data


@pytest.fixture()
def app() -> Generator[Flask, None, None]:
    """Create a Flask application configured for testing.

    Yields
    ------
    flask.Flask
        Application instance with :class:`TestingConfig` applied and an
        active application context.
    """
    application = create_app(TestingConfig)
    application.logger.setLevel("WARNING")
    with application.app_context():
        UserStoreRegistry.set(get_adapters(application).users)
        yield application
    UserStoreRegistry.set(None)


@pytest.fixture()
def adapters(app: Flask) -> Adapters:
    return get_adapters(app)


@pytest.fixture()
def users(adapters: Adapters):
    """The app's user store."""
    return adapters.users


@pytest.fixture()
def ledger(adapters: Adapters):
    """The app's refresh token ledger."""
    return adapters.ledger


@pytest.fixture()
def codec(adapters: Adapters):
    """The app's token codec."""
    return adapters.tokens


@pytest.fixture()
def client(app: Flask) -> Any:
    """Return a Flask test client."""
    return app.test_client()


@pytest.fixture()
def user(app: Flask) -> User:
    """A stored account with role USER."""
    return UserFactory()


@pytest.fixture()
def admin(app: Flask) -> User:
    """A stored account with role ADMIN."""
    return AdminFactory()


@pytest.fixture()
def seeded(users) -> dict[str, dict[str, int]]:
    """Load the three demo accounts."""
    return seed_data.run_all(users)


@pytest.fixture()
def auth_header(client: Any, user: User) -> dict[str, str]:
    """Authorization header for ``user`` obtained through ``/auth/login``."""
    tokens = login(client, user.email, DEFAULT_PASSWORD)
    return bearer(tokens["accessToken"])


@pytest.fixture()
def admin_header(client: Any, admin: User) -> dict[str, str]:
    """Authorization header for ``admin`` obtained through ``/auth/login``."""
    tokens = login(client, admin.email, DEFAULT_PASSWORD)
    return bearer(tokens["accessToken"])


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


@pytest.fixture()
def freeze_time() -> Callable[[str | None], Any]:
    """Factory returning :func:`freezegun.freeze_time`.

    Examples
    --------
    >>> def test_with_frozen_time(freeze_time):
    ...     with freeze_time("2024-01-01") as frozen:
    ...         frozen.tick(60)
    """
    from freezegun import freeze_time as _freeze_time

    def _factory(target: str | None = None) -> Any:
        return _freeze_time(target or "2024-01-01")

    return _factory
