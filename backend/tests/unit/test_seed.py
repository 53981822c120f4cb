"""Unit tests for the demo account seeders."""

from __future__ import annotations

from tokenauth.core.config import TestingConfig
from tokenauth.factory import create_app
from tokenauth.infra import get_adapters
from tokenauth.models.user import Role
from tokenauth.seeds import seed_data
from tokenauth.services._shared.ports import InMemoryUserStore


def test_seed_creates_the_demo_accounts():
    store = InMemoryUserStore()

    summary = seed_data.run_all(store)

    assert summary == {"users": {"created": 3, "existing": 0}}
    roles = {u.email: u.role for u in store.find_all()}
    assert roles == {
        "email-1@gmail.com": Role.USER,
        "email-2@gmail.com": Role.ADMIN,
        "email-3@gmail.com": Role.USER,
    }
    assert store.find_by_email("email-2@gmail.com").verify_password("pass2")


def test_seed_is_idempotent():
    store = InMemoryUserStore()
    seed_data.run_all(store)

    summary = seed_data.run_all(store)

    assert summary == {"users": {"created": 0, "existing": 3}}
    assert len(store) == 3


def test_app_seeds_on_startup_when_enabled():
    class SeededConfig(TestingConfig):
        SEED_USERS = True

    app = create_app(SeededConfig)

    assert len(get_adapters(app).users.find_all()) == 3
