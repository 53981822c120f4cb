"""Idempotent seed helpers for the demo accounts."""

from __future__ import annotations

import logging

from tokenauth.models.user import Role, User
from tokenauth.services._shared.ports import UserStore

LOGGER = logging.getLogger(__name__)

USER_FIXTURES: list[dict[str, str | Role]] = [
    {"email": "email-1@gmail.com", "password": "pass1", "role": Role.USER},
    {"email": "email-2@gmail.com", "password": "pass2", "role": Role.ADMIN},
    {"email": "email-3@gmail.com", "password": "pass3", "role": Role.USER},
]


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    """Update summary counters for the given table."""
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    if created:
        entry["created"] += 1
    else:
        entry["existing"] += 1


def seed_users(store: UserStore, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create the demo users that are not in ``store`` yet."""
    if verbose:
        LOGGER.info("Seeding demo users...")
    summary: dict[str, dict[str, int]] = {}
    for fixture in USER_FIXTURES:
        email = str(fixture["email"])
        if store.find_by_email(email) is not None:
            _touch(summary, "users", created=False)
            continue
        store.save(User.create(email, str(fixture["password"]), Role(fixture["role"])))
        _touch(summary, "users", created=True)
        if verbose:
            LOGGER.info("seed.user_created email=%s", email)
    return summary


def run_all(store: UserStore, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Run all seeders."""
    return seed_users(store, verbose=verbose)


__all__ = ["USER_FIXTURES", "seed_users", "run_all"]
