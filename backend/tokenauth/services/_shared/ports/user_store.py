from __future__ import annotations

import threading
from collections.abc import Iterable
from typing import Protocol
from uuid import UUID

from tokenauth.models.user import User, normalize_email


class UserStore(Protocol):
    """
    Storage contract for user credentials.

    Uniqueness of emails is a workflow concern (see ``UserService``); stores
    only need to honour insertion order and return snapshots.
    """

    def save(self, user: User) -> bool:
        """Persist ``user``. :returns: True once stored."""

    def find_by_email(self, email: str) -> User | None:
        """Return the first user with ``email`` (normalized), if any."""

    def find_by_id(self, user_id: UUID) -> User | None:
        """Return the user with ``user_id``, if any."""

    def find_all(self) -> list[User]:
        """Return a snapshot of every user in insertion order."""

    def delete_by_id(self, user_id: UUID) -> bool:
        """Remove the user. :returns: True if it existed."""


class InMemoryUserStore(UserStore):
    """
    Process-local user store backed by a list.

    .. note::
       Every operation holds a single lock; concurrent requests may create,
       delete and look up users at the same time.
    """

    def __init__(self, users: Iterable[User] = ()) -> None:
        self._users: list[User] = list(users)
        self._lock = threading.Lock()

    def save(self, user: User) -> bool:
        with self._lock:
            self._users.append(user)
            return True

    def find_by_email(self, email: str) -> User | None:
        try:
            key = normalize_email(email)
        except ValueError:
            return None
        with self._lock:
            return next((u for u in self._users if u.email == key), None)

    def find_by_id(self, user_id: UUID) -> User | None:
        with self._lock:
            return next((u for u in self._users if u.id == user_id), None)

    def find_all(self) -> list[User]:
        with self._lock:
            return list(self._users)

    def delete_by_id(self, user_id: UUID) -> bool:
        with self._lock:
            for idx, u in enumerate(self._users):
                if u.id == user_id:
                    del self._users[idx]
                    return True
            return False

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)
