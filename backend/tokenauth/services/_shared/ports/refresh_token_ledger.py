from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from tokenauth.models.user import User


class RefreshTokenLedger(Protocol):
    """
    Maps each issued refresh token to the user it was issued for.

    The stored user is a snapshot taken at issuance; the ledger does not
    enforce identity uniqueness.
    """

    def save(self, token: str, user: User, expires_at: datetime | None = None) -> None:
        """
        Store (or overwrite) the mapping for ``token``.

        ``expires_at`` lets the backend drop the entry once the token itself
        can no longer be redeemed.
        """

    def find_user_by_token(self, token: str) -> User | None:
        """Return the user recorded for ``token``, if any."""

    def delete(self, token: str) -> bool:
        """Forget ``token``. :returns: True if it was recorded."""


@dataclass(frozen=True, slots=True)
class _Entry:
    user: User
    expires_at: datetime | None


class InMemoryRefreshTokenLedger(RefreshTokenLedger):
    """
    In-memory ledger guarded by a lock.

    Entries past their ``expires_at`` are never returned and are purged on the
    next ``save``.
    """

    def __init__(self) -> None:
        self._by_token: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    # ------------------------- helpers -------------------------

    @staticmethod
    def _now() -> datetime:
        return datetime.now(UTC)

    @staticmethod
    def _expired(entry: _Entry, now: datetime) -> bool:
        return entry.expires_at is not None and entry.expires_at <= now

    def _purge(self, now: datetime) -> None:
        stale = [t for t, e in self._by_token.items() if self._expired(e, now)]
        for t in stale:
            del self._by_token[t]

    # -------------------------- API ----------------------------

    def save(self, token: str, user: User, expires_at: datetime | None = None) -> None:
        with self._lock:
            now = self._now()
            self._purge(now)
            self._by_token[token] = _Entry(user=user, expires_at=expires_at)

    def find_user_by_token(self, token: str) -> User | None:
        with self._lock:
            entry = self._by_token.get(token)
            if entry is None or self._expired(entry, self._now()):
                return None
            return entry.user

    def delete(self, token: str) -> bool:
        with self._lock:
            return self._by_token.pop(token, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_token)
