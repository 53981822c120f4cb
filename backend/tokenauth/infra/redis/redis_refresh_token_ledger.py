from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import cast
from uuid import UUID

import redis  # type: ignore[import-untyped]

from tokenauth.models.user import Role, User
from tokenauth.services._shared.ports import RefreshTokenLedger


@dataclass(slots=True)
class RedisRefreshTokenLedger(RefreshTokenLedger):
    """
    Redis-backed refresh token ledger.

    Each token maps to one hash holding the user snapshot. The hash expires
    together with the token, so Redis does the eviction.

    :param r: A Redis client (already connected).
    """

    r: redis.Redis

    # -------------------- helpers --------------------

    @staticmethod
    def _k(token: str) -> str:
        # Tokens are long; key by digest to keep keys short and opaque.
        return "rtl:" + hashlib.sha256(token.encode()).hexdigest()

    @staticmethod
    def _ttl(expires_at: datetime) -> int:
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        return max(1, int(expires_at.timestamp() - datetime.now(UTC).timestamp()))

    # -------------------- API ------------------------

    def save(self, token: str, user: User, expires_at: datetime | None = None) -> None:
        key = self._k(token)
        with self.r.pipeline(transaction=True) as pipe:
            pipe.delete(key)
            pipe.hset(
                key,
                mapping={
                    "user_id": str(user.id),
                    "email": user.email,
                    "password_hash": user.password_hash,
                    "role": user.role.value,
                },
            )
            if expires_at is not None:
                pipe.expire(key, self._ttl(expires_at))
            pipe.execute()

    def find_user_by_token(self, token: str) -> User | None:
        h = cast(dict[bytes, bytes], self.r.hgetall(self._k(token)))
        if not h:
            return None

        def _b(field: bytes) -> str:
            raw = h.get(field)
            return raw.decode() if raw is not None else ""

        return User(
            id=UUID(_b(b"user_id")),
            email=_b(b"email"),
            password_hash=_b(b"password_hash"),
            role=Role(_b(b"role")),
        )

    def delete(self, token: str) -> bool:
        return cast(int, self.r.delete(self._k(token))) == 1
