"""
tokenauth.services._shared.ports
================================

Collection of *ports* (hexagonal interfaces) that define the contracts
for credential storage and token infrastructure.

These ports decouple the service layer from concrete implementations
of token signing, refresh-token bookkeeping and user persistence.

Modules
-------
- :mod:`token_codec`:
    Defines :class:`~.TokenCodec`, the abstraction for JWT minting and parsing.

- :mod:`refresh_token_ledger`:
    Defines :class:`~.RefreshTokenLedger` and its in-memory implementation.

- :mod:`user_store`:
    Defines :class:`~.UserStore` and its in-memory implementation.

Design Notes
------------
Concrete adapters backed by external systems (Redis, SQL databases,
flask-jwt-extended) live under ``tokenauth.infra``.
"""

from __future__ import annotations

from .refresh_token_ledger import InMemoryRefreshTokenLedger, RefreshTokenLedger
from .token_codec import ACCESS, REFRESH, TokenCodec
from .user_store import InMemoryUserStore, UserStore

__all__ = [
    "ACCESS",
    "REFRESH",
    "TokenCodec",
    "RefreshTokenLedger",
    "InMemoryRefreshTokenLedger",
    "UserStore",
    "InMemoryUserStore",
]
