"""Service layer public API.

This package exposes the application services so callers can import from
:mod:`tokenauth.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``tokenauth.services._shared.base``)
    * :class:`BaseService`

- Authentication workflow (from ``tokenauth.services.auth``)
    * :class:`AuthService`
    * DTOs: :class:`LoginIn`, :class:`RefreshIn`, :class:`LogoutIn`,
      :class:`TokenPairOut`, :class:`AuthTokenConfig`

- User accounts (from ``tokenauth.services.users``)
    * :class:`UserService`
    * DTOs: :class:`UserCreateIn`, :class:`UserPublicOut`

- Articles (from ``tokenauth.services.articles``)
    * :class:`ArticleService`
"""

from __future__ import annotations

from ._shared.base import BaseService
from .articles import ArticleService
from .auth import AuthService, AuthTokenConfig, LoginIn, LogoutIn, RefreshIn, TokenPairOut
from .users import UserCreateIn, UserPublicOut, UserService

__all__ = [
    # Base
    "BaseService",
    # Auth
    "AuthService",
    "AuthTokenConfig",
    "LoginIn",
    "LogoutIn",
    "RefreshIn",
    "TokenPairOut",
    # Users
    "UserService",
    "UserCreateIn",
    "UserPublicOut",
    # Articles
    "ArticleService",
]
