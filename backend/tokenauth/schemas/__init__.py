"""Convenience exports for application schemas."""

from __future__ import annotations

from .article import ArticleSchema
from .auth import AccessTokenSchema, LoginSchema, RefreshSchema, TokenPairSchema
from .user import UserCreateSchema, UserSchema

__all__ = [
    "AccessTokenSchema",
    "ArticleSchema",
    "LoginSchema",
    "RefreshSchema",
    "TokenPairSchema",
    "UserCreateSchema",
    "UserSchema",
]
