"""Authentication workflow: login, refresh and logout."""

from .dto import AuthTokenConfig, LoginIn, LogoutIn, RefreshIn, TokenPairOut
from .service import AuthService

__all__ = [
    "AuthService",
    "AuthTokenConfig",
    "LoginIn",
    "LogoutIn",
    "RefreshIn",
    "TokenPairOut",
]
