"""User account management."""

from .dto import UserCreateIn, UserPublicOut
from .service import UserService

__all__ = ["UserCreateIn", "UserPublicOut", "UserService"]
