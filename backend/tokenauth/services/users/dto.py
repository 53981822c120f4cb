"""
DTOs for UserService.

Data Transfer Objects (DTOs) isolate the service layer from stored users,
so password hashes never travel past the service boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from tokenauth.models.user import User

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserCreateIn:
    """
    Input DTO for user registration.

    :param email: Login email.
    :type email: str
    :param password: Raw password to be hashed.
    :type password: str
    """

    email: str
    password: str


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Output DTO representing public-safe user data.

    :param uuid: User identifier.
    :type uuid: UUID
    :param email: Email address.
    :type email: str
    """

    uuid: UUID
    email: str

    @classmethod
    def from_user(cls, user: User) -> UserPublicOut:
        return cls(uuid=user.id, email=user.email)
