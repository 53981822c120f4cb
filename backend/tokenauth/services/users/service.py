"""
UserService
===========

Application service managing user accounts:
- Registration with email uniqueness
- Listing and retrieval (public-safe DTOs only)
- Deletion
"""

from __future__ import annotations

import logging
import threading
from uuid import UUID

from tokenauth.models.user import Role, User
from tokenauth.security.context import SecurityContext
from tokenauth.services._shared.base import BaseService
from tokenauth.services._shared.errors import ConflictError, NotFoundError
from tokenauth.services._shared.ports import UserStore
from tokenauth.services.users.dto import UserCreateIn, UserPublicOut

log = logging.getLogger(__name__)

# Serializes check-then-insert so two concurrent registrations of the same
# email cannot both pass the uniqueness check.
_REGISTRATION_LOCK = threading.Lock()


class UserService(BaseService):
    """
    Application service for user accounts.

    Responsibilities
    ----------------
    - Register users ensuring email uniqueness.
    - Retrieve and list users.
    - Delete users by id.
    """

    def __init__(self, *, users: UserStore, ctx: SecurityContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.users = users

    # --------------------------------------------------------------------- #
    # Registration
    # --------------------------------------------------------------------- #

    def create_user(self, dto: UserCreateIn, *, role: Role = Role.USER) -> UserPublicOut:
        """
        Register a new user, with role ``USER`` unless told otherwise.

        :param dto: User registration input DTO.
        :type dto: UserCreateIn
        :param role: Role granted to the account.
        :type role: Role
        :returns: Public-safe user DTO.
        :rtype: UserPublicOut
        :raises ConflictError: If the email is already registered.
        """
        user = User.create(dto.email, dto.password, role)
        with _REGISTRATION_LOCK:
            if self.users.find_by_email(user.email) is not None:
                raise ConflictError("User", "email already in use")
            self.users.save(user)
        log.info("users.created user_id=%s", user.id)
        return UserPublicOut.from_user(user)

    # --------------------------------------------------------------------- #
    # Retrieval
    # --------------------------------------------------------------------- #

    def list_users(self) -> list[UserPublicOut]:
        """Return every user in insertion order."""
        return [UserPublicOut.from_user(u) for u in self.users.find_all()]

    def get_user(self, user_id: UUID) -> UserPublicOut:
        """
        Retrieve a user by identifier.

        :raises NotFoundError: If user does not exist.
        """
        user = self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return UserPublicOut.from_user(user)

    # --------------------------------------------------------------------- #
    # Deletion
    # --------------------------------------------------------------------- #

    def delete_user(self, user_id: UUID) -> None:
        """
        Delete a user by identifier.

        Refresh tokens issued to the user stop working because the refresh
        workflow no longer finds them in the store.

        :raises NotFoundError: If user does not exist.
        """
        if not self.users.delete_by_id(user_id):
            raise NotFoundError("User", user_id)
        log.info("users.deleted user_id=%s", user_id)
