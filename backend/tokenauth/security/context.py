"""Request-scoped security context.

A fresh :class:`SecurityContext` is created for every request and handed by
reference to the authentication gate and, through the authorization
decorators, to the views. Nothing here is process-global.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from tokenauth.models.user import Role, User


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller.

    :ivar user_id: Identifier of the user the token was validated against.
    :ivar email: Subject of the token.
    :ivar role: Role loaded from the user store (not from the token).
    """

    user_id: UUID
    email: str
    role: Role

    @classmethod
    def from_user(cls, user: User) -> Principal:
        return cls(user_id=user.id, email=user.email, role=user.role)


@dataclass(slots=True)
class SecurityContext:
    """
    Carry the authenticated identity (if any) for one request.

    :param request_id: Correlation id for logging/tracing.
    :param principal: Caller identity; ``None`` while unauthenticated.
    """

    request_id: str | None = None
    principal: Principal | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.principal is not None

    def attach(self, principal: Principal) -> None:
        """Attach ``principal`` unless one is already present."""
        if self.principal is None:
            self.principal = principal
