"""User identity: the domain value object and its SQL persistence record."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from uuid import UUID, uuid4

from sqlalchemy import Enum, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates
from werkzeug.security import check_password_hash, generate_password_hash

from tokenauth.core.extensions import db

from .base import ReprMixin, TimestampMixin, UUIDPKMixin


class Role(str, enum.Enum):
    """Authorization role carried by every user (and every token)."""

    ADMIN = "ADMIN"
    USER = "USER"


def normalize_email(value: str) -> str:
    """
    Normalize an email for storage and lookup.

    :param value: Raw email as typed by the client.
    :returns: Trimmed, lower-cased email.
    :raises ValueError: If the value is empty or obviously malformed.
    """
    if not value or not isinstance(value, str):
        raise ValueError("Email is required.")
    v = value.strip().lower()
    # Minimal sanity check; full validation happens at API layer.
    if "@" not in v:
        raise ValueError("Email format looks invalid.")
    return v


@dataclass(frozen=True, slots=True)
class User:
    """
    Immutable user snapshot handed around by stores and services.

    :ivar id: Unique identifier (UUID4).
    :ivar email: Unique login identity, normalized.
    :ivar password_hash: Opaque werkzeug hash; never the raw password.
    :ivar role: Authorization role.
    """

    id: UUID
    email: str
    password_hash: str
    role: Role = Role.USER

    @classmethod
    def create(cls, email: str, password: str, role: Role = Role.USER) -> User:
        """
        Build a brand-new user with a fresh id and a hashed password.

        :raises ValueError: If the password is empty.
        """
        if not isinstance(password, str) or not password:
            raise ValueError("Password must be a non-empty string.")
        return cls(
            id=uuid4(),
            email=normalize_email(email),
            password_hash=generate_password_hash(password),
            role=role,
        )

    def verify_password(self, raw: str) -> bool:
        """
        Verify a password against the stored hash.

        :param raw: Plain text password candidate.
        :returns: ``True`` if it matches; otherwise ``False``.
        """
        if not self.password_hash:
            return False
        # ``check_password_hash`` is not typed and returns ``Any``; coerce to bool for mypy.
        return bool(check_password_hash(self.password_hash, raw))


class UserRecord(UUIDPKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    SQL row backing :class:`User` when the ``sqlalchemy`` store is selected.

    Fields
    ------
    id : str
        Textual UUID assigned by the application.
    email : str
        Login email, stored normalized.
    password_hash : str
        Werkzeug password hash.
    role : Role
        Authorization role.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(254), nullable=False)
    role: Mapped[Role] = mapped_column(
        Enum(Role, name="user_role"), nullable=False, default=Role.USER
    )

    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        return normalize_email(value)

    # -------------------- Mapping --------------------
    @classmethod
    def from_domain(cls, user: User) -> UserRecord:
        return cls(
            id=str(user.id),
            email=user.email,
            password_hash=user.password_hash,
            role=user.role,
        )

    def to_domain(self) -> User:
        return User(
            id=UUID(self.id),
            email=self.email,
            password_hash=self.password_hash,
            role=Role(self.role),
        )
