"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP directly. They serve as stable contracts between stores,
token codecs, and application services.

The translation to HTTP responses (RFC 7807) is handled by
``tokenauth/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_users_email').

    Returns
    -------
    bool
        True if the IntegrityError mentions the constraint or, for SQLite
        which reports columns instead of names, the constrained column.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    if constraint_name.lower() in message:
        return True
    # SQLite: "UNIQUE constraint failed: users.email"
    table_col = constraint_name.lower().removeprefix("uq_").replace("_", ".", 1)
    return table_col in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from stores, codecs or services.
    - BaseService translates them to APIError at the boundary.
    """

    pass


# --------------------------------------------------------------------------- #
# Authentication errors
# --------------------------------------------------------------------------- #


class InvalidCredentialsError(ServiceError):
    """Raised at login when the email is unknown or the password is wrong."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class TokenError(ServiceError):
    """Base class for every reason a presented token is rejected."""


class MalformedTokenError(TokenError):
    """Token cannot be parsed or its signature does not verify."""

    def __init__(self, message: str = "Malformed token") -> None:
        super().__init__(message)


class ExpiredTokenError(TokenError):
    """Token is structurally sound but past its ``exp`` claim."""

    def __init__(self, message: str = "Token has expired") -> None:
        super().__init__(message)


class IdentityMismatchError(TokenError):
    """The identity bound to a refresh token no longer matches the store."""

    def __init__(self, message: str = "Token identity does not match") -> None:
        super().__init__(message)


# --------------------------------------------------------------------------- #
# Resource errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the store.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: object
    """

    entity: str
    key: object

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a uniqueness rule is violated (e.g., duplicated email).

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:  # pragma: no cover
        return f"Conflict on {self.entity}: {self.detail}"
