# tokenauth/services/_shared/base.py
from __future__ import annotations

from datetime import UTC, datetime

from tokenauth.core import errors as api_errors
from tokenauth.security.context import SecurityContext
from tokenauth.services._shared.errors import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    ServiceError,
    TokenError,
)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Carry the request-scoped :class:`SecurityContext`.
    * Centralize error translation.
    * Keep services thin, orchestration-only, no web leakage.
    """

    def __init__(self, *, ctx: SecurityContext | None = None) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context (caller identity, request id).
        :type ctx: SecurityContext | None
        """
        self.ctx = ctx or SecurityContext()

    # -------------------------- Error handling ------------------------------

    def translate_exceptions(self, exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised.
        :rtype: Exception
        """
        if isinstance(exc, (InvalidCredentialsError, TokenError)):
            # → 401, never say which part was wrong
            return api_errors.Unauthorized(str(exc))

        if isinstance(exc, NotFoundError):
            # → 404 Not Found
            return api_errors.NotFound(str(exc))

        if isinstance(exc, ConflictError):
            # → 400 with code "conflict"
            return api_errors.Conflict(str(exc))

        # Any other ServiceError subclass → 400 Bad Request
        if isinstance(exc, ServiceError):
            return api_errors.APIError(
                message=str(exc),
                status_code=400,
                code="bad_request",
            )

        # Fallback: return untouched (will bubble up to Flask handler)
        return exc

    # --------------------------- Clock --------------------------------------

    @staticmethod
    def now_utc() -> datetime:
        return datetime.now(UTC)
