from __future__ import annotations

from datetime import datetime
from typing import Final, Protocol

from tokenauth.models.user import User

ACCESS: Final[str] = "access"
REFRESH: Final[str] = "refresh"


class TokenCodec(Protocol):
    """Port for minting and inspecting signed, time-bounded tokens."""

    def mint(
        self,
        subject: str,
        user: User,
        expires_at: datetime,
        *,
        token_type: str = ACCESS,
    ) -> str:
        """Sign a token for ``subject`` carrying ``user``'s role, valid until ``expires_at``."""

    def extract_subject(self, token: str) -> str | None:
        """
        Return the ``sub`` claim of a correctly signed token.

        Expiry is not checked.

        :raises MalformedTokenError: On a bad signature or unparseable token.
        """

    def is_expired(self, token: str) -> bool:
        """
        Whether the current time is at or past the token's ``exp`` claim.

        :raises MalformedTokenError: If no ``exp`` claim can be read.
        """

    def is_valid(self, token: str, user: User, *, token_type: str | None = None) -> bool:
        """Signature verifies, not expired, subject equals ``user.email`` (and type matches)."""

    def token_type(self, token: str) -> str:
        """
        Return the ``type`` claim (``"access"`` or ``"refresh"``).

        :raises MalformedTokenError: On a bad signature or unparseable token.
        """
