# tokenauth/infra/jwt/flask_jwt_token_codec.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, cast

import jwt as pyjwt
from flask_jwt_extended.exceptions import JWTExtendedException

from tokenauth.models.user import User
from tokenauth.services._shared.errors import MalformedTokenError
from tokenauth.services._shared.ports import ACCESS, REFRESH, TokenCodec

log = logging.getLogger(__name__)

# Everything the signing stack raises for a token it will not accept.
_DECODE_ERRORS = (pyjwt.PyJWTError, JWTExtendedException, ValueError)


@dataclass(slots=True)
class JWTTokenCodec(TokenCodec):
    """
    Adapter for Flask-JWT-Extended.

    Signing key, algorithm and leeway come from the app config
    (``JWT_SECRET_KEY``, ``JWT_ALGORITHM``).

    .. note::
       Requires an active Flask app context with proper JWT settings.
    """

    def mint(
        self,
        subject: str,
        user: User,
        expires_at: datetime,
        *,
        token_type: str = ACCESS,
    ) -> str:
        from flask_jwt_extended import create_access_token, create_refresh_token

        claims: dict[str, Any] = {"role": user.role.value}
        expires_delta = expires_at - self.now_utc()
        if expires_delta <= timedelta(0):
            # The library omits "exp" for a zero delta, so pin it here.
            claims["exp"] = int(expires_at.timestamp())

        if token_type == ACCESS:
            token = create_access_token(
                identity=subject, additional_claims=claims, expires_delta=expires_delta
            )
        elif token_type == REFRESH:
            token = create_refresh_token(
                identity=subject, additional_claims=claims, expires_delta=expires_delta
            )
        else:
            raise ValueError(f"Unknown token type: {token_type!r}")
        return cast(str, token)

    def decode(self, token: str, *, allow_expired: bool = False) -> dict[str, Any]:
        """
        Verify the signature and return the claims.

        :raises MalformedTokenError: When the library rejects the token.
        """
        from flask_jwt_extended import decode_token

        try:
            return cast(dict[str, Any], decode_token(token, allow_expired=allow_expired))
        except pyjwt.ExpiredSignatureError:
            raise
        except _DECODE_ERRORS as exc:
            raise MalformedTokenError(f"Malformed token: {exc}") from exc

    def extract_subject(self, token: str) -> str | None:
        subject = self.decode(token, allow_expired=True).get("sub")
        if subject is None:
            return None
        return str(subject)

    def is_expired(self, token: str) -> bool:
        # Unverified read: an expired token is expired whoever signed it.
        try:
            claims = pyjwt.decode(token, options={"verify_signature": False})
        except pyjwt.PyJWTError as exc:
            raise MalformedTokenError(f"Malformed token: {exc}") from exc
        exp = claims.get("exp")
        if not isinstance(exp, int | float):
            raise MalformedTokenError("Token carries no expiry claim.")
        return self.now_utc().timestamp() >= exp

    def is_valid(self, token: str, user: User, *, token_type: str | None = None) -> bool:
        try:
            claims = self.decode(token)
        except pyjwt.ExpiredSignatureError:
            log.debug("token.rejected reason=expired")
            return False
        except MalformedTokenError as exc:
            log.debug("token.rejected reason=malformed detail=%s", exc)
            return False
        if token_type is not None and claims.get("type") != token_type:
            log.debug("token.rejected reason=type expected=%s", token_type)
            return False
        return claims.get("sub") == user.email

    def token_type(self, token: str) -> str:
        return str(self.decode(token, allow_expired=True).get("type", ""))

    @staticmethod
    def now_utc() -> datetime:
        return datetime.now(UTC)
