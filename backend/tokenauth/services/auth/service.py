# tokenauth/services/auth/service.py
from __future__ import annotations

import logging
from datetime import timedelta

from tokenauth.security.context import SecurityContext
from tokenauth.services._shared.base import BaseService
from tokenauth.services._shared.errors import (
    ExpiredTokenError,
    IdentityMismatchError,
    InvalidCredentialsError,
    MalformedTokenError,
    TokenError,
)
from tokenauth.services._shared.ports import (
    ACCESS,
    REFRESH,
    RefreshTokenLedger,
    TokenCodec,
    UserStore,
)
from tokenauth.services.auth.dto import (
    AuthTokenConfig,
    LoginIn,
    LogoutIn,
    RefreshIn,
    TokenPairOut,
)

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Authentication lifecycle service (login / refresh / logout).

    Tokens are minted through a pluggable :class:`TokenCodec`; every refresh
    token handed out is recorded in the :class:`RefreshTokenLedger` together
    with the user it was issued for.
    """

    def __init__(
        self,
        *,
        users: UserStore,
        ledger: RefreshTokenLedger,
        tokens: TokenCodec,
        token_cfg: AuthTokenConfig | None = None,
        ctx: SecurityContext | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param users: Credential store.
        :param ledger: Refresh token ledger.
        :param tokens: Adapter for minting/parsing JWTs.
        :param token_cfg: Access/Refresh expiry configuration.
        :param ctx: Request-scoped security context.
        """
        super().__init__(ctx=ctx)
        self.users = users
        self.ledger = ledger
        self.tokens = tokens
        self.cfg = token_cfg or AuthTokenConfig(
            access_expires=timedelta(hours=1),
            refresh_expires=timedelta(days=1),
        )

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> TokenPairOut:
        """
        Authenticate credentials and issue a fresh token pair.

        Nothing is minted or recorded unless the credentials check out.

        :param dto: Login input.
        :returns: Access/Refresh token pair.
        :raises InvalidCredentialsError: Unknown email or wrong password.
        """
        user = self.users.find_by_email(dto.email)
        if user is None or not user.verify_password(dto.password):
            log.info("auth.login.failed")
            raise InvalidCredentialsError()

        now = self.now_utc()
        access = self.tokens.mint(
            user.email, user, now + self.cfg.access_expires, token_type=ACCESS
        )
        refresh_expires_at = now + self.cfg.refresh_expires
        refresh = self.tokens.mint(user.email, user, refresh_expires_at, token_type=REFRESH)

        self.ledger.save(refresh, user, refresh_expires_at)
        log.info("auth.login.succeeded user_id=%s", user.id)
        return TokenPairOut(access_token=access, refresh_token=refresh)

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> str | None:
        """
        Exchange a refresh token for a new access token.

        :param dto: Refresh input.
        :returns: A new access token, or ``None`` when the refresh token is
            malformed, expired, unknown to the ledger or no longer bound to
            the same user. The caller maps ``None`` to "not authenticated".
        """
        try:
            return self.redeem(dto.refresh_token)
        except TokenError as exc:
            log.info("auth.refresh.rejected reason=%s", type(exc).__name__)
            return None

    def redeem(self, refresh_token: str) -> str:
        """
        Validate ``refresh_token`` and mint an access token.

        The subject must still resolve to a user in the store, and that user
        must be the one the ledger recorded for this exact token string: a
        user deleted (or deleted and re-registered) after issuance fails.

        :raises MalformedTokenError: Bad signature/structure, or not a refresh token.
        :raises ExpiredTokenError: Token is past its expiry.
        :raises IdentityMismatchError: Store and ledger disagree.
        """
        email = self.tokens.extract_subject(refresh_token)
        if email is None:
            raise MalformedTokenError("Token carries no subject.")
        if self.tokens.token_type(refresh_token) != REFRESH:
            raise MalformedTokenError("Refresh token required.")

        current = self.users.find_by_email(email)
        recorded = self.ledger.find_user_by_token(refresh_token)

        if self.tokens.is_expired(refresh_token):
            raise ExpiredTokenError()
        if current is None or recorded is None:
            raise IdentityMismatchError("Token is not bound to a known user.")
        if current.email != recorded.email or current.id != recorded.id:
            raise IdentityMismatchError()

        access = self.tokens.mint(
            current.email,
            current,
            self.now_utc() + self.cfg.access_expires,
            token_type=ACCESS,
        )
        log.info("auth.refresh.succeeded user_id=%s", current.id)
        return access

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> bool:
        """
        Forget a refresh token so it can no longer be redeemed.

        Idempotent. Access tokens already issued stay valid until they expire.

        :returns: ``True`` if the ledger held the token.
        """
        removed = self.ledger.delete(dto.refresh_token)
        log.info("auth.logout removed=%s", removed)
        return removed
