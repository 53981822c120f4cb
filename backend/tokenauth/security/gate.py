"""Per-request bearer token authentication."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

from tokenauth.services._shared.errors import MalformedTokenError
from tokenauth.services._shared.ports import ACCESS, TokenCodec, UserStore

from .context import Principal, SecurityContext

log = logging.getLogger(__name__)

BEARER_PREFIX: Final[str] = "Bearer "


def extract_bearer_token(authorization: str | None) -> str | None:
    """
    Return the token carried by an ``Authorization`` header value.

    :returns: The text after ``"Bearer "``, or ``None`` when the header is
        missing or uses another scheme.
    """
    if authorization is None or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX) :]


@dataclass(slots=True)
class RequestAuthenticationGate:
    """
    Establish the caller's identity before any handler runs.

    The gate never rejects a request: it only attaches a :class:`Principal`
    when the bearer token checks out. Authorization decisions are taken
    downstream from whether a principal is present.

    :param users: Store used to resolve the token subject.
    :param tokens: Codec used to read and validate the token.
    """

    users: UserStore
    tokens: TokenCodec

    def authenticate(self, ctx: SecurityContext, authorization: str | None) -> SecurityContext:
        """
        Inspect ``authorization`` and attach the caller to ``ctx`` when valid.

        :param ctx: Request-scoped context, mutated in place.
        :param authorization: Raw ``Authorization`` header value.
        :returns: The same ``ctx``, for chaining.
        """
        token = extract_bearer_token(authorization)
        if token is None or ctx.is_authenticated:
            return ctx

        try:
            email = self.tokens.extract_subject(token)
        except MalformedTokenError as exc:
            log.debug("auth.gate.rejected reason=malformed detail=%s", exc)
            return ctx

        if email is None:
            return ctx

        user = self.users.find_by_email(email)
        if user is None:
            log.debug("auth.gate.rejected reason=unknown_subject")
            return ctx

        if self.tokens.is_valid(token, user, token_type=ACCESS):
            ctx.attach(Principal.from_user(user))
            log.debug("auth.gate.authenticated user_id=%s", user.id)
        return ctx
