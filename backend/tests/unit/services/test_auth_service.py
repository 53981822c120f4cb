# tests/unit/services/test_auth_service.py
from __future__ import annotations

from datetime import timedelta

import pytest

from tests.factories.user import DEFAULT_PASSWORD, UserFactory
from tests.helpers.auth import issue_token
from tokenauth.infra.jwt.flask_jwt_token_codec import JWTTokenCodec
from tokenauth.services._shared.errors import (
    ExpiredTokenError,
    IdentityMismatchError,
    InvalidCredentialsError,
    MalformedTokenError,
)
from tokenauth.services._shared.ports import (
    ACCESS,
    REFRESH,
    InMemoryRefreshTokenLedger,
    InMemoryUserStore,
)
from tokenauth.services.auth.dto import AuthTokenConfig, LoginIn, LogoutIn, RefreshIn, TokenPairOut
from tokenauth.services.auth.service import AuthService


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture()
def service(app, store) -> AuthService:
    """
    Build an AuthService wired to in-memory stores and the real JWT codec.

    .. note::
       Access tokens live 1 minute and refresh tokens 10 minutes so expiry
       can be reached with small clock jumps.
    """
    return AuthService(
        users=store,
        ledger=InMemoryRefreshTokenLedger(),
        tokens=JWTTokenCodec(),
        token_cfg=AuthTokenConfig.from_millis(60_000, 600_000),
    )


@pytest.fixture()
def account(store):
    user = UserFactory.build()
    store.save(user)
    return user


def _login(service: AuthService, user) -> TokenPairOut:
    return service.login(LoginIn(email=user.email, password=DEFAULT_PASSWORD))


# -------------------------------- Login ----------------------------------- #
def test_login_issues_token_pair_and_records_refresh_token(service, account):
    """Login returns an access/refresh pair and maps the refresh token to the user."""
    pair = _login(service, account)

    assert isinstance(pair, TokenPairOut)
    assert service.tokens.token_type(pair.access_token) == ACCESS
    assert service.tokens.token_type(pair.refresh_token) == REFRESH
    assert service.tokens.extract_subject(pair.access_token) == account.email
    assert service.ledger.find_user_by_token(pair.refresh_token) == account
    # Only refresh tokens are recorded
    assert service.ledger.find_user_by_token(pair.access_token) is None


def test_login_lifetimes_follow_config(service, account):
    pair = _login(service, account)
    access = service.tokens.decode(pair.access_token)
    refresh = service.tokens.decode(pair.refresh_token)

    assert access["exp"] - access["iat"] == pytest.approx(60, abs=1)
    assert refresh["exp"] - refresh["iat"] == pytest.approx(600, abs=1)


def test_login_email_is_case_insensitive(service, account):
    pair = service.login(LoginIn(email=account.email.upper(), password=DEFAULT_PASSWORD))
    assert service.tokens.extract_subject(pair.access_token) == account.email


def test_each_login_issues_a_distinct_refresh_token(service, account):
    first, second = _login(service, account), _login(service, account)

    assert first.refresh_token != second.refresh_token
    assert len(service.ledger) == 2


@pytest.mark.parametrize(
    ("email", "password"),
    [("missing@example.com", DEFAULT_PASSWORD), (None, "wrong-password")],
)
def test_login_invalid_credentials_records_nothing(service, account, email, password):
    with pytest.raises(InvalidCredentialsError):
        service.login(LoginIn(email=email or account.email, password=password))
    assert len(service.ledger) == 0


# ------------------------------- Refresh ---------------------------------- #
def test_refresh_mints_access_token_for_same_user(service, account):
    pair = _login(service, account)

    access = service.refresh(RefreshIn(refresh_token=pair.refresh_token))

    assert access is not None
    assert service.tokens.token_type(access) == ACCESS
    assert service.tokens.is_valid(access, account, token_type=ACCESS)


def test_refresh_token_can_be_redeemed_repeatedly(service, account):
    pair = _login(service, account)

    assert service.refresh(RefreshIn(refresh_token=pair.refresh_token)) is not None
    assert service.refresh(RefreshIn(refresh_token=pair.refresh_token)) is not None


def test_refresh_rejects_access_token(service, account):
    pair = _login(service, account)

    assert service.refresh(RefreshIn(refresh_token=pair.access_token)) is None
    with pytest.raises(MalformedTokenError):
        service.redeem(pair.access_token)


def test_refresh_rejects_garbage(service):
    assert service.refresh(RefreshIn(refresh_token="not-a-jwt")) is None
    with pytest.raises(MalformedTokenError):
        service.redeem("not-a-jwt")


def test_refresh_rejects_expired_token(service, account, freeze_time):
    with freeze_time("2030-01-01 00:00:00") as frozen:
        pair = _login(service, account)
        frozen.tick(timedelta(minutes=11))

        assert service.refresh(RefreshIn(refresh_token=pair.refresh_token)) is None
        with pytest.raises(ExpiredTokenError):
            service.redeem(pair.refresh_token)


def test_refresh_rejects_token_unknown_to_ledger(service, account):
    """A correctly signed refresh token that was never issued by login."""
    stray = issue_token(account, token_type=REFRESH)

    with pytest.raises(IdentityMismatchError):
        service.redeem(stray)


def test_refresh_fails_once_user_is_deleted(service, store, account):
    pair = _login(service, account)
    store.delete_by_id(account.id)

    assert service.refresh(RefreshIn(refresh_token=pair.refresh_token)) is None
    with pytest.raises(IdentityMismatchError):
        service.redeem(pair.refresh_token)


def test_refresh_fails_when_email_is_reregistered(service, store, account):
    """Same email, new identity: the ledger snapshot no longer matches."""
    pair = _login(service, account)
    store.delete_by_id(account.id)
    store.save(UserFactory.build(email=account.email))

    with pytest.raises(IdentityMismatchError):
        service.redeem(pair.refresh_token)


# -------------------------------- Logout ---------------------------------- #
def test_logout_forgets_refresh_token(service, account):
    pair = _login(service, account)

    assert service.logout(LogoutIn(refresh_token=pair.refresh_token)) is True
    assert service.logout(LogoutIn(refresh_token=pair.refresh_token)) is False
    assert service.refresh(RefreshIn(refresh_token=pair.refresh_token)) is None


def test_logout_leaves_other_sessions_alone(service, account):
    first, second = _login(service, account), _login(service, account)
    service.logout(LogoutIn(refresh_token=first.refresh_token))

    assert service.refresh(RefreshIn(refresh_token=second.refresh_token)) is not None
