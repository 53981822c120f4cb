"""Unit tests for the Flask-JWT-Extended token codec."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt as pyjwt
import pytest

from tests.factories.user import UserFactory
from tokenauth.services._shared.errors import MalformedTokenError
from tokenauth.services._shared.ports import ACCESS, REFRESH


def _in(minutes: float) -> datetime:
    return datetime.now(UTC) + timedelta(minutes=minutes)


def test_mint_round_trip(app, codec) -> None:
    user = UserFactory.build()
    token = codec.mint(user.email, user, _in(5))

    assert codec.extract_subject(token) == user.email
    assert codec.token_type(token) == ACCESS
    assert codec.is_expired(token) is False
    assert codec.is_valid(token, user) is True


def test_claims_carry_role_type_and_expiry(app, codec) -> None:
    user = UserFactory.build()
    expires_at = _in(30)
    token = codec.mint(user.email, user, expires_at, token_type=REFRESH)

    claims = codec.decode(token)
    assert claims["sub"] == user.email
    assert claims["role"] == user.role.value
    assert claims["type"] == REFRESH
    assert abs(claims["exp"] - expires_at.timestamp()) <= 1
    assert claims["iat"] <= claims["exp"]


def test_mint_rejects_unknown_type(app, codec) -> None:
    user = UserFactory.build()
    with pytest.raises(ValueError):
        codec.mint(user.email, user, _in(5), token_type="bogus")


def test_is_valid_checks_subject_against_user(app, codec) -> None:
    owner, other = UserFactory.build(), UserFactory.build()
    token = codec.mint(owner.email, owner, _in(5))

    assert codec.is_valid(token, other) is False


def test_is_valid_checks_token_type_when_asked(app, codec) -> None:
    user = UserFactory.build()
    refresh = codec.mint(user.email, user, _in(5), token_type=REFRESH)

    assert codec.is_valid(refresh, user) is True
    assert codec.is_valid(refresh, user, token_type=REFRESH) is True
    assert codec.is_valid(refresh, user, token_type=ACCESS) is False


def test_expiry_is_observed_after_time_passes(app, codec, freeze_time) -> None:
    user = UserFactory.build()
    with freeze_time("2030-01-01 00:00:00") as frozen:
        token = codec.mint(user.email, user, _in(1))
        assert codec.is_expired(token) is False

        frozen.tick(timedelta(minutes=2))
        assert codec.is_expired(token) is True
        assert codec.is_valid(token, user) is False
        # The subject is still readable from an expired token
        assert codec.extract_subject(token) == user.email


def test_token_minted_with_past_expiry_is_expired(app, codec) -> None:
    user = UserFactory.build()
    token = codec.mint(user.email, user, _in(-1))

    assert codec.is_expired(token) is True
    assert codec.is_valid(token, user) is False


def test_forged_signature_is_malformed(app, codec) -> None:
    user = UserFactory.build()
    forged = pyjwt.encode(
        {"sub": user.email, "type": ACCESS, "exp": int(_in(5).timestamp())},
        "some-other-key-of-sufficient-length",
        algorithm="HS256",
    )

    with pytest.raises(MalformedTokenError):
        codec.extract_subject(forged)
    assert codec.is_valid(forged, user) is False
    # Expiry is read without checking who signed the token
    assert codec.is_expired(forged) is False


@pytest.mark.parametrize("garbage", ["", "not-a-jwt", "a.b.c"])
def test_garbage_is_malformed(app, codec, garbage: str) -> None:
    with pytest.raises(MalformedTokenError):
        codec.extract_subject(garbage)
    with pytest.raises(MalformedTokenError):
        codec.is_expired(garbage)
    assert codec.is_valid(garbage, UserFactory.build()) is False


def test_token_expiring_at_mint_time_is_expired(app, codec, freeze_time) -> None:
    user = UserFactory.build()
    with freeze_time("2030-01-01 00:00:00") as frozen:
        token = codec.mint(user.email, user, codec.now_utc())

        assert codec.decode(token, allow_expired=True)["exp"] == int(codec.now_utc().timestamp())
        assert codec.is_expired(token) is True
        assert codec.is_valid(token, user) is False

        frozen.tick(timedelta(days=365))
        assert codec.is_expired(token) is True
        assert codec.is_valid(token, user) is False
