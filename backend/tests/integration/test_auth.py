"""Integration tests for the ``/auth`` endpoints."""

from __future__ import annotations

from datetime import timedelta

from tests.factories.user import DEFAULT_PASSWORD
from tests.helpers.assertions import assert_json_keys, assert_problem
from tests.helpers.auth import bearer, login


def test_login_returns_token_pair(client, user) -> None:
    resp = client.post("/auth/login", json={"email": user.email, "password": DEFAULT_PASSWORD})

    assert resp.status_code == 200
    assert_json_keys(resp.get_json(), {"accessToken", "refreshToken"})


def test_login_with_wrong_password_is_401(client, user) -> None:
    resp = client.post("/auth/login", json={"email": user.email, "password": "nope"})
    assert_problem(resp, 401, "unauthorized")


def test_login_with_unknown_email_is_401(client) -> None:
    resp = client.post("/auth/login", json={"email": "ghost@example.com", "password": "x"})
    assert_problem(resp, 401, "unauthorized")


def test_login_with_malformed_email_is_401_not_422(client) -> None:
    resp = client.post("/auth/login", json={"email": "ghost", "password": "x"})
    assert_problem(resp, 401)


def test_login_payload_is_validated(client) -> None:
    body = assert_problem(client.post("/auth/login", json={"email": "a@b.c"}), 422, "validation_error")
    assert "password" in body["details"]["errors"]


def test_login_without_json_body_is_422(client) -> None:
    resp = client.post("/auth/login", data="email=x", content_type="text/plain")
    assert_problem(resp, 422)


def test_refresh_returns_new_access_token(client, user) -> None:
    tokens = login(client, user.email, DEFAULT_PASSWORD)

    resp = client.post("/auth/refresh", json={"refreshToken": tokens["refreshToken"]})

    assert resp.status_code == 200
    access = resp.get_json()["accessToken"]
    assert client.get("/api/article", headers=bearer(access)).status_code == 200


def test_refresh_with_access_token_is_401(client, user) -> None:
    tokens = login(client, user.email, DEFAULT_PASSWORD)
    resp = client.post("/auth/refresh", json={"refreshToken": tokens["accessToken"]})
    assert_problem(resp, 401)


def test_refresh_with_garbage_is_401(client) -> None:
    assert_problem(client.post("/auth/refresh", json={"refreshToken": "garbage"}), 401)


def test_refresh_requires_token_field(client) -> None:
    assert_problem(client.post("/auth/refresh", json={}), 422)


def test_refresh_after_expiry_is_401(client, user, freeze_time) -> None:
    with freeze_time("2030-01-01 00:00:00") as frozen:
        tokens = login(client, user.email, DEFAULT_PASSWORD)
        frozen.tick(timedelta(days=1, seconds=1))

        resp = client.post("/auth/refresh", json={"refreshToken": tokens["refreshToken"]})
        assert_problem(resp, 401)


def test_logout_invalidates_refresh_token(client, user) -> None:
    tokens = login(client, user.email, DEFAULT_PASSWORD)

    resp = client.post("/auth/logout", json={"refreshToken": tokens["refreshToken"]})
    assert resp.status_code == 204
    # Idempotent
    assert client.post("/auth/logout", json={"refreshToken": tokens["refreshToken"]}).status_code == 204

    resp = client.post("/auth/refresh", json={"refreshToken": tokens["refreshToken"]})
    assert_problem(resp, 401)


def test_auth_endpoints_ignore_bad_bearer_headers(client, user) -> None:
    resp = client.post(
        "/auth/login",
        json={"email": user.email, "password": DEFAULT_PASSWORD},
        headers={"Authorization": "Bearer garbage"},
    )
    assert resp.status_code == 200
