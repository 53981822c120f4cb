"""Integration tests for ``/api/user``."""

from __future__ import annotations

from uuid import uuid4

from tests.factories.user import DEFAULT_PASSWORD
from tests.helpers.assertions import assert_problem
from tests.helpers.auth import bearer, login


# ----------------------------- registration -------------------------------- #
def test_registration_is_public(client) -> None:
    resp = client.post("/api/user", json={"email": "New@Example.com", "password": "pw"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert set(body) == {"uuid", "email"}
    assert body["email"] == "new@example.com"


def test_registered_user_can_log_in_with_role_user(client, admin_header) -> None:
    client.post("/api/user", json={"email": "fresh@example.com", "password": "pw"})
    tokens = login(client, "fresh@example.com", "pw")

    # USER role: resource reads allowed, admin routes forbidden
    assert client.get("/api/article", headers=bearer(tokens["accessToken"])).status_code == 200
    assert_problem(client.get("/api/user", headers=bearer(tokens["accessToken"])), 403)


def test_duplicate_registration_is_400_conflict(client, user) -> None:
    resp = client.post("/api/user", json={"email": user.email.upper(), "password": "pw"})
    assert_problem(resp, 400, "conflict")


def test_registration_validates_payload(client) -> None:
    assert_problem(client.post("/api/user", json={"email": "nope", "password": "pw"}), 422)
    assert_problem(client.post("/api/user", json={"email": "a@example.com"}), 422)
    assert_problem(client.post("/api/user", json={"email": "a@example.com", "password": ""}), 422)


# ------------------------------ admin reads -------------------------------- #
def test_list_users_requires_admin(client, auth_header) -> None:
    assert_problem(client.get("/api/user"), 401)
    assert_problem(client.get("/api/user", headers=auth_header), 403, "forbidden")


def test_admin_lists_users_without_secrets(client, admin, user, admin_header) -> None:
    resp = client.get("/api/user", headers=admin_header)

    assert resp.status_code == 200
    body = resp.get_json()
    assert [u["email"] for u in body] == [admin.email, user.email]
    assert all(set(u) == {"uuid", "email"} for u in body)


def test_admin_gets_user_by_id(client, user, admin_header) -> None:
    resp = client.get(f"/api/user/{user.id}", headers=admin_header)

    assert resp.status_code == 200
    assert resp.get_json() == {"uuid": str(user.id), "email": user.email}


def test_get_unknown_user_is_404(client, admin_header) -> None:
    assert_problem(client.get(f"/api/user/{uuid4()}", headers=admin_header), 404, "not_found")


def test_get_user_requires_admin(client, user, auth_header) -> None:
    assert_problem(client.get(f"/api/user/{user.id}"), 401)
    assert_problem(client.get(f"/api/user/{user.id}", headers=auth_header), 403)


# ------------------------------- deletion ---------------------------------- #
def test_admin_deletes_user(client, user, admin_header) -> None:
    resp = client.delete(f"/api/user/{user.id}", headers=admin_header)
    assert resp.status_code == 204

    assert_problem(client.get(f"/api/user/{user.id}", headers=admin_header), 404)
    assert_problem(client.delete(f"/api/user/{user.id}", headers=admin_header), 404)


def test_delete_requires_admin(client, user, auth_header) -> None:
    assert_problem(client.delete(f"/api/user/{user.id}"), 401)
    assert_problem(client.delete(f"/api/user/{user.id}", headers=auth_header), 403)


def test_deleted_user_loses_access_and_refresh(client, user, admin_header) -> None:
    tokens = login(client, user.email, DEFAULT_PASSWORD)
    client.delete(f"/api/user/{user.id}", headers=admin_header)

    assert_problem(client.get("/api/article", headers=bearer(tokens["accessToken"])), 401)
    assert_problem(client.post("/auth/refresh", json={"refreshToken": tokens["refreshToken"]}), 401)


def test_reregistered_email_does_not_revive_old_refresh_token(client, user, admin_header) -> None:
    tokens = login(client, user.email, DEFAULT_PASSWORD)
    client.delete(f"/api/user/{user.id}", headers=admin_header)
    client.post("/api/user", json={"email": user.email, "password": DEFAULT_PASSWORD})

    assert_problem(client.post("/auth/refresh", json={"refreshToken": tokens["refreshToken"]}), 401)
