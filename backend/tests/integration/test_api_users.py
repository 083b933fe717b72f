"""Integration tests for the user administration endpoints."""

from __future__ import annotations

import pytest
from app.models.user import User
from app.services.users.dto import CreateUserIn
from tests.helpers.assertions import assert_problem, assert_user_payload

BASE = "/api/v1/users"


@pytest.fixture()
def admin(user_service):
    """A committed account holding ``USER_ADMIN``."""
    return user_service.create(
        CreateUserIn(
            username="admin",
            password="admin-pw",
            re_password="admin-pw",
            authorities=("USER_ADMIN",),
        )
    )


@pytest.fixture()
def admin_headers(admin, auth_headers):
    return auth_headers(admin.id, "USER_ADMIN")


def _payload(username: str = "newbie", **overrides) -> dict:
    body = {
        "username": username,
        "password": "pa55word",
        "rePassword": "pa55word",
        "fullName": "New Bie",
        "authorities": ["BOOK_ADMIN"],
    }
    body.update(overrides)
    return body


class TestCreateUser:
    def test_created(self, client, admin, admin_headers, user_service):
        resp = client.post(BASE, json=_payload(), headers=admin_headers)

        assert resp.status_code == 201
        data = resp.get_json()["data"]
        assert_user_payload(data)
        assert data["username"] == "newbie"
        assert data["fullName"] == "New Bie"
        assert data["enabled"] is True
        assert data["authorities"] == ["BOOK_ADMIN"]
        assert user_service.username_exists("newbie")

    def test_caller_is_recorded_as_creator(self, client, admin, admin_headers, session):
        resp = client.post(BASE, json=_payload("audited"), headers=admin_headers)

        stored = session.get(User, resp.get_json()["data"]["id"])
        assert (stored.created_by, stored.modified_by) == (admin.id, admin.id)

    def test_password_mismatch(self, client, admin_headers, user_service):
        resp = client.post(BASE, json=_payload(rePassword="different"), headers=admin_headers)

        body = assert_problem(resp, 400, "validation_error")
        assert body["detail"] == "Passwords don't match!"
        assert not user_service.username_exists("newbie")

    def test_duplicate_username(self, client, admin_headers):
        resp = client.post(BASE, json=_payload(username="admin"), headers=admin_headers)
        assert_problem(resp, 409, "conflict")

    def test_schema_errors(self, client, admin_headers):
        resp = client.post(BASE, json={"username": "x"}, headers=admin_headers)

        body = assert_problem(resp, 422, "unprocessable_entity")
        assert {"password", "rePassword"} <= set(body["details"]["errors"])

    def test_unknown_authority_rejected_by_schema(self, client, admin_headers):
        resp = client.post(BASE, json=_payload(authorities=["GOD_MODE"]), headers=admin_headers)
        assert_problem(resp, 422, "unprocessable_entity")

    def test_requires_token(self, client, admin):
        assert_problem(client.post(BASE, json=_payload()), 401, "unauthorized")

    def test_requires_user_admin_authority(self, client, admin, auth_headers):
        resp = client.post(BASE, json=_payload(), headers=auth_headers(admin.id, "BOOK_ADMIN"))
        assert_problem(resp, 403, "forbidden")


class TestUpdateAndDelete:
    def test_update(self, client, admin, admin_headers):
        resp = client.put(
            f"{BASE}/{admin.id}",
            json={"fullName": "Chief", "authorities": ["USER_ADMIN", "AUTHOR_ADMIN"]},
            headers=admin_headers,
        )

        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["fullName"] == "Chief"
        assert data["authorities"] == ["USER_ADMIN", "AUTHOR_ADMIN"]
        assert data["username"] == "admin"

    def test_update_missing(self, client, admin_headers):
        resp = client.put(f"{BASE}/9999", json={"fullName": "Nobody"}, headers=admin_headers)
        assert_problem(resp, 404, "not_found")

    def test_delete_is_soft(self, client, admin_headers, user_service):
        created = client.post(BASE, json=_payload(), headers=admin_headers).get_json()["data"]

        resp = client.delete(f"{BASE}/{created['id']}", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.get_json()["data"]["enabled"] is False

        fetched = client.get(f"{BASE}/{created['id']}", headers=admin_headers)
        assert fetched.status_code == 200
        assert fetched.get_json()["data"]["enabled"] is False
        assert user_service.username_exists("newbie")

    def test_delete_missing(self, client, admin_headers):
        assert_problem(client.delete(f"{BASE}/9999", headers=admin_headers), 404, "not_found")


class TestQueries:
    def test_get_user(self, client, admin, admin_headers):
        resp = client.get(f"{BASE}/{admin.id}", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.get_json()["data"]["id"] == admin.id

    def test_get_user_missing(self, client, admin_headers):
        assert_problem(client.get(f"{BASE}/4242", headers=admin_headers), 404, "not_found")

    def test_search_with_pagination(self, client, admin_headers):
        for name in ("s-alpha", "s-beta", "s-gamma"):
            client.post(BASE, json=_payload(username=name), headers=admin_headers)

        resp = client.post(
            f"{BASE}/search?page=1&limit=2&sort=-username",
            json={"username": "S-"},
            headers=admin_headers,
        )

        assert resp.status_code == 200
        body = resp.get_json()
        assert [u["username"] for u in body["data"]] == ["s-gamma", "s-beta"]
        assert body["meta"] == {"page": 1, "limit": 2, "count": 2}

    def test_search_without_matches(self, client, admin_headers):
        resp = client.post(f"{BASE}/search", json={"fullName": "zzz"}, headers=admin_headers)
        assert resp.status_code == 200
        assert resp.get_json()["data"] == []

    def test_username_exists_is_public(self, client, admin):
        taken = client.get(f"{BASE}/exists", query_string={"username": "admin"})
        free = client.get(f"{BASE}/exists", query_string={"username": "free"})

        assert taken.get_json()["data"] == {"username": "admin", "exists": True}
        assert free.get_json()["data"] == {"username": "free", "exists": False}

    def test_username_exists_requires_parameter(self, client):
        assert_problem(client.get(f"{BASE}/exists"), 400, "bad_request")
