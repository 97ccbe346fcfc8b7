"""Integration tests for the user profile endpoints."""

from __future__ import annotations

import pytest

from tests.factories.user import DEFAULT_PASSWORD, UserFactory

BASE = "/api/v1/users"


@pytest.fixture()
def user():
    return UserFactory(username="frank", first_name="Frank", last_name="Castle")


@pytest.fixture()
def authed(client, user):
    """Test client carrying the session cookie of ``user``."""
    resp = client.post(
        "/api/v1/auth/login", json={"emailOrUsername": user.username, "password": DEFAULT_PASSWORD}
    )
    assert resp.status_code == 200
    return client


def test_endpoints_require_auth(client):
    assert client.get(f"{BASE}/me").status_code == 401
    assert client.patch(f"{BASE}/me", json={}).status_code == 401
    assert client.delete(f"{BASE}/me").status_code == 401
    assert client.get(BASE).status_code == 401
    assert client.post(BASE, json={}).status_code == 401


def test_get_me(authed, user):
    resp = authed.get(f"{BASE}/me")
    assert resp.status_code == 200
    profile = resp.get_json()["user"]
    assert set(profile) == {
        "id",
        "email",
        "username",
        "firstName",
        "lastName",
        "confirmed",
        "blocked",
        "createdAt",
        "updatedAt",
    }
    assert profile["id"] == user.id
    assert profile["firstName"] == "Frank"


class TestPatchMe:
    def test_partial_update_keeps_omitted_fields(self, authed):
        resp = authed.patch(f"{BASE}/me", json={"lastName": "Miller"})
        assert resp.status_code == 200
        profile = resp.get_json()["user"]
        assert profile["username"] == "frank"
        assert profile["firstName"] == "Frank"
        assert profile["lastName"] == "Miller"

    def test_null_clears_name(self, authed):
        resp = authed.patch(f"{BASE}/me", json={"firstName": None})
        assert resp.get_json()["user"]["firstName"] is None

    def test_username_change(self, authed):
        resp = authed.patch(f"{BASE}/me", json={"username": "punisher"})
        assert resp.get_json()["user"]["username"] == "punisher"
        assert authed.get(f"{BASE}/me").status_code == 200

    def test_taken_username_conflicts(self, authed):
        UserFactory(username="taken")
        resp = authed.patch(f"{BASE}/me", json={"username": "taken"})
        assert resp.status_code == 409
        assert resp.get_json()["code"] == "username_already_exists"

    def test_invalid_username_is_unprocessable(self, authed):
        resp = authed.patch(f"{BASE}/me", json={"username": "no spaces"})
        assert resp.status_code == 422


def test_delete_me_invalidates_session(authed):
    resp = authed.delete(f"{BASE}/me")
    assert resp.status_code == 204
    assert resp.data == b""

    follow_up = authed.get(f"{BASE}/me")
    assert follow_up.status_code == 401


def test_delete_me_token_rejected_even_when_resent(app, authed, client):
    token = client.get_cookie("auth_token").value
    authed.delete(f"{BASE}/me")
    resp = app.test_client().get(f"{BASE}/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.get_json()["detail"] == "Invalid token"


class TestAdminCreate:
    def test_creates_user(self, authed):
        resp = authed.post(
            BASE,
            json={
                "email": "Karen@Example.com",
                "username": "karen",
                "password": "Passw0rd!",
                "firstName": "Karen",
            },
        )
        assert resp.status_code == 201
        created = resp.get_json()["user"]
        assert created["email"] == "karen@example.com"
        assert created["confirmed"] is True
        assert created["firstName"] == "Karen"
        assert created["lastName"] is None

    def test_new_user_can_log_in(self, app, authed):
        authed.post(BASE, json={"email": "k@example.com", "username": "karen", "password": "Passw0rd!"})
        resp = app.test_client().post(
            "/api/v1/auth/login", json={"emailOrUsername": "karen", "password": "Passw0rd!"}
        )
        assert resp.status_code == 200

    def test_duplicate_email(self, authed, user):
        resp = authed.post(BASE, json={"email": user.email, "username": "other", "password": "Passw0rd!"})
        assert resp.status_code == 409
        assert resp.get_json()["code"] == "email_already_exists"


def test_list_users(authed, user):
    UserFactory()
    resp = authed.get(BASE)
    assert resp.status_code == 200
    users = resp.get_json()["users"]
    assert len(users) == 2
    assert user.id in {u["id"] for u in users}
    assert all("password" not in key.lower() for u in users for key in u)
