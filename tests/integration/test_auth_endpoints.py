"""
Integration tests for /api/auth/*.

- POST /auth/login: success sets the session cookie, 401 for bad credentials, 400 for missing fields
- POST /auth/register: 201 + cookie, invalid invite, email taken, missing fields
- POST /auth/logout: always succeeds and clears the cookie
- GET /auth/me: public view with a session, 401 without

Strategy: repositories are AsyncMock objects injected through conftest.client.
"""

import pytest
from datetime import timedelta

from teamtrain.core.base import utcnow
from teamtrain.core.config import settings
from teamtrain.models.invite import Invite
from teamtrain.models.session import AuthSession
from teamtrain.models.user import User, RoleEnum

pytestmark = pytest.mark.integration


def fake_create_session(user_id, expires_at):
    return AuthSession(id="session-token", user_id=user_id, expires_at=expires_at)


# ---------------------------------------------------------------------------
# POST /auth/login
# ---------------------------------------------------------------------------

async def test_login_success_sets_cookie_and_returns_public_user(client, mock_users, mock_sessions, user_fixture):
    mock_users.get_by_email.return_value = user_fixture
    mock_sessions.create_session.side_effect = fake_create_session

    response = await client.post("/api/auth/login", json={
        "email": "TEST@example.com",
        "password": "password123",
    })

    assert response.status_code == 200
    assert response.json() == {
        "user": {"id": "user1", "name": "Tester", "email": "test@example.com", "role": "user"}
    }
    cookie = response.headers["set-cookie"]
    assert f"{settings.SESSION_COOKIE_NAME}=session-token" in cookie
    assert "HttpOnly" in cookie
    assert "samesite=lax" in cookie.lower()
    assert f"Max-Age={7 * 24 * 3600}" in cookie


async def test_login_cookie_is_not_secure_outside_production(client, mock_users, mock_sessions, user_fixture):
    mock_users.get_by_email.return_value = user_fixture
    mock_sessions.create_session.side_effect = fake_create_session

    response = await client.post("/api/auth/login", json={"email": "test@example.com", "password": "password123"})

    assert "secure" not in response.headers["set-cookie"].lower()


async def test_login_cookie_is_secure_in_production(client, mock_users, mock_sessions, user_fixture, monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")
    mock_users.get_by_email.return_value = user_fixture
    mock_sessions.create_session.side_effect = fake_create_session

    response = await client.post("/api/auth/login", json={"email": "test@example.com", "password": "password123"})

    assert response.status_code == 200
    assert "Secure" in response.headers["set-cookie"]


async def test_login_wrong_password_returns_401(client, mock_users, user_fixture):
    mock_users.get_by_email.return_value = user_fixture

    response = await client.post("/api/auth/login", json={"email": "test@example.com", "password": "nope"})

    assert response.status_code == 401
    assert response.json()["code"] == "invalid_credentials"
    assert "set-cookie" not in response.headers


async def test_login_unknown_email_same_body_as_wrong_password(client, mock_users, user_fixture):
    mock_users.get_by_email.return_value = None
    unknown = await client.post("/api/auth/login", json={"email": "ghost@test.com", "password": "x"})

    mock_users.get_by_email.return_value = user_fixture
    wrong = await client.post("/api/auth/login", json={"email": "test@example.com", "password": "x"})

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json()


async def test_login_missing_fields_returns_400(client):
    response = await client.post("/api/auth/login", json={"email": "test@example.com"})

    assert response.status_code == 400
    assert response.json()["code"] == "missing_fields"


async def test_login_malformed_body_returns_400(client):
    response = await client.post("/api/auth/login", json={"email": ["not", "a", "string"], "password": "x"})

    assert response.status_code == 400
    assert response.json()["code"] == "validation_error"


# ---------------------------------------------------------------------------
# POST /auth/register
# ---------------------------------------------------------------------------

async def test_register_success_returns_201_and_cookie(client, mock_users, mock_invites, mock_sessions):
    mock_invites.get_unused_by_code.return_value = Invite(id="i1", code="ESKADMIN1", created_by="system")
    mock_invites.mark_used.return_value = True
    mock_users.get_by_email.return_value = None
    mock_users.count.return_value = 0
    mock_users.create_user.side_effect = lambda user: setattr(user, "id", "u1") or user
    mock_sessions.create_session.side_effect = fake_create_session

    response = await client.post("/api/auth/register", json={
        "name": "First",
        "email": "first@test.com",
        "password": "secret",
        "inviteCode": "ESKADMIN1",
    })

    assert response.status_code == 201
    assert response.json()["user"] == {"id": "u1", "name": "First", "email": "first@test.com", "role": "admin"}
    assert f"{settings.SESSION_COOKIE_NAME}=session-token" in response.headers["set-cookie"]


async def test_register_invalid_invite_returns_400(client, mock_invites, mock_users):
    mock_invites.get_unused_by_code.return_value = None

    response = await client.post("/api/auth/register", json={
        "name": "X", "email": "x@test.com", "password": "secret", "inviteCode": "USED0001",
    })

    assert response.status_code == 400
    assert response.json()["code"] == "invalid_invite"
    mock_users.create_user.assert_not_called()


async def test_register_email_taken_returns_400(client, mock_invites, mock_users, user_fixture):
    mock_invites.get_unused_by_code.return_value = Invite(id="i1", code="ABC", created_by="system")
    mock_users.get_by_email.return_value = user_fixture

    response = await client.post("/api/auth/register", json={
        "name": "X", "email": "test@example.com", "password": "secret", "inviteCode": "ABC",
    })

    assert response.status_code == 400
    assert response.json()["code"] == "email_taken"


async def test_register_missing_fields_returns_400(client):
    response = await client.post("/api/auth/register", json={"name": "X", "email": "x@test.com"})

    assert response.status_code == 400
    assert response.json()["code"] == "missing_fields"


# ---------------------------------------------------------------------------
# POST /auth/logout, GET /auth/me
# ---------------------------------------------------------------------------

async def test_logout_deletes_session_and_clears_cookie(client, mock_sessions):
    client.cookies.set(settings.SESSION_COOKIE_NAME, "sid-123")

    response = await client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    mock_sessions.delete_session.assert_awaited_once_with("sid-123")
    assert f'{settings.SESSION_COOKIE_NAME}=""' in response.headers["set-cookie"]


async def test_logout_without_session_still_succeeds(client, mock_sessions):
    response = await client.post("/api/auth/logout")

    assert response.status_code == 200
    mock_sessions.delete_session.assert_not_called()


async def test_me_with_valid_session_cookie(client, mock_users, mock_sessions, user_fixture):
    mock_sessions.get_by_id.return_value = AuthSession(
        id="sid", user_id=user_fixture.id, expires_at=utcnow() + timedelta(days=1)
    )
    mock_users.get_by_id.return_value = user_fixture
    client.cookies.set(settings.SESSION_COOKIE_NAME, "sid")

    response = await client.get("/api/auth/me")

    assert response.status_code == 200
    assert response.json() == {"id": "user1", "name": "Tester", "email": "test@example.com", "role": "user"}
    assert "password" not in response.text


async def test_me_with_expired_session_returns_401(client, mock_users, mock_sessions, user_fixture):
    mock_sessions.get_by_id.return_value = AuthSession(
        id="sid", user_id=user_fixture.id, expires_at=utcnow() - timedelta(minutes=1)
    )
    client.cookies.set(settings.SESSION_COOKIE_NAME, "sid")

    response = await client.get("/api/auth/me")

    assert response.status_code == 401
    mock_sessions.delete_session.assert_awaited_once_with("sid")


async def test_me_without_session_returns_401_json(client):
    response = await client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.json() == {"error": "Not logged in", "code": "not_authenticated"}
