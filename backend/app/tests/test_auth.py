"""
Tests for authentication endpoints and the request guard.
"""
from datetime import timedelta
import asyncio
import time

import httpx

from app.core.exceptions import AUTHENTICATION_FAILED
from app.core.security import Role, create_access_token
from app.main import app
from app.models.user import User
from app.schemas.user import Token
from app.services.user_service import UserService


def test_signup(client):
    """Test user signup."""
    response = client.post(
        "/api/register",
        json={"username": "testuser", "password": "testpassword123"}
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["username"] == "testuser"
    assert data["is_admin"] is False
    assert "password" not in data and "hashed_password" not in data


def test_signup_duplicate_username(client, db):
    """Duplicate usernames are rejected and nothing is created."""
    client.post("/api/register", json={"username": "dup", "password": "one"})
    response = client.post("/api/register", json={"username": "dup", "password": "two"})
    assert response.status_code == 400
    assert response.json() == {"error": "Username already exists"}
    assert db.query(User).filter(User.username == "dup").count() == 1


def test_usernames_are_case_sensitive(client):
    assert client.post("/api/register", json={"username": "carol", "password": "x"}).status_code == 201
    assert client.post("/api/register", json={"username": "Carol", "password": "x"}).status_code == 201


def test_anonymous_cannot_register_admin(client, db):
    response = client.post("/api/register", json={"username": "sneaky", "password": "x", "is_admin": True})
    assert response.status_code == 403
    assert db.query(User).filter(User.username == "sneaky").count() == 0


def test_member_cannot_register_admin(client, member):
    headers = member("alice")
    response = client.post(
        "/api/register", json={"username": "sneaky", "password": "x", "is_admin": True}, headers=headers
    )
    assert response.status_code == 403


def test_admin_can_register_admin(client, admin_headers):
    response = client.post(
        "/api/register", json={"username": "deputy", "password": "x", "is_admin": True}, headers=admin_headers
    )
    assert response.status_code == 201
    assert response.json()["data"]["is_admin"] is True


def test_registration_closed_requires_admin(client, admin_headers, monkeypatch):
    from app.core.config import settings
    monkeypatch.setattr(settings, "ALLOW_SELF_REGISTRATION", False)

    response = client.post("/api/register", json={"username": "walkin", "password": "x"})
    assert response.status_code == 401

    response = client.post("/api/register", json={"username": "walkin", "password": "x"}, headers=admin_headers)
    assert response.status_code == 201


def test_login(client):
    """Test user login."""
    client.post("/api/register", json={"username": "testuser2", "password": "testpassword123"})

    response = client.post(
        "/api/login",
        json={"username": "testuser2", "password": "testpassword123"}
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["token"]
    assert data["user"] == "testuser2"
    assert data["role"] == "member"
    assert data["isAdmin"] is False


def test_login_seeded_admin(client):
    response = client.post("/api/login", json={"username": "Admin", "password": "admin-pass"})
    assert response.status_code == 200
    assert response.json()["data"]["role"] == "admin"


def test_login_invalid_credentials(client):
    """Test login with invalid credentials."""
    response = client.post(
        "/api/login",
        json={"username": "nonexistent", "password": "wrongpassword"}
    )
    assert response.status_code == 401

    client.post("/api/register", json={"username": "real", "password": "right"})
    response = client.post("/api/login", json={"username": "real", "password": "wrong"})
    assert response.status_code == 401


def test_login_malformed_body(client):
    response = client.post("/api/login", json={"username": "x"})
    assert response.status_code == 400
    assert "error" in response.json()


def test_protected_route_without_header(client):
    response = client.get("/api/trips")
    assert response.status_code == 401
    assert response.json() == {"error": AUTHENTICATION_FAILED}
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_guard_failures_are_indistinguishable(client):
    expired = create_access_token("alice", False, expires_delta=timedelta(seconds=-5))
    headers = [
        {"Authorization": "Token abc"},
        {"Authorization": "Bearer"},
        {"Authorization": "bearer " + create_access_token("alice", False)},
        {"Authorization": "Bearer not-a-jwt"},
        {"Authorization": f"Bearer {expired}"},
    ]
    for header in headers:
        response = client.get("/api/trips", headers=header)
        assert response.status_code == 401, header
        assert response.json() == {"error": AUTHENTICATION_FAILED}


def test_valid_token_reaches_route(client, member):
    headers = member("alice")
    response = client.get("/api/trips", headers=headers)
    assert response.status_code == 200
    assert response.json()["data"] == []


def test_slow_logins_run_concurrently(monkeypatch):
    """Blocking work in one request must not hold up the others."""
    delay = 0.5

    def slow_login(self, username, password):
        time.sleep(delay)
        return Token(token="t", role=Role.MEMBER, isAdmin=False, user=username)

    monkeypatch.setattr(UserService, "login", slow_login)

    async def login_three_times():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
            return await asyncio.gather(*[
                http.post("/api/login", json={"username": f"user{i}", "password": "pw"})
                for i in range(3)
            ])

    started = time.monotonic()
    responses = asyncio.run(login_three_times())
    elapsed = time.monotonic() - started

    assert [r.status_code for r in responses] == [200, 200, 200]
    assert elapsed < delay * 2.5
