"""
Shared fixtures: in-memory database, test client and signed-in users.
"""
import os

# Must be set before the app reads its settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DEFAULT_ADMIN_USERNAME"] = "Admin"
os.environ["DEFAULT_ADMIN_PASSWORD"] = "admin-pass"

import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.db.base import Base
from app.db.init_db import bootstrap
from app.db.session import SessionLocal, engine
from app.main import app


@pytest.fixture(autouse=True)
def fresh_database():
    """Recreate all tables and the seeded admin for every test."""
    Base.metadata.drop_all(bind=engine)
    bootstrap()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def login(client):
    """Log in and return request headers carrying the token."""
    def _login(username, password):
        response = client.post("/api/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return bearer(response.json()["data"]["token"])
    return _login


@pytest.fixture
def admin_headers(login):
    return login(settings.DEFAULT_ADMIN_USERNAME, settings.DEFAULT_ADMIN_PASSWORD)


@pytest.fixture
def member(client, login):
    """Register a member account and return its auth headers."""
    def _member(username, password="secret123"):
        response = client.post("/api/register", json={"username": username, "password": password})
        assert response.status_code == 201, response.text
        return login(username, password)
    return _member


@pytest.fixture
def create_trip(client):
    def _create_trip(headers, **fields):
        body = {"route": "North loop", "start_date": "2026-01-10", "km_start": 100, "km_end": 250}
        body.update(fields)
        response = client.post("/api/trips", json=body, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]["id"]
    return _create_trip
