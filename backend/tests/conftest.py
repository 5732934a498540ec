"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
Every test runs against in-memory storage with a fixed signing secret and a
low password hashing cost.
"""

import time

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_container, reset_container
from shared.config import get_settings


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only-0123456789"
TEST_PASSWORD = "correct horse battery staple"


@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    """Pin settings to test values and reset cached services around each test."""
    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("PASSWORD_HASH_ROUNDS", "1000")
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.delenv("ADMIN_EMAIL", raising=False)
    monkeypatch.delenv("ADMIN_PASSWORD", raising=False)
    get_settings.cache_clear()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_container()


@pytest.fixture
def container():
    """The service container the app under test resolves dependencies from."""
    return get_container()


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app):
    """TestClient with the app lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register_user(client):
    """Register through the API and return the response body."""

    def _register(email: str, password: str = TEST_PASSWORD, username=None) -> dict:
        response = client.post(
            "/api/users/register",
            json={"email": email, "password": password, "username": username},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def user_session(register_user) -> dict:
    """A registered regular user: body of the register response."""
    return register_user("alice@example.com", username="alice")


@pytest.fixture
def admin_session(register_user, container) -> dict:
    """A registered user promoted to admin out-of-band."""
    body = register_user("admin@example.com", username="admin")
    container.users.set_admin(body["user_id"], True)
    return body


@pytest.fixture
def auth_headers(user_session) -> dict[str, str]:
    return {"Authorization": f"Bearer {user_session['auth_token']}"}


@pytest.fixture
def admin_headers(admin_session) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin_session['auth_token']}"}


@pytest.fixture
def wait_for_sockets(client):
    """Block until the broker has registered ``count`` live connections."""

    def _wait(count: int, timeout: float = 2.0) -> None:
        deadline = time.monotonic() + timeout
        while client.get("/api/ready").json()["live_connections"] != count:
            assert time.monotonic() < deadline, f"expected {count} live connections"
            time.sleep(0.01)

    return _wait
