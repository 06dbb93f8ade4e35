"""Test fixtures — a fresh in-memory store per test.

Learn: Testing pattern for FastAPI + httpx:

1. Each test gets its own Store, injected through dependency_overrides
   on get_store, so nothing leaks between tests.
2. Requests go through httpx.AsyncClient over ASGITransport, i.e. the
   real app with its middleware, auth gate and error handlers, without
   opening a socket.
3. bcrypt runs at its minimum work factor so registering users is cheap.
"""

import os
import uuid

# Must be set before tasktrack.config builds its settings singleton
os.environ.setdefault("TASKTRACK_BCRYPT_ROUNDS", "4")
os.environ.setdefault("TASKTRACK_ENVIRONMENT", "development")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from tasktrack.db.store import Store, get_store
from tasktrack.main import app


@pytest.fixture()
def store():
    """Per-test store. Also installed as the app's store."""
    fresh = Store()
    app.dependency_overrides[get_store] = lambda: fresh
    yield fresh
    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def client(store):
    """HTTP client against the app, backed by the per-test store."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def register_user(client):
    """Factory: register a fresh user.

    Returns the response body (id, name, email, token) plus a ready-made
    "headers" dict carrying the bearer token.
    """

    async def _register(name: str = "User", email: str = None, password: str = "pass12345"):
        email = email or f"user-{uuid.uuid4().hex[:8]}@example.com"
        r = await client.post(
            "/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert r.status_code == 201, r.text
        user = r.json()
        user["headers"] = {"Authorization": f"Bearer {user['token']}"}
        return user

    return _register


@pytest_asyncio.fixture()
async def auth_headers(register_user):
    """Authorization headers for one registered user."""
    user = await register_user()
    return user["headers"]
