"""Test the directory service endpoints."""

from contextlib import asynccontextmanager

import pytest
from httpx import ASGITransport, AsyncClient

from mentionbox import __version__
from mentionbox.directory import HttpDirectoryProvider
from mentionbox.main import app


@asynccontextmanager
async def lifespan_wrapper(app):
    """Wrap app lifespan for testing."""
    async with app.router.lifespan_context(app):
        yield


@pytest.fixture
async def client():
    """Create async test client with lifespan."""
    async with lifespan_wrapper(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac


async def test_root(client: AsyncClient):
    """Test root endpoint returns API metadata."""
    response = await client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "mentionbox"
    assert data["version"] == __version__
    assert data["trigger"] == "@"


async def test_liveness(client: AsyncClient):
    """Test liveness check returns ok."""
    response = await client.get("/health/live")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_readiness(client: AsyncClient):
    """Test readiness reports the loaded directory size."""
    response = await client.get("/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "user_count": 5}


async def test_users_sorted_wire_shape(client: AsyncClient):
    """Test that /users returns wire records sorted by name."""
    response = await client.get("/users")
    assert response.status_code == 200
    data = response.json()
    assert [record["name"] for record in data] == [
        "Ada Lovelace",
        "Chris Brown",
        "Oliver Millard",
        "Oliver Young",
        "anna zed",
    ]
    assert set(data[0]) == {"username", "name", "avatar_url"}


async def test_http_provider_against_service(client: AsyncClient):
    """Test that HttpDirectoryProvider reads the service's directory."""
    provider = HttpDirectoryProvider("http://test/users", http_client=client)

    entries = await provider.fetch_directory()

    assert entries[0].handle == "ada"
    assert len(entries) == 5


async def test_not_ready_without_directory(monkeypatch, tmp_path):
    """Test readiness and /users when the directory file is missing."""
    from mentionbox.config.settings import get_settings

    monkeypatch.setenv("MENTIONBOX_DIRECTORY_PATH", str(tmp_path / "missing.json"))
    get_settings.cache_clear()

    async with lifespan_wrapper(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            ready = await ac.get("/health/ready")
            users = await ac.get("/users")

    assert ready.status_code == 503
    assert ready.json()["reason"] == "directory not loaded"
    assert users.status_code == 503
