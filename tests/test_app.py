"""End-to-end tests for the session middleware and HTTP API."""

from contextlib import asynccontextmanager
from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient
from starlette.concurrency import run_in_threadpool

from conftest import COOKIE_NAME, set_cookie_value
from sessionkit.config import Environment, Settings
from sessionkit.main import create_app
from sessionkit.session import ConfigurationError, FileSessionAdapter, MemorySessionAdapter


@asynccontextmanager
async def lifespan_wrapper(app):
    """Wrap app lifespan for testing."""
    async with app.router.lifespan_context(app):
        yield


@pytest.fixture
def store():
    return MemorySessionAdapter()


@pytest.fixture
def app(store):
    settings = Settings(secret_token="test-secret", environment=Environment.TEST)
    return create_app(settings=settings, adapter=store)


@pytest.fixture
async def client(app):
    """Create async test client with lifespan."""
    async with lifespan_wrapper(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac


def with_cookie(session_id: str) -> dict[str, str]:
    return {"Cookie": f"{COOKIE_NAME}={session_id}"}


class TestHealth:
    """Tests for metadata and probe endpoints."""

    async def test_root(self, client: AsyncClient):
        response = await client.get("/")
        assert response.status_code == 200
        assert response.json()["name"] == "sessionkit"

    async def test_liveness(self, client: AsyncClient):
        response = await client.get("/health/live")
        assert response.json() == {"status": "ok"}

    async def test_readiness(self, client: AsyncClient):
        response = await client.get("/health/ready")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestCookieBinding:
    """Tests for identifier minting and reuse over HTTP."""

    async def test_first_request_gets_cookie(self, client: AsyncClient):
        response = await client.get("/session", headers=with_cookie(""))

        session_id = set_cookie_value(response)
        assert session_id is not None
        assert len(session_id) == 64
        assert response.json()["id"] == session_id

    async def test_cookie_attributes(self, client: AsyncClient):
        response = await client.get("/session")

        header = response.headers.get_list("set-cookie")[0]
        assert "HttpOnly" in header
        assert "Path=/" in header

    async def test_second_request_reuses_id(self, client: AsyncClient):
        """Test that a presented cookie is kept and no new id is minted."""
        first = await client.get("/session")
        session_id = set_cookie_value(first)

        second = await client.get("/session", headers=with_cookie(session_id))

        assert second.json()["id"] == session_id
        assert set_cookie_value(second) == session_id

    async def test_each_new_client_gets_distinct_id(self, client: AsyncClient):
        first = await client.get("/session", headers=with_cookie(""))
        second = await client.get("/session", headers=with_cookie(""))

        assert set_cookie_value(first) != set_cookie_value(second)


class TestSessionValues:
    """Tests for reading and writing session values over HTTP."""

    async def test_set_get_unset(self, client: AsyncClient, store):
        headers = with_cookie("abc123")

        put = await client.put("/session/user", json={"value": "alice"}, headers=headers)
        assert put.status_code == 200
        assert store.load("abc123").data == {"user": "alice"}

        get = await client.get("/session/user", headers=headers)
        assert get.json() == {"key": "user", "value": "alice"}

        delete = await client.delete("/session/user", headers=headers)
        assert delete.status_code == 204

        missing = await client.get("/session/user", headers=headers)
        assert missing.status_code == 404
        assert store.load("abc123").data == {}

    async def test_sessions_are_isolated(self, client: AsyncClient):
        await client.put("/session/user", json={"value": "alice"}, headers=with_cookie("one"))

        response = await client.get("/session/user", headers=with_cookie("two"))

        assert response.status_code == 404

    async def test_flash_key_is_reserved(self, client: AsyncClient):
        response = await client.put("/session/:flash", json={"value": "x"}, headers=with_cookie("abc"))

        assert response.status_code == 400


class TestFlashOverHttp:
    """Tests for flash messages across requests."""

    async def test_flash_seen_exactly_once(self, client: AsyncClient, store):
        headers = with_cookie("abc123")

        posted = await client.post("/flash", json={"message": "Saved!"}, headers=headers)
        assert posted.json() == {"flash": "Saved!", "has_flash": True}

        first = await client.get("/flash", headers=headers)
        assert first.json() == {"flash": "Saved!", "has_flash": True}
        assert ":flash" not in store.load("abc123").data

        second = await client.get("/flash", headers=headers)
        assert second.json() == {"flash": "", "has_flash": False}

    async def test_empty_message_rejected(self, client: AsyncClient):
        response = await client.post("/flash", json={"message": ""}, headers=with_cookie("abc"))

        assert response.status_code == 422


class TestProductionStartup:
    """Tests for secret token enforcement at startup."""

    async def test_refuses_to_start_without_secret(self):
        settings = Settings(secret_token="", environment=Environment.PRODUCTION)
        app = create_app(settings=settings, adapter=MemorySessionAdapter())

        with pytest.raises(ConfigurationError):
            async with lifespan_wrapper(app):
                pass

    async def test_development_starts_with_temporary_secret(self):
        settings = Settings(secret_token="", environment=Environment.DEVELOPMENT)
        app = create_app(settings=settings, adapter=MemorySessionAdapter())

        async with lifespan_wrapper(app):
            async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
                response = await ac.get("/session")

        assert len(set_cookie_value(response)) == 64


class TestFileBackend:
    """Tests for the HTTP surface over the file backend."""

    @pytest.fixture
    async def file_client(self, tmp_path):
        settings = Settings(secret_token="test-secret", environment=Environment.TEST)
        app = create_app(settings=settings, adapter=FileSessionAdapter(tmp_path))
        async with lifespan_wrapper(app):
            async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
                yield ac

    async def test_unstorable_cookie_gets_new_id(self, file_client: AsyncClient):
        """Test that a cookie the store can't hold is replaced instead of failing."""
        response = await file_client.get("/session", headers=with_cookie("a.b"))

        assert response.status_code == 200
        session_id = set_cookie_value(response)
        assert session_id != "a.b"
        assert len(session_id) == 64
        assert response.json()["id"] == session_id

    async def test_overlong_cookie_gets_new_id(self, file_client: AsyncClient):
        response = await file_client.get("/session", headers=with_cookie("a" * 200))

        assert response.status_code == 200
        assert len(set_cookie_value(response)) == 64

    async def test_values_survive_requests(self, file_client: AsyncClient, tmp_path):
        headers = with_cookie("abc123")

        await file_client.put("/session/user", json={"value": "alice"}, headers=headers)
        response = await file_client.get("/session/user", headers=headers)

        assert response.json() == {"key": "user", "value": "alice"}
        assert (tmp_path / "abc123.json").exists()


class TestMiddlewareThreadpool:
    async def test_session_loaded_in_threadpool(self, client: AsyncClient):
        """Test that session establishment is moved off the event loop."""
        with patch(
            "sessionkit.session.middleware.run_in_threadpool", wraps=run_in_threadpool
        ) as spy:
            response = await client.get("/session")

        assert response.status_code == 200
        assert spy.call_count == 1
