"""Pytest configuration and fixtures."""

from http.cookies import SimpleCookie

import httpx
import pytest
from starlette.requests import Request
from starlette.responses import Response

from sessionkit.config import CookieOptions, SecretToken
from sessionkit.session import (
    CookieBinder,
    IdentifierGenerator,
    MemorySessionAdapter,
    SessionAccessor,
)

COOKIE_NAME = "__geniesid"


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate tests from SESSION_* environment variables and cached settings."""
    from sessionkit.config.settings import get_settings

    monkeypatch.setenv("SESSION_SECRET_TOKEN", "test-secret-token")
    monkeypatch.setenv("SESSION_ENVIRONMENT", "test")
    monkeypatch.delenv("SESSION_STORAGE_BACKEND", raising=False)
    get_settings.cache_clear()

    yield

    get_settings.cache_clear()


@pytest.fixture
def secret():
    return SecretToken("test-secret-token")


@pytest.fixture
def generator(secret):
    return IdentifierGenerator(secret, cookie_name=COOKIE_NAME)


@pytest.fixture
def adapter():
    return MemorySessionAdapter()


@pytest.fixture
def accessor(adapter):
    return SessionAccessor(adapter)


@pytest.fixture
def binder(generator, accessor):
    return CookieBinder(generator, accessor, CookieOptions())


def make_request(cookies: dict[str, str] | None = None) -> Request:
    """Build a bare Starlette request carrying the given cookies."""
    headers = []
    if cookies:
        value = "; ".join(f"{name}={val}" for name, val in cookies.items())
        headers.append((b"cookie", value.encode("latin-1")))
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


def make_response(cookies: dict[str, str] | None = None) -> Response:
    """Build a response that already sets the given cookies."""
    response = Response()
    for name, value in (cookies or {}).items():
        response.set_cookie(name, value)
    return response


def set_cookie_value(response: httpx.Response, name: str = COOKIE_NAME) -> str | None:
    """Extract a cookie value from a response's Set-Cookie headers."""
    for header in response.headers.get_list("set-cookie"):
        jar: SimpleCookie = SimpleCookie()
        jar.load(header)
        if name in jar:
            return jar[name].value
    return None
