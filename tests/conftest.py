"""
Shared pytest fixtures for all tests.

Example usage:

    def test_something(headers):
        source = headers(("X-Forwarded-For", "1.1.1.1, 2.2.2.2"))
        assert rightmost_x_forwarded_for(source) == IPv4Address("2.2.2.2")
"""

from collections.abc import Callable, Iterator

import pytest

from client_ip.config import get_settings
from client_ip.headers import HeaderList, HeaderValue

SETTINGS_ENV_VARS = ("CLIENT_IP_SOURCE", "CLIENT_IP_FORWARDED_HEADER", "LOG_LEVEL", "LOG_JSON")


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start every test from default settings, regardless of the outer environment."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def headers() -> Callable[..., HeaderList]:
    """Factory building a HeaderList from ``(name, value)`` pairs."""

    def _make(*pairs: tuple[str, HeaderValue]) -> HeaderList:
        return HeaderList(pairs)

    return _make
