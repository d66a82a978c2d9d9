"""Pytest configuration and shared fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

MIME_TYPE = "application/vnd.gremlin-v3.0+json"


@pytest.fixture(scope="module")
def anyio_backend():
    """Configure anyio to use asyncio backend."""
    return "asyncio"


@pytest.fixture(autouse=True)
def clean_gremlin_env(monkeypatch):
    """Keep GREMLIN_* variables from the host out of option resolution."""
    for name in (
        "GREMLIN_TRAVERSAL_SOURCE",
        "GREMLIN_PROCESSOR",
        "GREMLIN_SESSION",
        "GREMLIN_MIME_TYPE",
        "GREMLIN_REJECT_UNAUTHORIZED",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_connection():
    """A stand-in connection whose coroutines are AsyncMocks."""
    connection = MagicMock()
    connection.mime_type = MIME_TYPE
    connection.open = AsyncMock(return_value=None)
    connection.submit = AsyncMock(return_value=[{"id": 1}])
    connection.close = AsyncMock(return_value=None)
    return connection


@pytest.fixture
def connection_factory(fake_connection):
    """Factory handing out ``fake_connection`` and remembering its inputs."""
    calls = []

    def factory(url, options):
        calls.append((url, options))
        return fake_connection

    factory.calls = calls
    return factory
