"""Configure pytest fixtures and environment for storedash tests."""

import pytest
import pytest_asyncio

from storedash.api import client as client_module
from storedash.core.config import reset_settings
from tests.fakes import FakeBackend, make_client

ENV_KEYS = [
    "ENVIRONMENT",
    "DEBUG",
    "API_BASE_URL",
    "API_WITH_CREDENTIALS",
    "REQUEST_TIMEOUT",
    "API_TOKEN",
    "API_TOKEN_FILE",
    "TOKEN_STRATEGY",
    "TOKEN_FAILURE_POLICY",
    "QUERY_RETRIES",
    "PLACEHOLDER_ON_ERROR",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Isolate every test from the caller's environment, .env file and global state."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(client_module, "_api_client", None)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest_asyncio.fixture
async def api_client(backend):
    client = make_client(backend)
    yield client
    await client.aclose()
