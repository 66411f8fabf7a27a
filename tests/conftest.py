"""
Shared pytest fixtures for sidvy-mcp tests.

Every test runs with a known environment and fresh config/client caches.
The `fake_api` fixture wires an in-memory fake of the remote service
(tests/fake_api.py) into every adapter through httpx.MockTransport, so
tests exercise the real client, adapters and tools without a network.
"""

from typing import Generator

import httpx
import pytest

from adapters.client import ApiClient
from adapters.services import clear_client_cache
from config import clear_config_cache, get_config
from tests.fake_api import BASE_URL, TOKEN, FakeSidvy

# Modules that bind get_client at import time
ADAPTER_MODULES = [
    "adapters.calendar",
    "adapters.groups",
    "adapters.notes",
    "adapters.todos",
    "adapters.workspaces",
]


@pytest.fixture(autouse=True)
def sidvy_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Known environment; config and client caches cleared around each test."""
    monkeypatch.setenv("SIDVY_API_TOKEN", TOKEN)
    monkeypatch.setenv("SIDVY_API_URL", BASE_URL)
    monkeypatch.setenv("SIDVY_DEFAULT_WORKSPACE_ID", "ws_1")
    monkeypatch.setenv("DEBUG", "false")
    clear_config_cache()
    clear_client_cache()
    yield
    clear_config_cache()
    clear_client_cache()


@pytest.fixture
def fake_api(monkeypatch: pytest.MonkeyPatch) -> Generator[FakeSidvy, None, None]:
    """
    Fake remote service behind every adapter.

    The default workspace "ws_1" (named "Personal") exists from the start.
    """
    fake = FakeSidvy()
    client = ApiClient(get_config(), transport=httpx.MockTransport(fake.handle))
    for module in ADAPTER_MODULES:
        monkeypatch.setattr(f"{module}.get_client", lambda: client)
    yield fake
    client.close()
