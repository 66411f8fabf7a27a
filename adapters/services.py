"""
Remote service client initialization.

Shared by all adapters. Reads config, builds one ApiClient.
Uses lru_cache for thread-safe caching.

Adapters import get_client by name, so tests patch it at the usage site
(e.g. "adapters.notes.get_client").
"""

from functools import lru_cache

from adapters.client import ApiClient
from config import get_config

__all__ = [
    "get_client",
    "clear_client_cache",
]


@lru_cache(maxsize=1)
def get_client() -> ApiClient:
    """Get the process-wide API client (cached, thread-safe)."""
    return ApiClient(get_config())


def clear_client_cache() -> None:
    """
    Clear cached client.

    Useful for testing or after the token changes.
    """
    if get_client.cache_info().currsize:
        get_client().close()
    get_client.cache_clear()
