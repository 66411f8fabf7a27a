"""
Configuration — Single Source of Truth

Connection settings for the remote note service. This is the only module
that reads the process environment; everything else receives a Config.

Environment (a .env file in the working directory is honoured):
    SIDVY_API_TOKEN             Bearer token (required)
    SIDVY_API_URL               Base URL (default: https://sidvy.com/api)
    SIDVY_DEFAULT_WORKSPACE_ID  Workspace used when a tool omits workspace_id
    DEBUG                       "true" logs request/response diagnostics
"""

import os
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Any

from dotenv import load_dotenv

DEFAULT_API_URL = "https://sidvy.com/api"

# Remote service caps workspaces per user
MAX_WORKSPACES = 2


@dataclass(frozen=True)
class Config:
    """Opaque configuration record consumed by the client and tools."""
    api_url: str = DEFAULT_API_URL
    api_token: str = ""
    default_workspace_id: str | None = None
    debug: bool = False

    def with_changes(self, **changes: Any) -> "Config":
        return replace(self, **changes)


def load_config() -> Config:
    """
    Build a Config from environment variables.

    Raises:
        ValueError: If SIDVY_API_TOKEN is not set
    """
    # Existing environment wins over .env
    load_dotenv(override=False)

    token = os.environ.get("SIDVY_API_TOKEN", "")
    if not token:
        raise ValueError("SIDVY_API_TOKEN environment variable is required")

    return Config(
        api_url=os.environ.get("SIDVY_API_URL") or DEFAULT_API_URL,
        api_token=token,
        default_workspace_id=os.environ.get("SIDVY_DEFAULT_WORKSPACE_ID") or None,
        debug=os.environ.get("DEBUG", "").lower() == "true",
    )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get the process-wide Config (cached)."""
    return load_config()


def clear_config_cache() -> None:
    """Clear cached config. Useful for testing or after changing the token."""
    get_config.cache_clear()
