"""
Shared test helpers for sidvy-mcp.

Centralizes builders and assertions that repeat across test files.
"""

from __future__ import annotations

import random
from typing import Any

from models import Group, GroupTreeNode


def group(id: str, name: str, parent_id: str | None = None, workspace_id: str = "ws_1") -> Group:
    """Build a Group with test defaults."""
    return Group(id=id, name=name, workspace_id=workspace_id, user_id="user_1", parent_id=parent_id)


def shuffled(items: list[Any], seed: int) -> list[Any]:
    """A deterministic permutation of items."""
    copy = list(items)
    random.Random(seed).shuffle(copy)
    return copy


def shape(roots: list[GroupTreeNode]) -> list[tuple[str, list[Any]]]:
    """Tree reduced to (name, children) tuples for compact comparison."""
    return [(node.name, shape(node.children)) for node in roots]


def assert_error(payload: dict[str, Any], kind: str, contains: str = "") -> None:
    """Assert a dispatch payload is a failure of the given kind."""
    assert payload["success"] is False, payload
    assert payload["kind"] == kind, payload
    if contains:
        assert contains in payload["error"], payload
