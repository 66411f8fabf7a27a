"""
Hierarchy — Pure functions over group snapshots.

No MCP awareness, no HTTP calls. Flat list of Group in, tree or path out.
The remote half of the engine (moves, path materialization) lives in
adapters/groups.py.
"""

from .tree import (
    build_group_tree,
    collation_key,
    group_path,
    iter_tree,
    render_outline,
)

__all__ = [
    "build_group_tree",
    "collation_key",
    "group_path",
    "iter_tree",
    "render_outline",
]
