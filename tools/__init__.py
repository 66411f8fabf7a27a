"""
Tools — MCP tool implementations.

One module per resource family; each exposes a TOOLS table mapping tool
name to ToolSpec (params model, handler, description). server.py provides
thin @mcp.tool() wrappers that forward to dispatch().

Families:
- notes: CRUD, search, append
- groups: CRUD and the hierarchy (tree, path, move, path materialization)
- todos: CRUD, completion state, stats, bulk creation
- workspaces: listing, limits, stats, guarded create/delete
- calendar: daily and weekly notes
"""

from .common import ToolSpec
from .dispatch import dispatch
from . import calendar, groups, notes, todos, workspaces

# Single source of truth for tool names
TOOLS: dict[str, ToolSpec] = {
    **notes.TOOLS,
    **groups.TOOLS,
    **todos.TOOLS,
    **workspaces.TOOLS,
    **calendar.TOOLS,
}

__all__ = ["TOOLS", "ToolSpec", "dispatch"]
