#!/usr/bin/env python3
"""
Sidvy MCP Server

Exposes the Sidvy note service (notes, groups, todos, workspaces, daily
and weekly notes) as MCP tools over stdio.

Tools come straight from the TOOLS registry: each tool advertises its
params model's JSON schema, and a call hands the raw arguments dict to
tools.dispatch(), which validates it against that closed schema, runs
the handler and shapes the response. Unknown arguments are rejected and
an explicit null stays distinct from an omitted argument. A failed call
is raised as ToolError so the MCP response carries isError=True with the
structured error payload as text.

Documentation is provided via MCP Resources:
- sidvy://docs/overview
- sidvy://tools/{tool_name} (generated from the tool registry)

Architecture:
- hierarchy/: Pure functions (no MCP, no API calls)
- adapters/: Thin REST wrappers for the remote service
- tools/: Parameter schemas, handlers and dispatch
- server.py: MCP wiring (this file)
"""

import json
import os
import signal
import sys
from typing import Any, Sequence

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from mcp.types import TextContent, Tool

from config import get_config
from logging_config import configure_logging, logger
from resources.tools import get_tool_registry
from tools import TOOLS, dispatch


class SidvyMCP(FastMCP):
    """
    FastMCP serving the TOOLS registry.

    FastMCP's own tools build an argument model from a function signature
    and drop keys it does not name. Here list_tools and call_tool are
    answered from the registry instead, so the params models are both the
    advertised schema and the validator.
    """

    async def list_tools(self) -> list[Tool]:
        return [
            Tool(name=name, description=spec.description, inputSchema=spec.params.model_json_schema())
            for name, spec in TOOLS.items()
        ]

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> Sequence[TextContent]:
        result = dispatch(name, arguments)
        if not result["success"]:
            raise ToolError(json.dumps(result))
        return [TextContent(type="text", text=json.dumps(result))]


# Initialize MCP server
mcp = SidvyMCP("Sidvy")


# ============================================================================
# RESOURCES
# ============================================================================

@mcp.resource("sidvy://docs/overview")
def docs_overview() -> str:
    """Overview of the tool families and conventions."""
    return """# Sidvy MCP

Notes, groups, todos, workspaces and calendar notes in the Sidvy note service.

## Conventions

- Arguments are snake_case (`workspace_id`, `group_id`, ...).
- `workspace_id` is optional on most tools; the configured default
  workspace (`SIDVY_DEFAULT_WORKSPACE_ID`) is used when it is omitted.
- Successful responses carry `"success": true`.
- Failures are returned as errors whose text is a JSON object:
  `{"success": false, "error", "kind", "tool_name", "arguments"}`.
  `kind` is one of UNAUTHORIZED, VALIDATION_ERROR, NOT_FOUND, FORBIDDEN,
  INTERNAL_ERROR, MALFORMED_REQUEST, HTTP_ERROR, NETWORK_ERROR.
- Unknown arguments are rejected with VALIDATION_ERROR.
- On updates, an omitted field is left alone and an explicit null clears
  it: `update_group` with `parent_id: null` moves the group to the root,
  `update_note` with `group_id: null` takes the note out of its group.

## Groups

Groups form a tree inside a workspace. Useful tools:

| Tool | Does |
|------|------|
| `get_group_tree` | Whole tree, siblings sorted by name, with depth and ancestors |
| `get_group_path` | Names from root to a group (`Projects > Web Dev`) |
| `move_group` | Re-parent a group; omit `new_parent_id` for the root level |
| `create_group_path` | Create `["Projects", "Web Dev"]`, reusing existing groups |

Deleting a group deletes its child groups too.

## Notes and todos

Deleted notes and todos go to the trash (soft delete); pass
`is_deleted=true` to list them. Todos belong to a note line.

## Workspaces

At most 2 workspaces per user. The default workspace cannot be deleted,
and `delete_workspace` requires `confirm_delete=true`.

## Calendar

`get_daily_note` / `get_weekly_note` create the note from the workspace
template on first access. Weeks are ISO weeks; give `week` and `year`
together or neither.

Per-tool reference: `sidvy://tools/{tool_name}`.
"""


# Register tools for sidvy://tools/* resource generation
_tool_registry = get_tool_registry()
_tool_registry.register_all(TOOLS)


@mcp.resource("sidvy://tools/{tool_name}")
def tool_resource(tool_name: str) -> str:
    """Generated documentation for a specific tool from its schema."""
    try:
        resource = _tool_registry.get_resource(f"sidvy://tools/{tool_name}")
        return resource["text"]
    except KeyError:
        return f"# {tool_name}()\n\nTool not found."


# ============================================================================
# SERVER ENTRY POINT
# ============================================================================

def _shutdown_handler(signum: int, frame: object) -> None:
    """Handle termination signals by exiting immediately.

    os._exit() is required because sys.exit() raises SystemExit,
    which asyncio's event loop catches and ignores. The server
    would survive SIGTERM until stdin closes.
    """
    os._exit(0)


def main() -> None:
    try:
        config = get_config()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging("DEBUG" if config.debug else "INFO")
    logger.info(f"Starting Sidvy MCP server ({len(TOOLS)} tools, API {config.api_url})")

    signal.signal(signal.SIGTERM, _shutdown_handler)
    signal.signal(signal.SIGINT, _shutdown_handler)
    mcp.run()


if __name__ == "__main__":
    main()
