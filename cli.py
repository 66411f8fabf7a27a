#!/usr/bin/env python3
"""
CLI interface for sidvy-mcp.

Usage:
    sidvy tools
    sidvy call <tool> ['{"json": "args"}']
    sidvy tree <workspace_id>
    sidvy path <group_id> <workspace_id>

This provides the same functionality as the MCP tools but via command line,
making it accessible to agents that don't support MCP.
"""

import argparse
import json
import sys

from adapters import groups
from config import get_config
from hierarchy import render_outline
from logging_config import configure_logging
from models import ApiError
from tools import TOOLS, dispatch


def _print(payload: object) -> None:
    print(json.dumps(payload, indent=2))


def cmd_tools(args: argparse.Namespace) -> None:
    """List available tools, grouped by family."""
    width = max(len(name) for name in TOOLS)
    for name, spec in sorted(TOOLS.items(), key=lambda item: (item[1].category, item[0])):
        print(f"{spec.category:<11} {name:<{width}}  {spec.description}")


def cmd_call(args: argparse.Namespace) -> None:
    """Call one tool with JSON arguments."""
    raw = args.arguments
    if raw == "-":
        raw = sys.stdin.read()
    try:
        arguments = json.loads(raw) if raw else {}
    except json.JSONDecodeError as e:
        print(f"Error: arguments are not valid JSON: {e}", file=sys.stderr)
        sys.exit(2)
    if not isinstance(arguments, dict):
        print("Error: arguments must be a JSON object", file=sys.stderr)
        sys.exit(2)

    result = dispatch(args.tool, arguments)
    _print(result)
    if not result["success"]:
        sys.exit(1)


def cmd_tree(args: argparse.Namespace) -> None:
    """Print a workspace's group tree as an indented outline."""
    try:
        roots = groups.get_group_tree(args.workspace_id)
    except ApiError as e:
        print(f"Error: [{e.code}] {e.message}", file=sys.stderr)
        sys.exit(1)
    print(render_outline(roots) or "(no groups)")


def cmd_path(args: argparse.Namespace) -> None:
    """Print the root-to-group path of one group."""
    try:
        path = groups.get_group_path(args.group_id, args.workspace_id)
    except ApiError as e:
        print(f"Error: [{e.code}] {e.message}", file=sys.stderr)
        sys.exit(1)
    if not path:
        print(f"Group not found: {args.group_id}", file=sys.stderr)
        sys.exit(1)
    print(" > ".join(path))


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Sidvy notes, groups and todos from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    sidvy tools
    sidvy call list_workspaces
    sidvy call create_group_path '{"path": ["Projects", "Web Dev"]}'
    echo '{"query": "standup"}' | sidvy call search_notes -
    sidvy tree ws_123
    sidvy path grp_456 ws_123
""",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # tools
    tools_p = subparsers.add_parser("tools", help="List available tools")
    tools_p.set_defaults(func=cmd_tools)

    # call
    call_p = subparsers.add_parser("call", help="Call a tool with JSON arguments")
    call_p.add_argument("tool", choices=sorted(TOOLS), metavar="tool", help="Tool name (see `sidvy tools`)")
    call_p.add_argument(
        "arguments",
        nargs="?",
        default="",
        help="Tool arguments as a JSON object, or - to read from stdin",
    )
    call_p.set_defaults(func=cmd_call)

    # tree
    tree_p = subparsers.add_parser("tree", help="Print a workspace's group tree")
    tree_p.add_argument("workspace_id", help="Workspace ID")
    tree_p.set_defaults(func=cmd_tree)

    # path
    path_p = subparsers.add_parser("path", help="Print the path to a group")
    path_p.add_argument("group_id", help="Group ID")
    path_p.add_argument("workspace_id", help="Workspace ID")
    path_p.set_defaults(func=cmd_path)

    args = parser.parse_args()

    if args.command != "tools":
        try:
            config = get_config()
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        configure_logging("DEBUG" if config.debug else "WARNING")

    args.func(args)


if __name__ == "__main__":
    main()
