"""
Workspace tools — listing, limits, stats and guarded create/delete.
"""

from typing import Any

from adapters import workspaces
from config import MAX_WORKSPACES
from tools.common import ToolSpec, require, unwrap
from tools.params import (
    CreateWorkspaceParams,
    DeleteWorkspaceParams,
    GetWorkspaceByNameParams,
    GetWorkspaceStatsParams,
    ListWorkspacesParams,
    NoParams,
    RenameWorkspaceParams,
    UpdateWorkspaceParams,
    WorkspaceIdParams,
)


def list_workspaces(p: ListWorkspacesParams) -> dict[str, Any]:
    found = unwrap(workspaces.list_workspaces()).data
    rendered = [w.to_dict() for w in found]
    if not p.include_stats:
        for item in rendered:
            item.pop("content_counts", None)
    default = next((w for w in found if w.is_default), None)
    return {
        "workspaces": rendered,
        "count": len(found),
        "default_workspace": default.id if default else None,
        "max_workspaces": MAX_WORKSPACES,
        "can_create_more": len(found) < MAX_WORKSPACES,
    }


def create_workspace(p: CreateWorkspaceParams) -> dict[str, Any]:
    workspace = unwrap(workspaces.create_workspace_if_possible(p.name)).data
    return {"workspace": workspace.to_dict(), "message": f'Workspace "{workspace.name}" created successfully'}


def update_workspace(p: UpdateWorkspaceParams) -> dict[str, Any]:
    workspace = unwrap(workspaces.update_workspace(p.workspace_id, name=p.name)).data
    return {"workspace": workspace.to_dict(), "message": f'Workspace "{workspace.name}" updated successfully'}


def delete_workspace(p: DeleteWorkspaceParams) -> dict[str, Any]:
    receipt = unwrap(workspaces.delete_workspace_with_confirmation(p.workspace_id, p.confirm_delete)).data
    counts = receipt.deleted_content
    return {
        "deleted": receipt.deleted,
        "workspace_id": receipt.workspace_id,
        "deleted_content": counts.to_dict(),
        "message": (
            f"Workspace deleted successfully. Deleted {counts.notes} notes, "
            f"{counts.groups} groups, and {counts.todos} todos."
        ),
    }


def get_workspace(p: WorkspaceIdParams) -> dict[str, Any]:
    workspace = require(unwrap(workspaces.get_workspace_by_id(p.workspace_id)).data, "Workspace")
    return {"workspace": workspace.to_dict()}


def get_default_workspace(p: NoParams) -> dict[str, Any]:
    workspace = require(unwrap(workspaces.get_default_workspace()).data, "Default workspace")
    return {"workspace": workspace.to_dict(), "is_default": True}


def get_workspace_by_name(p: GetWorkspaceByNameParams) -> dict[str, Any]:
    workspace = require(
        unwrap(workspaces.get_workspace_by_name(p.name)).data,
        f'Workspace with name "{p.name}"',
    )
    return {"workspace": workspace.to_dict(), "search_name": p.name}


def get_workspace_stats(p: GetWorkspaceStatsParams) -> dict[str, Any]:
    stats = require(unwrap(workspaces.get_workspace_stats(p.workspace_id)).data, "Workspace")
    counts = stats.content_counts
    return {
        "stats": stats.to_dict(),
        "total_content": counts.total,
        "message": (
            f'Workspace "{stats.name}" contains {counts.notes} notes, '
            f"{counts.groups} groups, and {counts.todos} todos"
        ),
    }


def can_create_workspace(p: NoParams) -> dict[str, Any]:
    current = len(workspaces.get_all_workspaces())
    return {
        "can_create": current < MAX_WORKSPACES,
        "current_count": current,
        "max_allowed": MAX_WORKSPACES,
        "remaining_slots": max(0, MAX_WORKSPACES - current),
    }


def switch_workspace(p: WorkspaceIdParams) -> dict[str, Any]:
    workspace = require(unwrap(workspaces.switch_workspace(p.workspace_id)).data, "Workspace")
    return {
        "workspace": workspace.to_dict(),
        "current_workspace_id": workspace.id,
        "message": f'Switched to workspace "{workspace.name}"',
    }


def rename_workspace(p: RenameWorkspaceParams) -> dict[str, Any]:
    workspace = unwrap(workspaces.rename_workspace(p.workspace_id, p.new_name)).data
    return {
        "workspace": workspace.to_dict(),
        "new_name": workspace.name,
        "message": f'Workspace renamed to "{workspace.name}"',
    }


TOOLS = {
    "list_workspaces": ToolSpec(ListWorkspacesParams, list_workspaces, "List all workspaces for the authenticated user with content counts", "workspaces"),
    "create_workspace": ToolSpec(CreateWorkspaceParams, create_workspace, "Create a new workspace (max 2 workspaces per user)", "workspaces"),
    "update_workspace": ToolSpec(UpdateWorkspaceParams, update_workspace, "Update a workspace (currently only name changes supported)", "workspaces"),
    "delete_workspace": ToolSpec(DeleteWorkspaceParams, delete_workspace, "Delete a workspace and all its content (cannot delete default workspace)", "workspaces"),
    "get_workspace": ToolSpec(WorkspaceIdParams, get_workspace, "Get details of a specific workspace", "workspaces"),
    "get_default_workspace": ToolSpec(NoParams, get_default_workspace, "Get the user's default workspace", "workspaces"),
    "get_workspace_by_name": ToolSpec(GetWorkspaceByNameParams, get_workspace_by_name, "Find a workspace by its name (case-insensitive)", "workspaces"),
    "get_workspace_stats": ToolSpec(GetWorkspaceStatsParams, get_workspace_stats, "Get detailed statistics for a workspace", "workspaces"),
    "can_create_workspace": ToolSpec(NoParams, can_create_workspace, "Check if the user can create another workspace (max 2 allowed)", "workspaces"),
    "switch_workspace": ToolSpec(WorkspaceIdParams, switch_workspace, "Switch context to a different workspace (for subsequent operations)", "workspaces"),
    "rename_workspace": ToolSpec(RenameWorkspaceParams, rename_workspace, "Rename an existing workspace", "workspaces"),
}
