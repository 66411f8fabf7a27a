"""
Group tools — CRUD plus the hierarchy operations (tree, path, move,
path materialization).
"""

from typing import Any

from adapters import groups
from hierarchy import render_outline
from models import UNSET
from tools.common import ToolSpec, as_dicts, meta_fields, resolve_workspace, unwrap
from tools.params import (
    CreateGroupParams,
    CreateGroupPathParams,
    DeleteGroupParams,
    GetChildGroupsParams,
    GetGroupPathParams,
    GetGroupTreeParams,
    GetRootGroupsParams,
    ListGroupsParams,
    MoveGroupParams,
    UpdateGroupParams,
)

PATH_SEPARATOR = " > "


def list_groups(p: ListGroupsParams) -> dict[str, Any]:
    found = unwrap(groups.list_groups(
        workspace_id=resolve_workspace(p.workspace_id),
        parent_id=p.parent_id,
        search=p.search,
        sort=p.sort,
        page=p.page,
        limit=p.limit,
    ))
    return {"groups": as_dicts(found.data), **meta_fields(found.meta)}


def create_group(p: CreateGroupParams) -> dict[str, Any]:
    group = unwrap(groups.create_group(
        p.name, workspace_id=resolve_workspace(p.workspace_id), parent_id=p.parent_id,
    )).data
    return {"group": group.to_dict(), "message": f'Group "{group.name}" created successfully'}


def update_group(p: UpdateGroupParams) -> dict[str, Any]:
    # Explicit null parent_id moves to the root; omitted leaves the parent alone
    parent_id = p.parent_id if "parent_id" in p.model_fields_set else UNSET
    group = unwrap(groups.update_group(p.group_id, name=p.name, parent_id=parent_id)).data
    return {"group": group.to_dict(), "message": f'Group "{group.name}" updated successfully'}


def delete_group(p: DeleteGroupParams) -> dict[str, Any]:
    receipt = unwrap(groups.delete_group(p.group_id)).data
    return {
        "deleted": receipt.deleted,
        "group_id": receipt.group_id,
        "deleted_child_groups": receipt.deleted_child_groups,
        "message": f"Group deleted successfully (including {receipt.deleted_child_groups} child groups)",
    }


def get_group_tree(p: GetGroupTreeParams) -> dict[str, Any]:
    roots = groups.get_group_tree(p.workspace_id)
    return {
        "tree": as_dicts(roots),
        "outline": render_outline(roots),
        "message": f"Retrieved group tree for workspace {p.workspace_id}",
    }


def get_root_groups(p: GetRootGroupsParams) -> dict[str, Any]:
    found = unwrap(groups.get_root_groups(resolve_workspace(p.workspace_id))).data
    return {"groups": as_dicts(found), "count": len(found)}


def get_child_groups(p: GetChildGroupsParams) -> dict[str, Any]:
    found = unwrap(groups.get_child_groups(p.parent_id, resolve_workspace(p.workspace_id))).data
    return {"groups": as_dicts(found), "parent_id": p.parent_id, "count": len(found)}


def get_group_path(p: GetGroupPathParams) -> dict[str, Any]:
    """An unknown group yields an empty path with found=False, not an error."""
    path = groups.get_group_path(p.group_id, p.workspace_id)
    return {
        "path": path,
        "path_string": PATH_SEPARATOR.join(path),
        "group_id": p.group_id,
        "found": bool(path),
    }


def move_group(p: MoveGroupParams) -> dict[str, Any]:
    group = unwrap(groups.move_group(p.group_id, p.new_parent_id)).data
    return {"group": group.to_dict(), "message": f'Group "{group.name}" moved successfully'}


def create_group_path(p: CreateGroupPathParams) -> dict[str, Any]:
    created = unwrap(groups.create_group_path(p.path, resolve_workspace(p.workspace_id))).data
    path_string = PATH_SEPARATOR.join(p.path)
    return {
        "groups": as_dicts(created),
        "path": list(p.path),
        "path_string": path_string,
        "message": f'Group path "{path_string}" created successfully',
    }


TOOLS = {
    "list_groups": ToolSpec(ListGroupsParams, list_groups, "List groups with hierarchical structure and filtering", "groups"),
    "create_group": ToolSpec(CreateGroupParams, create_group, "Create a new group for organizing notes", "groups"),
    "update_group": ToolSpec(UpdateGroupParams, update_group, "Update a group's name or move it in the hierarchy", "groups"),
    "delete_group": ToolSpec(DeleteGroupParams, delete_group, "Delete a group and all its child groups (cascade delete)", "groups"),
    "get_group_tree": ToolSpec(GetGroupTreeParams, get_group_tree, "Get the hierarchical tree structure of all groups in a workspace", "groups"),
    "get_root_groups": ToolSpec(GetRootGroupsParams, get_root_groups, "Get all root-level groups (groups with no parent)", "groups"),
    "get_child_groups": ToolSpec(GetChildGroupsParams, get_child_groups, "Get all child groups of a specific parent group", "groups"),
    "get_group_path": ToolSpec(GetGroupPathParams, get_group_path, "Get the full path from root to a specific group", "groups"),
    "move_group": ToolSpec(MoveGroupParams, move_group, "Move a group to a new parent (or to root level)", "groups"),
    "create_group_path": ToolSpec(CreateGroupPathParams, create_group_path, "Create a nested group structure from a path (creates missing parent groups)", "groups"),
}
