"""
Groups adapter — /group endpoint wrapper plus the remote half of the
hierarchy engine.

Single-call operations return ApiResult and never raise. Operations that
need the whole workspace (tree, path) drain pages via fetch_all and raise
ApiError when a page fails.

Group path materialization is strictly sequential: each level's lookup
depends on the id resolved at the previous level. It is not atomic; a
failure midway leaves earlier levels in place, and re-running reuses them.
"""

from typing import Any

from adapters.client import map_result
from adapters.pagination import fetch_all
from adapters.services import get_client
from hierarchy import build_group_tree, group_path
from logging_config import logger
from models import (
    ApiError,
    ApiFailure,
    ApiResult,
    ApiSuccess,
    DeleteGroupResult,
    Group,
    GroupTreeNode,
    UNSET,
)

PATH = "/group"


def _parse_group(data: dict[str, Any]) -> Group:
    """Parse a group from API response."""
    return Group(
        id=data.get("id", ""),
        name=data.get("name", ""),
        workspace_id=data.get("workspaceId", ""),
        user_id=data.get("userId", ""),
        parent_id=data.get("parentId") or None,
        created_at=data.get("createdAt"),
        updated_at=data.get("updatedAt"),
    )


def _parse_groups(data: Any) -> list[Group]:
    return [_parse_group(item) for item in data or []]


def _parse_delete(data: dict[str, Any]) -> DeleteGroupResult:
    return DeleteGroupResult(
        deleted=bool(data.get("deleted", False)),
        group_id=data.get("groupId", ""),
        deleted_child_groups=int(data.get("deletedChildGroups", 0)),
    )


def list_groups(
    workspace_id: str | None = None,
    parent_id: str | None = None,
    search: str | None = None,
    sort: str | None = None,
    page: int | None = None,
    limit: int | None = None,
) -> ApiResult[list[Group]]:
    """
    List groups with optional filtering and pagination.

    Args:
        workspace_id: Restrict to one workspace
        parent_id: Restrict to direct children of this group
        search: Name filter
        sort: "field:direction", e.g. "name:asc"
        page: 1-based page number
        limit: Page size
    """
    params = {
        "page": page,
        "limit": limit,
        "workspaceId": workspace_id,
        "parentId": parent_id,
        "search": search,
        "sort": sort,
    }
    return map_result(get_client().get(PATH, params), _parse_groups)


def get_all_groups_in_workspace(workspace_id: str) -> list[Group]:
    """
    Every group in a workspace, across all pages.

    Raises:
        ApiError: If any page fails.
    """
    return fetch_all(
        lambda page, limit: list_groups(
            workspace_id=workspace_id, page=page, limit=limit, sort="name:asc",
        )
    )


def _children_of(parent_id: str | None, workspace_id: str | None) -> list[Group]:
    """
    Direct children of parent_id (roots when None), across all pages.

    The listing is also filtered locally so a server that ignores the
    parentId filter cannot leak groups from other levels.
    """
    groups = fetch_all(
        lambda page, limit: list_groups(
            workspace_id=workspace_id, parent_id=parent_id, page=page, limit=limit, sort="name:asc",
        )
    )
    return [group for group in groups if group.parent_id == parent_id]


def get_root_groups(workspace_id: str | None = None) -> ApiResult[list[Group]]:
    """Top-level groups (no parent), sorted by name, across all pages."""
    try:
        return ApiSuccess(data=_children_of(None, workspace_id))
    except ApiError as e:
        return e.to_failure()


def get_child_groups(parent_id: str, workspace_id: str | None = None) -> ApiResult[list[Group]]:
    """Direct children of a group, sorted by name, across all pages."""
    try:
        return ApiSuccess(data=_children_of(parent_id, workspace_id))
    except ApiError as e:
        return e.to_failure()


def get_group_by_id(group_id: str, workspace_id: str | None = None) -> ApiResult[Group | None]:
    """
    Find a group by id via listing.

    Returns:
        ApiSuccess(None) when the id is not in the listing (soft miss).
    """
    try:
        groups = fetch_all(
            lambda page, limit: list_groups(workspace_id=workspace_id, page=page, limit=limit)
        )
    except ApiError as e:
        return e.to_failure()
    return ApiSuccess(data=next((g for g in groups if g.id == group_id), None))


def search_groups(query: str, workspace_id: str | None = None) -> ApiResult[list[Group]]:
    return list_groups(workspace_id=workspace_id, search=query, sort="name:asc")


def create_group(
    name: str,
    workspace_id: str | None = None,
    parent_id: str | None = None,
) -> ApiResult[Group]:
    """Create a group; parent_id None creates it at the root."""
    body: dict[str, Any] = {"name": name}
    if workspace_id is not None:
        body["workspaceId"] = workspace_id
    if parent_id is not None:
        body["parentId"] = parent_id
    return map_result(get_client().post(PATH, body), _parse_group)


def update_group(
    group_id: str,
    name: str | None = None,
    parent_id: Any = UNSET,
) -> ApiResult[Group]:
    """
    Update a group's name and/or parent.

    name=None and parent_id=UNSET are not sent; parent_id=None moves to the root.
    """
    body: dict[str, Any] = {"groupId": group_id}
    if name is not None:
        body["name"] = name
    if parent_id is not UNSET:
        body["parentId"] = parent_id
    return map_result(get_client().put(PATH, body), _parse_group)


def delete_group(group_id: str) -> ApiResult[DeleteGroupResult]:
    """Delete a group and, on the remote side, all of its descendants."""
    return map_result(get_client().delete(PATH, {"groupId": group_id}), _parse_delete)


def move_group(group_id: str, new_parent_id: str | None = None) -> ApiResult[Group]:
    """
    Move a group under a new parent, or to the root when new_parent_id is None.

    No client-side validation: the remote service rejects cycles and
    cross-workspace moves, and its result is returned unchanged.
    """
    body = {"groupId": group_id, "parentId": new_parent_id or None}
    return map_result(get_client().put(PATH, body), _parse_group)


def rename_group(group_id: str, new_name: str) -> ApiResult[Group]:
    return update_group(group_id, name=new_name)


def get_group_tree(workspace_id: str) -> list[GroupTreeNode]:
    """
    Build the full group forest for a workspace.

    Raises:
        ApiError: If fetching the snapshot fails.
    """
    return build_group_tree(get_all_groups_in_workspace(workspace_id))


def get_group_path(group_id: str, workspace_id: str) -> list[str]:
    """
    Root-first names for a group; [] if it is not in the workspace.

    Raises:
        ApiError: If fetching the snapshot fails.
    """
    return group_path(group_id, get_all_groups_in_workspace(workspace_id))


def create_group_path(names: list[str], workspace_id: str | None = None) -> ApiResult[list[Group]]:
    """
    Materialize a chain of nested groups, reusing existing ones.

    At each level, a group whose name matches exactly (case-sensitive)
    under the current parent is reused; otherwise one is created there.

    Args:
        names: Group names, root first
        workspace_id: Workspace to create in (remote default when None)

    Returns:
        ApiSuccess with one Group per name (root first), or the first
        Failure encountered. Levels resolved before a failure are kept.
    """
    resolved: list[Group] = []
    parent_id: str | None = None

    for name in names:
        try:
            siblings = _children_of(parent_id, workspace_id)
        except ApiError as e:
            return e.to_failure()

        group = next((g for g in siblings if g.name == name), None)
        if group is None:
            created = create_group(name, workspace_id=workspace_id, parent_id=parent_id)
            if isinstance(created, ApiFailure):
                return created
            group = created.data
            logger.debug(f"Created group {name!r} ({group.id}) under {parent_id}")

        resolved.append(group)
        parent_id = group.id

    return ApiSuccess(data=resolved)
