"""
Workspaces adapter — /workspace endpoint wrapper.

The remote service caps workspaces at MAX_WORKSPACES per user, keeps
exactly one default, and refuses to delete the default. The
*_if_possible / *_with_confirmation helpers check those rules locally
first so the caller gets a clear FORBIDDEN / VALIDATION_ERROR.
"""

from typing import Any

from adapters.client import map_result
from adapters.pagination import fetch_all
from adapters.services import get_client
from config import MAX_WORKSPACES
from models import (
    ApiError,
    ApiFailure,
    ApiResult,
    ApiSuccess,
    ContentCounts,
    DeleteWorkspaceResult,
    ErrorCode,
    Workspace,
    WorkspaceStats,
)

PATH = "/workspace"

# Two workspaces per user at most, so a small page is plenty
PAGE_SIZE = 10


def _parse_counts(data: Any) -> ContentCounts | None:
    if not isinstance(data, dict):
        return None
    return ContentCounts(
        notes=int(data.get("notes", 0)),
        groups=int(data.get("groups", 0)),
        todos=int(data.get("todos", 0)),
    )


def _parse_workspace(data: dict[str, Any]) -> Workspace:
    """Parse a workspace from API response."""
    return Workspace(
        id=data.get("id", ""),
        name=data.get("name", ""),
        user_id=data.get("userId", ""),
        is_default=bool(data.get("isDefault", False)),
        content_counts=_parse_counts(data.get("contentCounts")),
        created_at=data.get("createdAt"),
        updated_at=data.get("updatedAt"),
    )


def _parse_workspaces(data: Any) -> list[Workspace]:
    return [_parse_workspace(item) for item in data or []]


def _parse_delete(data: dict[str, Any]) -> DeleteWorkspaceResult:
    return DeleteWorkspaceResult(
        deleted=bool(data.get("deleted", False)),
        workspace_id=data.get("workspaceId", ""),
        deleted_content=_parse_counts(data.get("deletedContent")) or ContentCounts(),
    )


def _stats_for(workspace: Workspace) -> WorkspaceStats:
    return WorkspaceStats(
        id=workspace.id,
        name=workspace.name,
        is_default=workspace.is_default,
        content_counts=workspace.content_counts or ContentCounts(),
        created_at=workspace.created_at,
        updated_at=workspace.updated_at,
    )


def _find(predicate: Any) -> ApiResult[Workspace | None]:
    """First workspace matching predicate; ApiSuccess(None) on a soft miss."""
    result = list_workspaces()
    if isinstance(result, ApiFailure):
        return result
    return ApiSuccess(data=next((w for w in result.data if predicate(w)), None))


def list_workspaces(page: int | None = None, limit: int | None = None) -> ApiResult[list[Workspace]]:
    """List the authenticated user's workspaces."""
    params = {"page": page, "limit": limit}
    return map_result(get_client().get(PATH, params), _parse_workspaces)


def get_all_workspaces() -> list[Workspace]:
    """
    Every workspace, across all pages.

    Raises:
        ApiError: If any page fails.
    """
    return fetch_all(lambda page, limit: list_workspaces(page=page, limit=limit), page_size=PAGE_SIZE)


def get_default_workspace() -> ApiResult[Workspace | None]:
    return _find(lambda w: w.is_default)


def get_workspace_by_id(workspace_id: str) -> ApiResult[Workspace | None]:
    return _find(lambda w: w.id == workspace_id)


def get_workspace_by_name(name: str) -> ApiResult[Workspace | None]:
    """Case-insensitive name lookup."""
    wanted = name.casefold()
    return _find(lambda w: w.name.casefold() == wanted)


def switch_workspace(workspace_id: str) -> ApiResult[Workspace | None]:
    """
    Resolve a workspace to switch context to.

    Makes no remote change: the active workspace is whatever id the
    caller passes on later calls.
    """
    return get_workspace_by_id(workspace_id)


def create_workspace(name: str) -> ApiResult[Workspace]:
    return map_result(get_client().post(PATH, {"name": name}), _parse_workspace)


def update_workspace(workspace_id: str, name: str | None = None) -> ApiResult[Workspace]:
    body: dict[str, Any] = {"workspaceId": workspace_id}
    if name is not None:
        body["name"] = name
    return map_result(get_client().put(PATH, body), _parse_workspace)


def rename_workspace(workspace_id: str, new_name: str) -> ApiResult[Workspace]:
    return update_workspace(workspace_id, name=new_name)


def delete_workspace(workspace_id: str) -> ApiResult[DeleteWorkspaceResult]:
    """Delete a workspace and all its content. No local checks."""
    return map_result(get_client().delete(PATH, {"workspaceId": workspace_id}), _parse_delete)


def can_create_workspace() -> bool:
    """
    True while the user is under the workspace limit.

    Raises:
        ApiError: If the workspace listing fails.
    """
    return len(get_all_workspaces()) < MAX_WORKSPACES


def get_workspace_stats(workspace_id: str | None = None) -> ApiResult[WorkspaceStats | None]:
    """
    Content counts for one workspace (the default one when workspace_id is None).

    Returns:
        ApiSuccess(None) when the workspace is not found.
    """
    found = get_workspace_by_id(workspace_id) if workspace_id else get_default_workspace()
    return map_result(found, lambda w: _stats_for(w) if w is not None else None)


def get_all_workspace_stats() -> list[WorkspaceStats]:
    """
    Raises:
        ApiError: If any page fails.
    """
    return [_stats_for(w) for w in get_all_workspaces()]


def create_workspace_if_possible(name: str) -> ApiResult[Workspace]:
    """
    Create a workspace after checking the limit and name uniqueness.

    Returns:
        FORBIDDEN at the limit, VALIDATION_ERROR on a duplicate name
        (case-insensitive), otherwise the create result.
    """
    try:
        allowed = can_create_workspace()
    except ApiError as e:
        return e.to_failure()
    if not allowed:
        return ApiFailure(
            ErrorCode.FORBIDDEN.value,
            f"Maximum number of workspaces reached ({MAX_WORKSPACES} per user)",
        )

    existing = get_workspace_by_name(name)
    if isinstance(existing, ApiFailure):
        return existing
    if existing.data is not None:
        return ApiFailure(ErrorCode.VALIDATION_ERROR.value, "Workspace with this name already exists")

    return create_workspace(name)


def delete_workspace_with_confirmation(
    workspace_id: str,
    confirm_delete: bool = False,
) -> ApiResult[DeleteWorkspaceResult]:
    """
    Delete a workspace only when confirmed and not the default.

    Returns:
        VALIDATION_ERROR without confirmation, NOT_FOUND for an unknown id,
        FORBIDDEN for the default workspace, otherwise the delete result.
    """
    if not confirm_delete:
        return ApiFailure(
            ErrorCode.VALIDATION_ERROR.value,
            "Workspace deletion requires explicit confirmation due to data loss",
        )

    found = get_workspace_by_id(workspace_id)
    if isinstance(found, ApiFailure):
        return found
    if found.data is None:
        return ApiFailure(ErrorCode.NOT_FOUND.value, f"Workspace not found: {workspace_id}")
    if found.data.is_default:
        return ApiFailure(ErrorCode.FORBIDDEN.value, "Cannot delete default workspace")

    return delete_workspace(workspace_id)
