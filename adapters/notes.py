"""
Notes adapter — /note endpoint wrapper.

Deletion is soft: a deleted note stays listable with is_deleted=True.
append_to_note() is read-then-write and not atomic against concurrent
edits; the remote service is the only consistency authority.
"""

from typing import Any

from adapters.client import map_result
from adapters.pagination import fetch_all
from adapters.services import get_client
from models import (
    ApiError,
    ApiFailure,
    ApiResult,
    ApiSuccess,
    DeleteNoteResult,
    ErrorCode,
    Note,
    UNSET,
)

PATH = "/note"


def parse_note(data: dict[str, Any]) -> Note:
    """Parse a note from API response."""
    return Note(
        id=data.get("id", ""),
        name=data.get("name", ""),
        content=data.get("content") or "",
        workspace_id=data.get("workspaceId", ""),
        group_id=data.get("groupId") or None,
        is_deleted=bool(data.get("isDeleted", False)),
        deleted_at=data.get("deletedAt"),
        is_encrypted=bool(data.get("isEncrypted", False)),
        user_id=data.get("userId"),
        created_at=data.get("createdAt"),
        updated_at=data.get("updatedAt"),
    )


def _parse_notes(data: Any) -> list[Note]:
    return [parse_note(item) for item in data or []]


def _parse_delete(data: dict[str, Any]) -> DeleteNoteResult:
    return DeleteNoteResult(
        deleted=bool(data.get("deleted", False)),
        note_id=data.get("noteId", ""),
        moved_to_trash=bool(data.get("movedToTrash", True)),
    )


def list_notes(
    workspace_id: str | None = None,
    group_id: str | None = None,
    is_deleted: bool | None = None,
    search: str | None = None,
    sort: str | None = None,
    page: int | None = None,
    limit: int | None = None,
) -> ApiResult[list[Note]]:
    """
    List notes with optional filtering and pagination.

    Args:
        workspace_id: Restrict to one workspace
        group_id: Restrict to one group
        is_deleted: True for trash, False for live notes, None for server default
        search: Text filter on name and content
        sort: "field:direction", e.g. "updatedAt:desc"
        page: 1-based page number
        limit: Page size
    """
    params = {
        "page": page,
        "limit": limit,
        "workspaceId": workspace_id,
        "groupId": group_id,
        "isDeleted": is_deleted,
        "search": search,
        "sort": sort,
    }
    return map_result(get_client().get(PATH, params), _parse_notes)


def search_notes(query: str, workspace_id: str | None = None, limit: int = 20) -> ApiResult[list[Note]]:
    """Search notes by name or content, most recently updated first."""
    return list_notes(workspace_id=workspace_id, search=query, limit=limit, sort="updatedAt:desc")


def get_note_by_id(note_id: str, workspace_id: str | None = None) -> ApiResult[Note | None]:
    """
    Find a note by id via listing.

    Returns:
        ApiSuccess(None) when the id is not in the listing (soft miss).
    """
    try:
        notes = fetch_all(
            lambda page, limit: list_notes(workspace_id=workspace_id, page=page, limit=limit)
        )
    except ApiError as e:
        return e.to_failure()
    return ApiSuccess(data=next((n for n in notes if n.id == note_id), None))


def get_notes_by_group(group_id: str, workspace_id: str | None = None) -> ApiResult[list[Note]]:
    return list_notes(workspace_id=workspace_id, group_id=group_id, sort="updatedAt:desc")


def get_recent_notes(workspace_id: str | None = None, limit: int = 10) -> ApiResult[list[Note]]:
    """Most recently updated notes."""
    return list_notes(workspace_id=workspace_id, limit=limit, sort="updatedAt:desc")


def get_deleted_notes(workspace_id: str | None = None) -> ApiResult[list[Note]]:
    """Notes in the trash."""
    return list_notes(workspace_id=workspace_id, is_deleted=True, sort="updatedAt:desc")


def get_all_notes_in_workspace(workspace_id: str, include_deleted: bool = False) -> list[Note]:
    """
    Every note in a workspace, across all pages.

    Raises:
        ApiError: If any page fails.
    """
    return fetch_all(
        lambda page, limit: list_notes(
            workspace_id=workspace_id,
            is_deleted=include_deleted,
            page=page,
            limit=limit,
            sort="updatedAt:desc",
        )
    )


def create_note(
    name: str,
    content: str = "",
    workspace_id: str | None = None,
    group_id: str | None = None,
) -> ApiResult[Note]:
    body: dict[str, Any] = {"name": name, "content": content}
    if workspace_id is not None:
        body["workspaceId"] = workspace_id
    if group_id is not None:
        body["groupId"] = group_id
    return map_result(get_client().post(PATH, body), parse_note)


def update_note(
    note_id: str,
    name: str | None = None,
    content: str | None = None,
    group_id: Any = UNSET,
) -> ApiResult[Note]:
    """
    Update a note. Fields left as None (or UNSET for group_id) are not sent.

    group_id=None moves the note out of its group.
    """
    body: dict[str, Any] = {"id": note_id}
    if name is not None:
        body["name"] = name
    if content is not None:
        body["content"] = content
    if group_id is not UNSET:
        body["groupId"] = group_id
    return map_result(get_client().put(PATH, body), parse_note)


def delete_note(note_id: str) -> ApiResult[DeleteNoteResult]:
    """Soft delete: moves the note to the trash."""
    return map_result(get_client().delete(PATH, {"id": note_id}), _parse_delete)


def append_to_note(note_id: str, content: str, workspace_id: str | None = None) -> ApiResult[Note]:
    """
    Append content to a note, separated by a blank line.

    No separator is added when the note is currently empty.

    Returns:
        The updated note, the lookup/update Failure, or NOT_FOUND.
    """
    current = get_note_by_id(note_id, workspace_id)
    if isinstance(current, ApiFailure):
        return current
    if current.data is None:
        return ApiFailure(ErrorCode.NOT_FOUND.value, f"Note not found: {note_id}")

    existing = current.data.content
    updated = f"{existing}\n\n{content}" if existing else content
    return update_note(note_id, content=updated)
