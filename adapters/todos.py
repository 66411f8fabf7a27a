"""
Todos adapter — /todo endpoint wrapper.

A todo is tied to a line of its parent note (line_number). Deletion is
soft. toggle_todo() is read-then-write and not atomic against concurrent
edits.
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
    DeleteTodoResult,
    ErrorCode,
    Todo,
    TodoStats,
)

PATH = "/todo"


def _parse_todo(data: dict[str, Any]) -> Todo:
    """Parse a todo from API response."""
    return Todo(
        id=data.get("id", ""),
        text=data.get("text", ""),
        completed=bool(data.get("completed", False)),
        note_id=data.get("noteId", ""),
        line_number=int(data.get("lineNumber") or 0),
        completed_at=data.get("completedAt"),
        is_deleted=bool(data.get("isDeleted", False)),
        workspace_id=data.get("workspaceId"),
        user_id=data.get("userId"),
        created_at=data.get("createdAt"),
        updated_at=data.get("updatedAt"),
    )


def _parse_todos(data: Any) -> list[Todo]:
    return [_parse_todo(item) for item in data or []]


def _parse_delete(data: dict[str, Any]) -> DeleteTodoResult:
    return DeleteTodoResult(
        deleted=bool(data.get("deleted", False)),
        todo_id=data.get("todoId", ""),
        soft_deleted=bool(data.get("softDeleted", True)),
    )


def list_todos(
    workspace_id: str | None = None,
    note_id: str | None = None,
    completed: bool | None = None,
    is_deleted: bool | None = None,
    search: str | None = None,
    sort: str | None = None,
    page: int | None = None,
    limit: int | None = None,
) -> ApiResult[list[Todo]]:
    """
    List todos with optional filtering and pagination.

    Args:
        workspace_id: Restrict to one workspace
        note_id: Restrict to one note
        completed: True/False to filter by state, None for both
        is_deleted: True for deleted todos, None for server default
        search: Text filter
        sort: "field:direction", e.g. "completedAt:desc"
        page: 1-based page number
        limit: Page size
    """
    params = {
        "page": page,
        "limit": limit,
        "workspaceId": workspace_id,
        "noteId": note_id,
        "completed": completed,
        "isDeleted": is_deleted,
        "search": search,
        "sort": sort,
    }
    return map_result(get_client().get(PATH, params), _parse_todos)


def get_todos_for_note(note_id: str, workspace_id: str | None = None) -> ApiResult[list[Todo]]:
    """Todos of one note, oldest first."""
    return list_todos(workspace_id=workspace_id, note_id=note_id, sort="createdAt:asc")


def get_pending_todos(workspace_id: str | None = None, limit: int | None = None) -> ApiResult[list[Todo]]:
    return list_todos(workspace_id=workspace_id, completed=False, limit=limit, sort="createdAt:desc")


def get_completed_todos(workspace_id: str | None = None, limit: int | None = None) -> ApiResult[list[Todo]]:
    return list_todos(workspace_id=workspace_id, completed=True, limit=limit, sort="completedAt:desc")


def get_recently_completed(workspace_id: str | None = None, limit: int = 10) -> ApiResult[list[Todo]]:
    return get_completed_todos(workspace_id, limit)


def search_todos(query: str, workspace_id: str | None = None) -> ApiResult[list[Todo]]:
    return list_todos(workspace_id=workspace_id, search=query, sort="updatedAt:desc")


def get_deleted_todos(workspace_id: str | None = None) -> ApiResult[list[Todo]]:
    return list_todos(workspace_id=workspace_id, is_deleted=True, sort="updatedAt:desc")


def get_todo_by_id(todo_id: str, workspace_id: str | None = None) -> ApiResult[Todo | None]:
    """
    Find a todo by id via listing.

    Returns:
        ApiSuccess(None) when the id is not in the listing (soft miss).
    """
    try:
        todos = fetch_all(
            lambda page, limit: list_todos(workspace_id=workspace_id, page=page, limit=limit)
        )
    except ApiError as e:
        return e.to_failure()
    return ApiSuccess(data=next((t for t in todos if t.id == todo_id), None))


def create_todo(
    text: str,
    note_id: str,
    line_number: int,
    completed: bool = False,
    workspace_id: str | None = None,
) -> ApiResult[Todo]:
    body: dict[str, Any] = {
        "text": text,
        "noteId": note_id,
        "lineNumber": line_number,
        "completed": completed,
    }
    if workspace_id is not None:
        body["workspaceId"] = workspace_id
    return map_result(get_client().post(PATH, body), _parse_todo)


def update_todo(
    todo_id: str,
    text: str | None = None,
    completed: bool | None = None,
    line_number: int | None = None,
) -> ApiResult[Todo]:
    """Update a todo. Fields left as None are not sent."""
    body: dict[str, Any] = {"todoId": todo_id}
    if text is not None:
        body["text"] = text
    if completed is not None:
        body["completed"] = completed
    if line_number is not None:
        body["lineNumber"] = line_number
    return map_result(get_client().put(PATH, body), _parse_todo)


def delete_todo(todo_id: str) -> ApiResult[DeleteTodoResult]:
    """Soft delete."""
    return map_result(get_client().delete(PATH, {"todoId": todo_id}), _parse_delete)


def toggle_todo(todo_id: str, workspace_id: str | None = None) -> ApiResult[Todo]:
    """
    Flip a todo's completion state (read, then write the inverse).

    Returns:
        The updated todo, the lookup/update Failure, or NOT_FOUND.
    """
    current = get_todo_by_id(todo_id, workspace_id)
    if isinstance(current, ApiFailure):
        return current
    if current.data is None:
        return ApiFailure(ErrorCode.NOT_FOUND.value, f"Todo not found: {todo_id}")
    return update_todo(todo_id, completed=not current.data.completed)


def complete_todo(todo_id: str) -> ApiResult[Todo]:
    return update_todo(todo_id, completed=True)


def uncomplete_todo(todo_id: str) -> ApiResult[Todo]:
    return update_todo(todo_id, completed=False)


def update_todo_text(todo_id: str, new_text: str) -> ApiResult[Todo]:
    return update_todo(todo_id, text=new_text)


def move_todo(todo_id: str, new_line_number: int) -> ApiResult[Todo]:
    """Re-anchor a todo to a different line of its note."""
    return update_todo(todo_id, line_number=new_line_number)


def get_all_todos_in_workspace(
    workspace_id: str,
    include_deleted: bool = False,
    include_completed: bool = True,
) -> list[Todo]:
    """
    Every todo in a workspace, across all pages.

    Raises:
        ApiError: If any page fails.
    """
    completed = None if include_completed else False
    return fetch_all(
        lambda page, limit: list_todos(
            workspace_id=workspace_id,
            is_deleted=include_deleted,
            completed=completed,
            page=page,
            limit=limit,
            sort="createdAt:desc",
        )
    )


def get_todo_stats(workspace_id: str | None = None) -> TodoStats:
    """
    Aggregate counts over every todo visible in the workspace.

    completion_rate = completed / (completed + pending) * 100, 0 when empty.

    Raises:
        ApiError: If any page fails.
    """
    todos = fetch_all(
        lambda page, limit: list_todos(workspace_id=workspace_id, page=page, limit=limit)
    )
    completed = sum(1 for t in todos if t.completed)
    pending = sum(1 for t in todos if not t.completed)
    deleted = sum(1 for t in todos if t.is_deleted)
    decided = completed + pending
    return TodoStats(
        total=len(todos),
        completed=completed,
        pending=pending,
        deleted=deleted,
        completion_rate=(completed / decided) * 100 if decided else 0,
    )


def create_todos_for_note(
    note_id: str,
    texts: list[str],
    workspace_id: str | None = None,
    starting_line_number: int = 1,
) -> list[ApiResult[Todo]]:
    """
    Create one todo per text, sequentially, on consecutive lines.

    Never aborts: each item's result (success or failure) is collected
    in input order.
    """
    return [
        create_todo(
            text,
            note_id=note_id,
            line_number=starting_line_number + offset,
            completed=False,
            workspace_id=workspace_id,
        )
        for offset, text in enumerate(texts)
    ]
