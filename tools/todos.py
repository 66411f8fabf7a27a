"""
Todo tools — CRUD, completion state, stats and bulk creation.
"""

from typing import Any

from adapters import todos
from models import ApiFailure
from tools.common import ToolSpec, as_dicts, meta_fields, resolve_workspace, unwrap
from tools.params import (
    CreateTodoParams,
    CreateTodosForNoteParams,
    GetTodoStatsParams,
    GetTodosForNoteParams,
    ListTodosParams,
    SearchTodosParams,
    TodoIdParams,
    TodoListParams,
    UpdateTodoParams,
)


def _todo_payload(todo: Any, message: str) -> dict[str, Any]:
    return {"todo": todo.to_dict(), "message": message}


def list_todos(p: ListTodosParams) -> dict[str, Any]:
    found = unwrap(todos.list_todos(
        workspace_id=resolve_workspace(p.workspace_id),
        note_id=p.note_id,
        completed=p.completed,
        is_deleted=p.is_deleted,
        search=p.search,
        sort=p.sort,
        page=p.page,
        limit=p.limit,
    ))
    return {"todos": as_dicts(found.data), **meta_fields(found.meta)}


def create_todo(p: CreateTodoParams) -> dict[str, Any]:
    todo = unwrap(todos.create_todo(
        p.text, p.note_id, p.line_number,
        completed=p.completed,
        workspace_id=resolve_workspace(p.workspace_id),
    )).data
    return _todo_payload(todo, f'Todo "{todo.text}" created successfully')


def update_todo(p: UpdateTodoParams) -> dict[str, Any]:
    todo = unwrap(todos.update_todo(
        p.todo_id, text=p.text, completed=p.completed, line_number=p.line_number,
    )).data
    return _todo_payload(todo, f'Todo "{todo.text}" updated successfully')


def delete_todo(p: TodoIdParams) -> dict[str, Any]:
    receipt = unwrap(todos.delete_todo(p.todo_id)).data
    return {
        "deleted": receipt.deleted,
        "todo_id": receipt.todo_id,
        "soft_deleted": receipt.soft_deleted,
        "message": "Todo deleted successfully",
    }


def toggle_todo(p: TodoIdParams) -> dict[str, Any]:
    todo = unwrap(todos.toggle_todo(p.todo_id, resolve_workspace(None))).data
    status = "completed" if todo.completed else "incomplete"
    return _todo_payload(todo, f'Todo "{todo.text}" marked as {status}')


def complete_todo(p: TodoIdParams) -> dict[str, Any]:
    todo = unwrap(todos.complete_todo(p.todo_id)).data
    return _todo_payload(todo, f'Todo "{todo.text}" marked as completed')


def uncomplete_todo(p: TodoIdParams) -> dict[str, Any]:
    todo = unwrap(todos.uncomplete_todo(p.todo_id)).data
    return _todo_payload(todo, f'Todo "{todo.text}" marked as incomplete')


def get_pending_todos(p: TodoListParams) -> dict[str, Any]:
    found = unwrap(todos.get_pending_todos(resolve_workspace(p.workspace_id), p.limit)).data
    return {"todos": as_dicts(found), "count": len(found), "type": "pending"}


def get_completed_todos(p: TodoListParams) -> dict[str, Any]:
    found = unwrap(todos.get_completed_todos(resolve_workspace(p.workspace_id), p.limit)).data
    return {"todos": as_dicts(found), "count": len(found), "type": "completed"}


def get_todos_for_note(p: GetTodosForNoteParams) -> dict[str, Any]:
    found = unwrap(todos.get_todos_for_note(p.note_id, resolve_workspace(p.workspace_id))).data
    return {"todos": as_dicts(found), "note_id": p.note_id, "count": len(found)}


def get_todo_stats(p: GetTodoStatsParams) -> dict[str, Any]:
    stats = todos.get_todo_stats(resolve_workspace(p.workspace_id))
    return {
        "stats": stats.to_dict(),
        "message": (
            f"Todo statistics: {stats.completed}/{stats.total} completed "
            f"({stats.completion_rate:.1f}%)"
        ),
    }


def search_todos(p: SearchTodosParams) -> dict[str, Any]:
    found = unwrap(todos.search_todos(p.query, resolve_workspace(p.workspace_id))).data
    return {"todos": as_dicts(found), "query": p.query, "count": len(found)}


def create_todos_for_note(p: CreateTodosForNoteParams) -> dict[str, Any]:
    """Partial success is reported per item: created and failed counts plus each failure."""
    results = todos.create_todos_for_note(
        p.note_id,
        list(p.todo_texts),
        workspace_id=resolve_workspace(p.workspace_id),
        starting_line_number=p.starting_line_number,
    )
    created = [r.data for r in results if not isinstance(r, ApiFailure)]
    failures = [
        {"index": i, "text": p.todo_texts[i], "kind": r.code, "error": r.message}
        for i, r in enumerate(results)
        if isinstance(r, ApiFailure)
    ]
    return {
        "todos": as_dicts(created),
        "created": len(created),
        "failed": len(failures),
        "failures": failures,
        "message": f"Created {len(created)} todos for note ({len(failures)} failed)",
    }


TOOLS = {
    "list_todos": ToolSpec(ListTodosParams, list_todos, "List todos with filtering by completion status, note, or workspace", "todos"),
    "create_todo": ToolSpec(CreateTodoParams, create_todo, "Create a new todo item linked to a note", "todos"),
    "update_todo": ToolSpec(UpdateTodoParams, update_todo, "Update a todo's text, completion status, or line number", "todos"),
    "delete_todo": ToolSpec(TodoIdParams, delete_todo, "Delete a todo (soft delete)", "todos"),
    "toggle_todo": ToolSpec(TodoIdParams, toggle_todo, "Toggle a todo's completion status", "todos"),
    "complete_todo": ToolSpec(TodoIdParams, complete_todo, "Mark a todo as completed", "todos"),
    "uncomplete_todo": ToolSpec(TodoIdParams, uncomplete_todo, "Mark a todo as incomplete", "todos"),
    "get_pending_todos": ToolSpec(TodoListParams, get_pending_todos, "Get all pending (incomplete) todos", "todos"),
    "get_completed_todos": ToolSpec(TodoListParams, get_completed_todos, "Get completed todos, most recently completed first", "todos"),
    "get_todos_for_note": ToolSpec(GetTodosForNoteParams, get_todos_for_note, "Get all todos for a specific note", "todos"),
    "get_todo_stats": ToolSpec(GetTodoStatsParams, get_todo_stats, "Get todo statistics and completion rates", "todos"),
    "search_todos": ToolSpec(SearchTodosParams, search_todos, "Search todos by text content", "todos"),
    "create_todos_for_note": ToolSpec(CreateTodosForNoteParams, create_todos_for_note, "Create multiple todos for a note on consecutive lines", "todos"),
}
