"""
Note tools — list, search, CRUD and append.
"""

from typing import Any

from adapters import notes
from models import UNSET
from tools.common import ToolSpec, as_dicts, meta_fields, require, resolve_workspace, unwrap
from tools.params import (
    AppendToNoteParams,
    CreateNoteParams,
    DeleteNoteParams,
    GetNoteParams,
    GetRecentNotesParams,
    ListNotesParams,
    SearchNotesParams,
    UpdateNoteParams,
)


def list_notes(p: ListNotesParams) -> dict[str, Any]:
    found = unwrap(notes.list_notes(
        workspace_id=resolve_workspace(p.workspace_id),
        group_id=p.group_id,
        is_deleted=p.is_deleted,
        search=p.search,
        sort=p.sort,
        page=p.page,
        limit=p.limit,
    ))
    return {"notes": as_dicts(found.data), **meta_fields(found.meta)}


def create_note(p: CreateNoteParams) -> dict[str, Any]:
    note = unwrap(notes.create_note(
        p.name, p.content,
        workspace_id=resolve_workspace(p.workspace_id),
        group_id=p.group_id,
    )).data
    return {"note": note.to_dict(), "message": f'Note "{note.name}" created successfully'}


def update_note(p: UpdateNoteParams) -> dict[str, Any]:
    # An explicit null group_id ungroups the note; omitting it leaves the group alone
    group_id = p.group_id if "group_id" in p.model_fields_set else UNSET
    note = unwrap(notes.update_note(p.id, name=p.name, content=p.content, group_id=group_id)).data
    return {"note": note.to_dict(), "message": f'Note "{note.name}" updated successfully'}


def delete_note(p: DeleteNoteParams) -> dict[str, Any]:
    receipt = unwrap(notes.delete_note(p.id)).data
    return {
        "deleted": receipt.deleted,
        "note_id": receipt.note_id,
        "moved_to_trash": receipt.moved_to_trash,
        "message": "Note moved to trash successfully",
    }


def search_notes(p: SearchNotesParams) -> dict[str, Any]:
    found = unwrap(notes.search_notes(p.query, resolve_workspace(p.workspace_id), p.limit)).data
    return {"notes": as_dicts(found), "query": p.query, "count": len(found)}


def get_note(p: GetNoteParams) -> dict[str, Any]:
    note = require(unwrap(notes.get_note_by_id(p.id, resolve_workspace(p.workspace_id))).data, "Note")
    return {"note": note.to_dict()}


def get_recent_notes(p: GetRecentNotesParams) -> dict[str, Any]:
    found = unwrap(notes.get_recent_notes(resolve_workspace(p.workspace_id), p.limit)).data
    return {"notes": as_dicts(found), "count": len(found)}


def append_to_note(p: AppendToNoteParams) -> dict[str, Any]:
    note = unwrap(notes.append_to_note(p.id, p.content, resolve_workspace(p.workspace_id))).data
    return {"note": note.to_dict(), "message": f'Content appended to note "{note.name}"'}


TOOLS = {
    "list_notes": ToolSpec(ListNotesParams, list_notes, "List notes with optional filtering and search capabilities", "notes"),
    "create_note": ToolSpec(CreateNoteParams, create_note, "Create a new note with markdown content", "notes"),
    "update_note": ToolSpec(UpdateNoteParams, update_note, "Update an existing note's content or metadata", "notes"),
    "delete_note": ToolSpec(DeleteNoteParams, delete_note, "Delete a note (moves to trash)", "notes"),
    "search_notes": ToolSpec(SearchNotesParams, search_notes, "Search notes by content or title with full-text search", "notes"),
    "get_note": ToolSpec(GetNoteParams, get_note, "Get a specific note by ID", "notes"),
    "get_recent_notes": ToolSpec(GetRecentNotesParams, get_recent_notes, "Get recently updated notes", "notes"),
    "append_to_note": ToolSpec(AppendToNoteParams, append_to_note, "Append content to an existing note", "notes"),
}
