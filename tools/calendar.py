"""
Calendar tools — daily and weekly notes.

Responses echo the period used: the given date/week, or the current one.
"""

from typing import Any

from adapters import calendar
from tools.common import ToolSpec, resolve_workspace, unwrap
from tools.params import (
    GetDailyNoteParams,
    GetWeeklyNoteParams,
    WriteDailyNoteParams,
    WriteWeeklyNoteParams,
)


def _daily_payload(note: Any, date: str | None, message: str) -> dict[str, Any]:
    return {"note": note.to_dict(), "date": date or calendar.today(), "message": message}


def _weekly_payload(note: Any, week: int | None, year: int | None, message: str) -> dict[str, Any]:
    if week is None:
        week, year = calendar.current_iso_week()
    return {"note": note.to_dict(), "week": week, "year": year, "message": message}


def get_daily_note(p: GetDailyNoteParams) -> dict[str, Any]:
    note = unwrap(calendar.get_daily_note(p.date, resolve_workspace(p.workspace_id))).data
    return _daily_payload(note, p.date, f"Daily note for {p.date or 'today'} retrieved successfully")


def update_daily_note(p: WriteDailyNoteParams) -> dict[str, Any]:
    note = unwrap(calendar.update_daily_note(p.content, p.date, resolve_workspace(p.workspace_id))).data
    return _daily_payload(note, p.date, f"Daily note for {p.date or 'today'} updated successfully")


def append_to_daily_note(p: WriteDailyNoteParams) -> dict[str, Any]:
    note = unwrap(calendar.append_to_daily_note(p.content, p.date, resolve_workspace(p.workspace_id))).data
    return _daily_payload(note, p.date, f"Content appended to daily note for {p.date or 'today'}")


def get_weekly_note(p: GetWeeklyNoteParams) -> dict[str, Any]:
    note = unwrap(calendar.get_weekly_note(p.week, p.year, resolve_workspace(p.workspace_id))).data
    return _weekly_payload(note, p.week, p.year, "Weekly note retrieved successfully")


def update_weekly_note(p: WriteWeeklyNoteParams) -> dict[str, Any]:
    note = unwrap(calendar.update_weekly_note(
        p.content, p.week, p.year, resolve_workspace(p.workspace_id),
    )).data
    return _weekly_payload(note, p.week, p.year, "Weekly note updated successfully")


def append_to_weekly_note(p: WriteWeeklyNoteParams) -> dict[str, Any]:
    note = unwrap(calendar.append_to_weekly_note(
        p.content, p.week, p.year, resolve_workspace(p.workspace_id),
    )).data
    return _weekly_payload(note, p.week, p.year, "Content appended to weekly note")


TOOLS = {
    "get_daily_note": ToolSpec(GetDailyNoteParams, get_daily_note, "Get today's daily note or a specific date's note. Creates the note automatically if it doesn't exist, using the workspace's default daily template.", "calendar"),
    "update_daily_note": ToolSpec(WriteDailyNoteParams, update_daily_note, "Update the content of today's daily note or a specific date's note. Creates the note first if it doesn't exist.", "calendar"),
    "append_to_daily_note": ToolSpec(WriteDailyNoteParams, append_to_daily_note, "Append content to today's daily note or a specific date's note. Creates the note first if it doesn't exist.", "calendar"),
    "get_weekly_note": ToolSpec(GetWeeklyNoteParams, get_weekly_note, "Get the current week's note or a specific week's note. Creates the note automatically if it doesn't exist, using the workspace's default weekly template.", "calendar"),
    "update_weekly_note": ToolSpec(WriteWeeklyNoteParams, update_weekly_note, "Update the content of the current week's note or a specific week's note. Creates the note first if it doesn't exist.", "calendar"),
    "append_to_weekly_note": ToolSpec(WriteWeeklyNoteParams, append_to_weekly_note, "Append content to the current week's note or a specific week's note. Creates the note first if it doesn't exist.", "calendar"),
}
