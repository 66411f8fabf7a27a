"""
Calendar adapter — /daily and /weekly derived notes.

The remote service creates a daily or weekly note on first read, using
the workspace's template. Without a date (or week+year) the current
period is used.

Daily notes are addressed by date ("YYYY-MM-DD"); weekly notes by ISO
week number and ISO week-numbering year, which must be given together.
"""

from datetime import datetime, timezone
from typing import Any

from adapters.client import map_result
from adapters.notes import parse_note
from adapters.services import get_client
from models import ApiFailure, ApiResult, ErrorCode, Note

DAILY_PATH = "/daily"
WEEKLY_PATH = "/weekly"


def today() -> str:
    """Current UTC date as YYYY-MM-DD."""
    return datetime.now(timezone.utc).date().isoformat()


def current_iso_week() -> tuple[int, int]:
    """Current (week, year) per ISO 8601, in UTC."""
    iso = datetime.now(timezone.utc).date().isocalendar()
    return iso[1], iso[0]


def _week_mismatch(week: int | None, year: int | None) -> ApiFailure | None:
    if (week is None) != (year is None):
        return ApiFailure(
            ErrorCode.VALIDATION_ERROR.value,
            "Both week and year must be provided together, or neither",
        )
    return None


def _appended(existing: str, content: str) -> str:
    return f"{existing}\n\n{content}" if existing else content


def get_daily_note(date: str | None = None, workspace_id: str | None = None) -> ApiResult[Note]:
    """Daily note for date (today when None); created remotely if missing."""
    params = {"date": date, "workspaceId": workspace_id or None}
    return map_result(get_client().get(DAILY_PATH, params), parse_note)


def update_daily_note(
    content: str,
    date: str | None = None,
    workspace_id: str | None = None,
) -> ApiResult[Note]:
    """Replace a daily note's content."""
    body: dict[str, Any] = {"content": content}
    if workspace_id is not None:
        body["workspaceId"] = workspace_id
    if date is not None:
        body["date"] = date
    return map_result(get_client().put(DAILY_PATH, body), parse_note)


def append_to_daily_note(
    content: str,
    date: str | None = None,
    workspace_id: str | None = None,
) -> ApiResult[Note]:
    """Append to a daily note, blank-line separated when it already has content."""
    current = get_daily_note(date, workspace_id)
    if isinstance(current, ApiFailure):
        return current
    return update_daily_note(_appended(current.data.content, content), date, workspace_id)


def get_weekly_note(
    week: int | None = None,
    year: int | None = None,
    workspace_id: str | None = None,
) -> ApiResult[Note]:
    """Weekly note for week/year (current week when both None)."""
    mismatch = _week_mismatch(week, year)
    if mismatch is not None:
        return mismatch
    params = {"week": week, "year": year, "workspaceId": workspace_id or None}
    return map_result(get_client().get(WEEKLY_PATH, params), parse_note)


def update_weekly_note(
    content: str,
    week: int | None = None,
    year: int | None = None,
    workspace_id: str | None = None,
) -> ApiResult[Note]:
    """Replace a weekly note's content."""
    mismatch = _week_mismatch(week, year)
    if mismatch is not None:
        return mismatch
    body: dict[str, Any] = {"content": content}
    if workspace_id is not None:
        body["workspaceId"] = workspace_id
    if week is not None:
        body["week"] = week
        body["year"] = year
    return map_result(get_client().put(WEEKLY_PATH, body), parse_note)


def append_to_weekly_note(
    content: str,
    week: int | None = None,
    year: int | None = None,
    workspace_id: str | None = None,
) -> ApiResult[Note]:
    """Append to a weekly note, blank-line separated when it already has content."""
    current = get_weekly_note(week, year, workspace_id)
    if isinstance(current, ApiFailure):
        return current
    return update_weekly_note(_appended(current.data.content, content), week, year, workspace_id)
