"""
Tool parameter schemas.

One closed pydantic model per tool: unknown arguments are rejected
(extra="forbid") and types, lengths and ranges are checked once, here,
before any handler runs.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

NoteSort = Literal[
    "name:asc", "name:desc",
    "createdAt:asc", "createdAt:desc",
    "updatedAt:asc", "updatedAt:desc",
]
GroupSort = NoteSort
TodoSort = Literal[
    "text:asc", "text:desc",
    "completed:asc", "completed:desc",
    "createdAt:asc", "createdAt:desc",
    "updatedAt:asc", "updatedAt:desc",
    "completedAt:asc", "completedAt:desc",
]

Id = Annotated[str, Field(min_length=1)]
WorkspaceId = Annotated[str, Field(min_length=1, description="Workspace ID (optional, uses default)")]
Limit = Annotated[int, Field(ge=1, le=100, description="Number of results to return")]
Page = Annotated[int, Field(ge=1, description="1-based page number")]
NoteName = Annotated[str, Field(min_length=1, max_length=200)]
GroupName = Annotated[str, Field(min_length=1, max_length=100)]
WorkspaceName = Annotated[str, Field(min_length=1, max_length=100)]
TodoText = Annotated[str, Field(min_length=1, max_length=500)]
LineNumber = Annotated[int, Field(ge=1, description="Line number in the note")]
Query = Annotated[str, Field(min_length=1, description="Search query")]
Date = Annotated[str, Field(pattern=DATE_PATTERN, description="Date in YYYY-MM-DD format (defaults to today)")]
Week = Annotated[int, Field(ge=1, le=53, description="ISO week number. Must be provided with year.")]
Year = Annotated[int, Field(ge=1970, le=2100, description="ISO week-numbering year. Must be provided with week.")]


class ToolParams(BaseModel):
    """Base for all tool parameter models: closed schema."""
    model_config = ConfigDict(extra="forbid")


class _WeekSelector(ToolParams):
    week: Week | None = None
    year: Year | None = None

    @model_validator(mode="after")
    def _week_and_year_together(self) -> "_WeekSelector":
        if (self.week is None) != (self.year is None):
            raise ValueError("Both week and year must be provided together, or neither")
        return self


# ============================================================================
# NOTES
# ============================================================================

class ListNotesParams(ToolParams):
    workspace_id: WorkspaceId | None = None
    group_id: Id | None = None
    search: str | None = Field(default=None, description="Search notes by name or content")
    is_deleted: bool | None = Field(default=None, description="Include deleted notes (default: false)")
    sort: NoteSort | None = None
    limit: Limit | None = None
    page: Page | None = None


class CreateNoteParams(ToolParams):
    name: NoteName
    content: str = Field(default="", description="Note content in markdown format")
    workspace_id: WorkspaceId | None = None
    group_id: Id | None = None


class UpdateNoteParams(ToolParams):
    id: Id
    name: NoteName | None = None
    content: str | None = None
    group_id: str | None = Field(default=None, description="Move note to a different group (null removes it from its group)")


class DeleteNoteParams(ToolParams):
    id: Id


class SearchNotesParams(ToolParams):
    query: Query
    workspace_id: WorkspaceId | None = None
    limit: Limit = 20


class GetNoteParams(ToolParams):
    id: Id
    workspace_id: WorkspaceId | None = None


class GetRecentNotesParams(ToolParams):
    workspace_id: WorkspaceId | None = None
    limit: int = Field(default=10, ge=1, le=50)


class AppendToNoteParams(ToolParams):
    id: Id
    content: str
    workspace_id: WorkspaceId | None = None


# ============================================================================
# GROUPS
# ============================================================================

class ListGroupsParams(ToolParams):
    workspace_id: WorkspaceId | None = None
    parent_id: Id | None = None
    search: str | None = None
    sort: GroupSort | None = None
    limit: Limit | None = None
    page: Page | None = None


class CreateGroupParams(ToolParams):
    name: GroupName
    workspace_id: WorkspaceId | None = None
    parent_id: Id | None = None


class UpdateGroupParams(ToolParams):
    group_id: Id
    name: GroupName | None = None
    parent_id: str | None = Field(default=None, description="New parent group ID (explicit null moves to root)")


class DeleteGroupParams(ToolParams):
    group_id: Id


class GetGroupTreeParams(ToolParams):
    workspace_id: Id


class GetRootGroupsParams(ToolParams):
    workspace_id: WorkspaceId | None = None


class GetChildGroupsParams(ToolParams):
    parent_id: Id
    workspace_id: WorkspaceId | None = None


class GetGroupPathParams(ToolParams):
    group_id: Id
    workspace_id: Id


class MoveGroupParams(ToolParams):
    group_id: Id
    new_parent_id: Id | None = Field(default=None, description="New parent group ID (omit to move to root level)")


class CreateGroupPathParams(ToolParams):
    path: list[GroupName] = Field(min_length=1, description='Group names, root first, e.g. ["Projects", "Web Dev"]')
    workspace_id: WorkspaceId | None = None


# ============================================================================
# TODOS
# ============================================================================

class ListTodosParams(ToolParams):
    workspace_id: WorkspaceId | None = None
    note_id: Id | None = None
    completed: bool | None = None
    is_deleted: bool | None = None
    search: str | None = None
    sort: TodoSort | None = None
    limit: Limit | None = None
    page: Page | None = None


class CreateTodoParams(ToolParams):
    text: TodoText
    note_id: Id
    line_number: LineNumber
    completed: bool = False
    workspace_id: WorkspaceId | None = None


class UpdateTodoParams(ToolParams):
    todo_id: Id
    text: TodoText | None = None
    completed: bool | None = None
    line_number: LineNumber | None = None


class TodoIdParams(ToolParams):
    todo_id: Id


class TodoListParams(ToolParams):
    workspace_id: WorkspaceId | None = None
    limit: Limit | None = None


class GetTodosForNoteParams(ToolParams):
    note_id: Id
    workspace_id: WorkspaceId | None = None


class GetTodoStatsParams(ToolParams):
    workspace_id: WorkspaceId | None = None


class SearchTodosParams(ToolParams):
    query: Query
    workspace_id: WorkspaceId | None = None


class CreateTodosForNoteParams(ToolParams):
    note_id: Id
    todo_texts: list[TodoText]
    starting_line_number: LineNumber = 1
    workspace_id: WorkspaceId | None = None


# ============================================================================
# WORKSPACES
# ============================================================================

class NoParams(ToolParams):
    pass


class ListWorkspacesParams(ToolParams):
    include_stats: bool = Field(default=True, description="Include content counts (default: true)")


class CreateWorkspaceParams(ToolParams):
    name: WorkspaceName


class UpdateWorkspaceParams(ToolParams):
    workspace_id: Id
    name: WorkspaceName | None = None


class DeleteWorkspaceParams(ToolParams):
    workspace_id: Id
    confirm_delete: bool = Field(description="Confirmation flag (required for safety)")


class WorkspaceIdParams(ToolParams):
    workspace_id: Id


class GetWorkspaceByNameParams(ToolParams):
    name: Annotated[str, Field(min_length=1)]


class GetWorkspaceStatsParams(ToolParams):
    workspace_id: Annotated[str, Field(min_length=1, description="Workspace ID (optional, uses default workspace)")] | None = None


class RenameWorkspaceParams(ToolParams):
    workspace_id: Id
    new_name: WorkspaceName


# ============================================================================
# CALENDAR
# ============================================================================

class GetDailyNoteParams(ToolParams):
    date: Date | None = None
    workspace_id: WorkspaceId | None = None


class WriteDailyNoteParams(ToolParams):
    content: str
    date: Date | None = None
    workspace_id: WorkspaceId | None = None


class GetWeeklyNoteParams(_WeekSelector):
    workspace_id: WorkspaceId | None = None


class WriteWeeklyNoteParams(_WeekSelector):
    content: str
    workspace_id: WorkspaceId | None = None
