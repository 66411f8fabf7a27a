"""
Type definitions for sidvy-mcp.

Dataclasses defining the contracts between layers:
- Adapters parse remote JSON (camelCase) into these structures
- hierarchy/ consumes Group lists and returns GroupTreeNode forests
- Tools render them back to snake_case dicts for MCP responses

Every id is assigned by the remote service and treated as an opaque string.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


class _Unset:
    """Marker for a partial-update field that should not be sent."""

    def __repr__(self) -> str:
        return "UNSET"


# Lets None mean "clear this field" (e.g. move to root) in update calls
UNSET: Any = _Unset()


# ============================================================================
# ERROR TYPES
# ============================================================================

class ErrorCode(Enum):
    """Error codes. The first six are declared by the remote service."""
    UNAUTHORIZED = "UNAUTHORIZED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    MALFORMED_REQUEST = "MALFORMED_REQUEST"
    HTTP_ERROR = "HTTP_ERROR"            # Non-2xx with no structured body
    NETWORK_ERROR = "NETWORK_ERROR"      # Transport unreachable / timeout


class ApiError(Exception):
    """
    Structured error raised where a Failure has to abort a computation.

    The client never raises this; pagination and tool handlers do.
    The dispatch layer catches it and formats the MCP response.
    """

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    @classmethod
    def from_failure(cls, failure: "ApiFailure") -> "ApiError":
        return cls(failure.code, failure.message)

    def to_failure(self) -> "ApiFailure":
        return ApiFailure(code=self.code, message=self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"success": False, "kind": self.code, "error": self.message}


# ============================================================================
# RESULT ENVELOPE
# ============================================================================

@dataclass
class Pagination:
    """Pagination block from the remote `meta` envelope."""
    page: int
    limit: int
    total: int
    total_pages: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "total_pages": self.total_pages,
        }


@dataclass
class ResponseMeta:
    """Optional `meta` block on list responses."""
    pagination: Pagination | None = None
    count: int | None = None
    filters: dict[str, Any] = field(default_factory=dict)


@dataclass
class ApiSuccess(Generic[T]):
    """Successful remote call."""
    data: T
    meta: ResponseMeta | None = None

    ok = True


@dataclass
class ApiFailure:
    """Failed remote call: a remote-declared error or a locally synthesized one."""
    code: str
    message: str

    ok = False


# Exactly one of data/error per tag — discriminate with isinstance or `.ok`
ApiResult = Union[ApiSuccess[T], ApiFailure]


# ============================================================================
# GROUPS
# ============================================================================

@dataclass
class Group:
    """A folder-like container for notes. `parent_id` is None for roots."""
    id: str
    name: str
    workspace_id: str
    user_id: str
    parent_id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "workspace_id": self.workspace_id,
            "user_id": self.user_id,
            "parent_id": self.parent_id,
        }


@dataclass
class GroupTreeNode:
    """
    Derived, in-memory view of a Group inside a built tree.

    Built fresh by hierarchy.build_group_tree() on every call.
    `ancestor_names` runs root → immediate parent and excludes the node itself.
    """
    id: str
    name: str
    workspace_id: str
    user_id: str
    parent_id: str | None = None
    children: list["GroupTreeNode"] = field(default_factory=list)
    depth: int = 0
    ancestor_names: list[str] = field(default_factory=list)

    @classmethod
    def from_group(cls, group: Group) -> "GroupTreeNode":
        return cls(
            id=group.id,
            name=group.name,
            workspace_id=group.workspace_id,
            user_id=group.user_id,
            parent_id=group.parent_id,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "workspace_id": self.workspace_id,
            "user_id": self.user_id,
            "parent_id": self.parent_id,
            "depth": self.depth,
            "ancestor_names": list(self.ancestor_names),
            "children": [child.to_dict() for child in self.children],
        }


@dataclass
class DeleteGroupResult:
    """Receipt for a cascade group delete."""
    deleted: bool
    group_id: str
    deleted_child_groups: int = 0


# ============================================================================
# NOTES
# ============================================================================

@dataclass
class Note:
    """A markdown note. Deletion is soft (flag + timestamp)."""
    id: str
    name: str
    content: str
    workspace_id: str
    group_id: str | None = None
    is_deleted: bool = False
    deleted_at: str | None = None
    is_encrypted: bool = False
    user_id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "content": self.content,
            "workspace_id": self.workspace_id,
            "group_id": self.group_id,
            "is_deleted": self.is_deleted,
            "deleted_at": self.deleted_at,
            "is_encrypted": self.is_encrypted,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass
class DeleteNoteResult:
    deleted: bool
    note_id: str
    moved_to_trash: bool = True


# ============================================================================
# TODOS
# ============================================================================

@dataclass
class Todo:
    """A checkbox item tied to a line of its parent note."""
    id: str
    text: str
    completed: bool
    note_id: str
    line_number: int
    completed_at: str | None = None
    is_deleted: bool = False
    workspace_id: str | None = None
    user_id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "completed_at": self.completed_at,
            "note_id": self.note_id,
            "line_number": self.line_number,
            "is_deleted": self.is_deleted,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass
class DeleteTodoResult:
    deleted: bool
    todo_id: str
    soft_deleted: bool = True


@dataclass
class TodoStats:
    """Aggregate counts over every todo in a workspace."""
    total: int
    completed: int
    pending: int
    deleted: int
    completion_rate: float  # Percentage, 0 when there are no todos

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "completed": self.completed,
            "pending": self.pending,
            "deleted": self.deleted,
            "completion_rate": self.completion_rate,
        }


# ============================================================================
# WORKSPACES
# ============================================================================

@dataclass
class ContentCounts:
    notes: int = 0
    groups: int = 0
    todos: int = 0

    @property
    def total(self) -> int:
        return self.notes + self.groups + self.todos

    def to_dict(self) -> dict[str, int]:
        return {"notes": self.notes, "groups": self.groups, "todos": self.todos}


@dataclass
class Workspace:
    """Top-level isolation boundary. At most 2 per user, exactly one default."""
    id: str
    name: str
    user_id: str
    is_default: bool = False
    content_counts: ContentCounts | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "user_id": self.user_id,
            "is_default": self.is_default,
            "content_counts": self.content_counts.to_dict() if self.content_counts else None,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass
class DeleteWorkspaceResult:
    deleted: bool
    workspace_id: str
    deleted_content: ContentCounts = field(default_factory=ContentCounts)


@dataclass
class WorkspaceStats:
    id: str
    name: str
    is_default: bool
    content_counts: ContentCounts
    created_at: str | None = None
    updated_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "is_default": self.is_default,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "content_counts": self.content_counts.to_dict(),
        }
