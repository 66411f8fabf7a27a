"""
Shared helpers for tool handlers.

Handlers receive a validated params model, call adapters, and return a
payload dict. A Failure from an adapter is raised as ApiError via
unwrap(); dispatch turns it into the error payload.
"""

from dataclasses import dataclass
from typing import Any, Callable, Sequence

from pydantic import BaseModel

from config import get_config
from models import ApiError, ApiFailure, ApiResult, ApiSuccess, ErrorCode, ResponseMeta

Handler = Callable[[Any], dict[str, Any]]


@dataclass(frozen=True)
class ToolSpec:
    """One registered tool: its closed parameter schema, handler and summary."""
    params: type[BaseModel]
    handler: Handler
    description: str
    category: str = ""


def unwrap(result: ApiResult[Any]) -> ApiSuccess[Any]:
    """Return a Success; raise ApiError for a Failure."""
    if isinstance(result, ApiFailure):
        raise ApiError.from_failure(result)
    return result


def require(value: Any, what: str) -> Any:
    """Turn a soft miss (None) into a NOT_FOUND error."""
    if value is None:
        raise ApiError(ErrorCode.NOT_FOUND.value, f"{what} not found")
    return value


def resolve_workspace(workspace_id: str | None) -> str | None:
    """Explicit workspace id, else the configured default (may be None)."""
    return workspace_id or get_config().default_workspace_id


def as_dicts(items: Sequence[Any]) -> list[dict[str, Any]]:
    return [item.to_dict() for item in items]


def meta_fields(meta: ResponseMeta | None) -> dict[str, Any]:
    """Pagination block and count from a list response, when present."""
    return {
        "pagination": meta.pagination.to_dict() if meta and meta.pagination else None,
        "count": meta.count if meta else None,
    }
