"""
Tool dispatch — the single boundary between MCP and the handlers.

dispatch() looks a tool up, validates its arguments against the closed
params model, runs the handler and shapes the response. Nothing escapes:
unknown tools, schema violations, ApiError and unexpected exceptions all
become an error payload naming the tool and echoing its arguments.
"""

from typing import Any

from pydantic import ValidationError

from logging_config import logger
from models import ApiError, ErrorCode
from tools.common import ToolSpec


def _error_payload(name: str, arguments: dict[str, Any], code: str, message: str) -> dict[str, Any]:
    return {
        **ApiError(code, message).to_dict(),
        "tool_name": name,
        "arguments": arguments,
    }


def _validation_message(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        loc = ".".join(str(part) for part in item["loc"])
        parts.append(f"{loc}: {item['msg']}" if loc else item["msg"])
    return "; ".join(parts)


def dispatch(
    name: str,
    arguments: dict[str, Any] | None = None,
    registry: dict[str, ToolSpec] | None = None,
) -> dict[str, Any]:
    """
    Run one tool by name.

    Args:
        name: Tool name
        arguments: Raw tool arguments (snake_case keys)
        registry: Tool table; defaults to the full TOOLS registry

    Returns:
        {"success": True, ...handler payload} or
        {"success": False, "error", "kind", "tool_name", "arguments"}
    """
    if registry is None:
        from tools import TOOLS
        registry = TOOLS
    arguments = dict(arguments or {})

    spec = registry.get(name)
    if spec is None:
        return _error_payload(name, arguments, ErrorCode.VALIDATION_ERROR.value, f"Unknown tool: {name}")

    try:
        params = spec.params.model_validate(arguments)
    except ValidationError as e:
        message = _validation_message(e)
        logger.warning(f"Tool {name}: invalid arguments: {message}")
        return _error_payload(name, arguments, ErrorCode.VALIDATION_ERROR.value, message)

    try:
        payload = spec.handler(params)
    except ApiError as e:
        logger.error(f"Tool {name} failed: [{e.code}] {e.message}")
        return _error_payload(name, arguments, e.code, e.message)
    except Exception as e:
        logger.exception(f"Tool {name} raised unexpectedly")
        return _error_payload(name, arguments, ErrorCode.INTERNAL_ERROR.value, str(e) or type(e).__name__)

    return {"success": True, **payload}
