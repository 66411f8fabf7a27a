"""Tests for dispatch() and the tool registry."""

from collections import Counter

import pytest
from pydantic import BaseModel

from models import ApiError
from tests.helpers import assert_error
from tools import TOOLS, ToolSpec, dispatch
from tools.params import ToolParams


class EchoParams(ToolParams):
    text: str


def _echo(p: EchoParams) -> dict:
    return {"echo": p.text}


def _boom(p: EchoParams) -> dict:
    raise RuntimeError("kaboom")


def _api_error(p: EchoParams) -> dict:
    raise ApiError("FORBIDDEN", "not yours")


REGISTRY = {
    "echo": ToolSpec(EchoParams, _echo, "Echo text back"),
    "boom": ToolSpec(EchoParams, _boom, "Always raises"),
    "denied": ToolSpec(EchoParams, _api_error, "Always forbidden"),
}


class TestRegistry:
    """The TOOLS table is the single tool catalogue."""

    def test_tool_count(self) -> None:
        assert len(TOOLS) == 48

    def test_categories(self) -> None:
        counts = Counter(spec.category for spec in TOOLS.values())
        assert counts == {"notes": 8, "groups": 10, "todos": 13, "workspaces": 11, "calendar": 6}

    def test_hierarchy_tools_present(self) -> None:
        for name in ("get_group_tree", "get_group_path", "move_group", "create_group_path"):
            assert name in TOOLS

    @pytest.mark.parametrize("name", sorted(TOOLS))
    def test_params_schemas_are_closed(self, name: str) -> None:
        params = TOOLS[name].params
        assert issubclass(params, BaseModel)
        assert params.model_config.get("extra") == "forbid"

    def test_every_tool_has_description(self) -> None:
        assert all(spec.description for spec in TOOLS.values())


class TestDispatch:

    def test_success_payload(self) -> None:
        result = dispatch("echo", {"text": "hi"}, registry=REGISTRY)
        assert result == {"success": True, "echo": "hi"}

    def test_unknown_tool(self) -> None:
        result = dispatch("explode", {"a": 1}, registry=REGISTRY)

        assert_error(result, "VALIDATION_ERROR", "Unknown tool: explode")
        assert result["tool_name"] == "explode"
        assert result["arguments"] == {"a": 1}

    def test_unknown_argument_rejected(self) -> None:
        result = dispatch("echo", {"text": "hi", "extra": True}, registry=REGISTRY)
        assert_error(result, "VALIDATION_ERROR", "extra")

    def test_missing_argument_rejected(self) -> None:
        result = dispatch("echo", None, registry=REGISTRY)

        assert_error(result, "VALIDATION_ERROR", "text")
        assert result["arguments"] == {}

    def test_api_error_keeps_code(self) -> None:
        result = dispatch("denied", {"text": "x"}, registry=REGISTRY)

        assert_error(result, "FORBIDDEN", "not yours")
        assert result["tool_name"] == "denied"

    def test_unexpected_exception_is_internal_error(self) -> None:
        result = dispatch("boom", {"text": "x"}, registry=REGISTRY)

        assert_error(result, "INTERNAL_ERROR", "kaboom")
        assert result["arguments"] == {"text": "x"}

    def test_arguments_not_mutated(self) -> None:
        arguments = {"text": "hi"}
        dispatch("echo", arguments, registry=REGISTRY)
        assert arguments == {"text": "hi"}

    def test_default_registry_rejects_extra_argument(self) -> None:
        result = dispatch("get_group_tree", {"workspace_id": "ws_1", "depth": 3})
        assert_error(result, "VALIDATION_ERROR", "depth")

    def test_remote_failure_becomes_error_payload(self, fake_api) -> None:
        fake_api.fail("GET", "/group", status=401, code="UNAUTHORIZED", message="Invalid token")

        result = dispatch("get_group_tree", {"workspace_id": "ws_1"})

        assert_error(result, "UNAUTHORIZED", "Invalid token")
        assert result["tool_name"] == "get_group_tree"

