"""Tests for generated tool documentation (resources/tools.py)."""

import pytest

from resources.tools import URI_PREFIX, ToolResourceRegistry, params_table, spec_to_markdown
from tools import TOOLS


@pytest.fixture
def registry() -> ToolResourceRegistry:
    reg = ToolResourceRegistry()
    reg.register_all(TOOLS)
    return reg


class TestMarkdown:

    def test_create_group_path_page(self) -> None:
        text = spec_to_markdown("create_group_path", TOOLS["create_group_path"])

        assert text.startswith("# create_group_path()")
        assert "Category: groups" in text
        assert "| `path` | list[string] | yes |" in text
        assert "min items 1" in text

    def test_optional_parameter_marked(self) -> None:
        table = params_table(TOOLS["get_recent_notes"])

        assert "| `limit` |" in table
        assert "| no | 10 |" in table
        assert "max 50" in table

    def test_no_parameters(self) -> None:
        assert params_table(TOOLS["get_default_workspace"]) == "_No parameters._"

    def test_handler_docstring_becomes_notes(self) -> None:
        text = spec_to_markdown("create_todos_for_note", TOOLS["create_todos_for_note"])
        assert "## Notes" in text
        assert "Partial success" in text


class TestRegistry:

    def test_every_tool_registered(self, registry: ToolResourceRegistry) -> None:
        assert registry.get_tool_names() == set(TOOLS)
        assert len(registry.list_resources()) == len(TOOLS)

    def test_get_resource(self, registry: ToolResourceRegistry) -> None:
        resource = registry.get_resource(f"{URI_PREFIX}get_group_tree")

        assert resource["mimeType"] == "text/markdown"
        assert "# get_group_tree()" in resource["text"]

    def test_resource_cached(self, registry: ToolResourceRegistry) -> None:
        uri = f"{URI_PREFIX}move_group"
        assert registry.get_resource(uri) is registry.get_resource(uri)

    @pytest.mark.parametrize("uri", [f"{URI_PREFIX}nope", "sidvy://docs/overview"])
    def test_unknown_resource(self, registry: ToolResourceRegistry, uri: str) -> None:
        with pytest.raises(KeyError):
            registry.get_resource(uri)

    def test_list_sorted(self, registry: ToolResourceRegistry) -> None:
        names = [item["name"] for item in registry.list_resources()]
        assert names == sorted(names)
