"""
Tool Documentation Resources

Generates sidvy://tools/* resources from the TOOLS registry.
Single source of truth: the params models and handler docstrings ARE the
documentation, so a tool's resource can never drift from its schema.
"""

from typing import Any

from logging_config import logger
from tools.common import ToolSpec

URI_PREFIX = "sidvy://tools/"


def _clean_docstring(docstring: str) -> str:
    """Dedent a docstring, keeping the first line as-is."""
    lines = docstring.strip().split('\n')
    if len(lines) > 1:
        indents = [len(line) - len(line.lstrip())
                   for line in lines[1:] if line.strip()]
        min_indent = min(indents) if indents else 0
        lines = [lines[0]] + [line[min_indent:] if len(line) > min_indent else line
                              for line in lines[1:]]
    return '\n'.join(lines)


def _type_label(schema: dict[str, Any]) -> str:
    if "anyOf" in schema:
        labels = [_type_label(option) for option in schema["anyOf"]]
        return " | ".join(label for label in labels if label)
    if "enum" in schema:
        return " | ".join(repr(value) for value in schema["enum"])
    if schema.get("type") == "array":
        return f"list[{_type_label(schema.get('items', {}))}]"
    return schema.get("type", "any")


def _constraints(schema: dict[str, Any]) -> str:
    """Length/range/pattern bounds, looking through Optional wrappers."""
    options = schema.get("anyOf", [schema])
    bounds: list[str] = []
    for option in options:
        for key, label in (
            ("minLength", "min length"), ("maxLength", "max length"),
            ("minimum", "min"), ("maximum", "max"),
            ("minItems", "min items"), ("pattern", "pattern"),
        ):
            if key in option:
                bounds.append(f"{label} {option[key]}")
        if option.get("type") == "array":
            bounds.extend(f"items: {b}" for b in _constraints(option.get("items", {})).split(", ") if b)
    return ", ".join(bounds)


def params_table(spec: ToolSpec) -> str:
    """Markdown table of a tool's parameters from its JSON schema."""
    schema = spec.params.model_json_schema()
    properties: dict[str, Any] = schema.get("properties", {})
    if not properties:
        return "_No parameters._"

    required = set(schema.get("required", []))
    rows = [
        "| Name | Type | Required | Default | Constraints | Description |",
        "|------|------|----------|---------|-------------|-------------|",
    ]
    for name, prop in properties.items():
        default = "" if name in required else repr(prop.get("default"))
        rows.append(
            f"| `{name}` | {_type_label(prop)} | {'yes' if name in required else 'no'} "
            f"| {default} | {_constraints(prop)} | {prop.get('description', '')} |"
        )
    return "\n".join(rows)


def spec_to_markdown(tool_name: str, spec: ToolSpec) -> str:
    """
    Render one tool as markdown: summary, parameter table and, when the
    handler has one, its docstring as notes.
    """
    parts = [f"# {tool_name}()", "", spec.description]
    if spec.category:
        parts += ["", f"Category: {spec.category}"]
    parts += ["", "## Parameters", "", params_table(spec)]

    docstring = spec.handler.__doc__ or ""
    if docstring.strip():
        parts += ["", "## Notes", "", _clean_docstring(docstring)]

    return "\n".join(parts)


class ToolResourceRegistry:
    """
    Registry for generated tool documentation resources.

    Generates sidvy://tools/* resources from ToolSpecs.
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolSpec] = {}
        self._cache: dict[str, dict[str, str]] = {}

    def register_tool(self, name: str, spec: ToolSpec) -> None:
        """Register a tool for documentation generation."""
        self._tools[name] = spec
        self._cache.pop(f"{URI_PREFIX}{name}", None)

    def register_all(self, tools: dict[str, ToolSpec]) -> None:
        """Register every tool in a TOOLS table."""
        for name, spec in tools.items():
            self.register_tool(name, spec)

        if not self._tools:
            logger.warning(
                "Tool resource registry is empty after registration. "
                "sidvy://tools/* resources will not be available."
            )
        else:
            logger.info(f"Tool resource registry: {len(self._tools)} tools registered")

    def get_tool_names(self) -> set[str]:
        """Get set of all registered tool names."""
        return set(self._tools.keys())

    def get_resource(self, uri: str) -> dict[str, str]:
        """
        Get resource by URI.

        Args:
            uri: Resource URI (e.g., "sidvy://tools/get_group_tree")

        Returns:
            Resource dict with uri, mimeType, text

        Raises:
            KeyError: If tool not found
        """
        if uri in self._cache:
            return self._cache[uri]

        if not uri.startswith(URI_PREFIX):
            raise KeyError(f"Not a tool resource: {uri}")

        tool_name = uri[len(URI_PREFIX):]
        if tool_name not in self._tools:
            raise KeyError(f"Tool not found: {tool_name}")

        resource = {
            "uri": uri,
            "mimeType": "text/markdown",
            "text": spec_to_markdown(tool_name, self._tools[tool_name]),
        }
        self._cache[uri] = resource
        return resource

    def list_resources(self) -> list[dict[str, str]]:
        """List all available tool resources."""
        return [
            {
                "uri": f"{URI_PREFIX}{name}",
                "name": name,
                "description": self._tools[name].description[:100],
            }
            for name in sorted(self._tools)
        ]


# Global registry instance
_registry = ToolResourceRegistry()


def get_tool_registry() -> ToolResourceRegistry:
    """Get the global tool resource registry."""
    return _registry
