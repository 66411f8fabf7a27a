"""
Adapters — thin wrappers over the remote note service's REST API.

One module per resource. Each parses camelCase JSON into models.py
dataclasses and returns ApiResult; nothing here knows about MCP.
"""
