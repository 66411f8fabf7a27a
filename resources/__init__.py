"""
Resources — MCP documentation resources generated from the tool registry.
"""
