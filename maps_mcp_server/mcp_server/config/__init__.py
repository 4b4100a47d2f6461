"""
MCP Server Configuration Package

Tool schema definitions, categories and guidance for the Maps MCP server.
"""

from .tool_definitions import (
    ALL_TOOL_SCHEMAS,
    TOOL_CATEGORIES,
    MAPS_TOOLS_SCHEMAS,
    build_server_instructions,
    validate_tool_definitions,
)

__all__ = [
    "ALL_TOOL_SCHEMAS",
    "TOOL_CATEGORIES",
    "MAPS_TOOLS_SCHEMAS",
    "build_server_instructions",
    "validate_tool_definitions",
]
