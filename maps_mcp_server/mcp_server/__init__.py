"""MCP Server implementation for Apple Maps operations."""

from .server import MapsMCPServer

from .utils import (
    MCPJSONEncoder,
    safe_json_dumps,
    sanitize_error
)

from .config import (
    ALL_TOOL_SCHEMAS,
    TOOL_CATEGORIES,
    validate_tool_definitions
)

__all__ = [
    "MapsMCPServer",
    "MCPJSONEncoder",
    "safe_json_dumps",
    "sanitize_error",
    "ALL_TOOL_SCHEMAS",
    "TOOL_CATEGORIES",
    "validate_tool_definitions",
]
