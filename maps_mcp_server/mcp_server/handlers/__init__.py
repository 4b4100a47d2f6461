"""MCP protocol handlers: tool registration and dispatch."""

from .registry import ToolRegistry, ToolCallError

__all__ = ["ToolRegistry", "ToolCallError"]
