"""Tool registry for MCP server - manages tool registration, discovery and dispatch."""

import inspect
import logging
from typing import Dict, List, Callable, Awaitable, Any, Optional

from mcp.types import CallToolResult, TextContent, Tool
from mcp.server import Server
from pydantic import ValidationError

from ...exceptions import MapsCommandError, UnknownOperationError
from ...utils.request_context import get_request_id, with_request_id
from ..utils.errors import sanitize_error

logger = logging.getLogger(__name__)


class ToolCallError(Exception):
    """Raised towards the MCP SDK so it reports an ``isError`` result."""


class ToolRegistry:
    """
    Manages tool registration, discovery, metadata and dispatch.

    ``call_tool`` never raises: unknown tools, execution failures and
    unexpected errors all come back as a ``CallToolResult`` with ``isError``
    set, so the client always gets a structured reply.
    """

    def __init__(self):
        """Initialize the tool registry."""
        self._tools: Dict[str, Tool] = {}
        self._tool_handlers: Dict[str, Callable[..., Awaitable[Any]]] = {}
        self._tool_metadata: Dict[str, Dict[str, Any]] = {}

    def register_tool(self, name: str, tool: Tool, handler: Callable[..., Awaitable[Any]], metadata: Optional[Dict[str, Any]] = None) -> None:
        """
        Register a tool with its handler and optional metadata.

        Args:
            name: Tool name/identifier
            tool: MCP Tool definition
            handler: Async function returning the confirmation text
            metadata: Optional metadata for the tool (category, source, ...)
        """
        if name in self._tools:
            logger.warning(f"Tool '{name}' is already registered, overwriting")

        self._tools[name] = tool
        self._tool_handlers[name] = handler
        self._tool_metadata[name] = metadata or {}

        logger.debug(f"Registered tool: {name}")

    def get_tool_handler(self, name: str) -> Optional[Callable[..., Awaitable[Any]]]:
        return self._tool_handlers.get(name)

    def get_tool_definition(self, name: str) -> Optional[Tool]:
        return self._tools.get(name)

    def list_tools(self) -> List[Tool]:
        """
        Get all registered tool definitions.

        Returns:
            List[Tool]: List of all registered MCP tools, in registration order
        """
        return list(self._tools.values())

    def get_tool_count(self) -> int:
        return len(self._tools)

    def has_tool(self, name: str) -> bool:
        return name in self._tools

    def get_tool_stats(self) -> Dict[str, Any]:
        """
        Get registry statistics and summary information.

        Returns:
            Dict: Statistics about registered tools
        """
        categories = {}
        for metadata in self._tool_metadata.values():
            category = metadata.get('category', 'uncategorized')
            categories[category] = categories.get(category, 0) + 1

        return {
            'total_tools': len(self._tools),
            'categories': categories,
            'tool_names': list(self._tools.keys())
        }

    @staticmethod
    def _result(text: str, request_id: str, is_error: bool = False) -> CallToolResult:
        return CallToolResult(
            content=[TextContent(type="text", text=text)],
            isError=is_error,
            _meta={"request_id": request_id},
        )

    @with_request_id()
    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> CallToolResult:
        """
        Dispatch a tool call to its handler.

        Args:
            name: Tool name
            arguments: Tool arguments as sent by the client

        Returns:
            CallToolResult: Confirmation text, or error text with ``isError`` set
        """
        request_id = get_request_id()
        arguments = arguments or {}

        logger.info(
            f"[{request_id}] MCP tool call: {name} with arguments: {arguments}"
        )

        if not self.has_tool(name):
            logger.warning(f"[{request_id}] Unknown tool requested: {name}")
            return self._result(str(UnknownOperationError(name)), request_id, is_error=True)

        handler = self.get_tool_handler(name)

        # Only properties advertised in the tool schema reach the handler
        properties = self.get_tool_definition(name).inputSchema.get("properties", {})
        ignored = sorted(set(arguments) - set(properties))
        if ignored:
            logger.debug(f"[{request_id}] Ignoring undeclared arguments for {name}: {ignored}")
        arguments = {key: value for key, value in arguments.items() if key in properties}

        try:
            inspect.signature(handler).bind(**arguments)
        except TypeError as e:
            logger.warning(f"[{request_id}] Invalid arguments for tool '{name}': {e}")
            return self._result(f"Error: Invalid arguments for {name}: {sanitize_error(e)}", request_id, is_error=True)

        try:
            text = await handler(**arguments)
        except MapsCommandError as e:
            logger.error(f"[{request_id}] Tool '{name}' failed: {e}")
            return self._result(f"Error: {e}", request_id, is_error=True)
        except ValidationError as e:
            logger.warning(f"[{request_id}] Invalid arguments for tool '{name}': {e}")
            return self._result(f"Error: Invalid arguments for {name}: {sanitize_error(e)}", request_id, is_error=True)
        except Exception as e:
            logger.exception(f"[{request_id}] Error calling tool {name}")
            return self._result(f"Error: {sanitize_error(e)}", request_id, is_error=True)

        logger.info(f"[{request_id}] MCP tool '{name}' completed successfully")
        return self._result(text, request_id)

    def register_mcp_handlers(self, server: Server) -> None:
        """
        Register ``tools/list`` and ``tools/call`` handlers with the server.

        SDK input validation is off. The request models validate arguments,
        and a ``mode`` outside the advertised enum falls back to driving.

        Args:
            server: MCP server instance
        """

        @server.list_tools()
        async def list_tools() -> List[Tool]:
            """List all available MCP tools."""
            return self.list_tools()

        @server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: dict):
            """Handle MCP tool calls; errors are raised so the SDK flags them."""
            result = await self.call_tool(name, arguments)
            if result.isError:
                raise ToolCallError(result.content[0].text)
            return result.content

    def clear_registry(self) -> None:
        """Clear all registered tools."""
        self._tools.clear()
        self._tool_handlers.clear()
        self._tool_metadata.clear()
        logger.debug("Cleared tool registry")
