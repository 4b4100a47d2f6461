"""Maps MCP Server implementation.

Wires the Maps tool category into a tool registry and exposes it through an
``mcp.server.Server`` over stdio.
"""

import logging
from typing import Dict, Any, Optional

from mcp.server import Server
from mcp.server.models import InitializationOptions
from mcp.server.lowlevel.server import NotificationOptions

from ..config import AppConfig
from ..executor import CommandExecutor
from ..translator import CommandTranslator
from .config.tool_definitions import build_server_instructions, validate_tool_definitions
from .handlers.registry import ToolRegistry
from .tools.maps import MapsTools

logger = logging.getLogger(__name__)

SERVER_NAME = "maps-mcp"
SERVER_VERSION = "1.0.0"


class MapsMCPServer:
    """Apple Maps MCP server.

    Holds one translator and one executor built from the configuration; every
    tool call goes through the shared tool registry.
    """

    def __init__(self, config: Optional[AppConfig] = None):
        """Initialize the MCP server.

        Args:
            config: Application configuration, defaults when omitted
        """
        self.config = config or AppConfig()
        self.server: Server = Server(SERVER_NAME)

        self.translator = CommandTranslator(
            app_url_base=self.config.maps.app_url_base,
            web_url_base=self.config.maps.web_url_base,
        )
        self.executor = CommandExecutor(self.config.executor)
        self.tool_registry = ToolRegistry()

        self._tool_categories: Dict[str, Any] = {}
        self._initialized = False

    async def initialize(self) -> None:
        """Register all tools and MCP handlers."""
        if self._initialized:
            return

        try:
            if not validate_tool_definitions():
                raise ValueError("Tool definitions are inconsistent")

            self._tool_categories['maps'] = MapsTools(self.translator, self.executor)
            self._register_all_tools()
            self.tool_registry.register_mcp_handlers(self.server)

            self._initialized = True

            logger.info(
                f"Maps MCP Server initialized with {self.tool_registry.get_tool_count()} tools"
            )

        except Exception as e:
            logger.exception("Failed to initialize MCP server")
            raise RuntimeError(f"Initialization failed: {str(e)}")

    def _register_all_tools(self) -> None:
        """Register all tools from all categories."""
        for category_name, category_instance in self._tool_categories.items():
            category_instance.register_tools()

            tools = category_instance.get_tools()
            handlers = category_instance.get_handlers()

            for tool_name, tool in tools.items():
                if tool_name in handlers:
                    metadata = {
                        'category': category_instance.get_category(tool_name),
                        'group': category_name,
                        'source': f'{category_instance.__class__.__module__}.{category_instance.__class__.__name__}'
                    }
                    self.tool_registry.register_tool(tool_name, tool, handlers[tool_name], metadata)
                else:
                    logger.warning(f"No handler found for tool '{tool_name}' in category '{category_name}'")

        logger.info(f"Registered {self.tool_registry.get_tool_count()} tools across all categories")

    def get_initialization_options(self) -> InitializationOptions:
        return InitializationOptions(
            server_name=SERVER_NAME,
            server_version=SERVER_VERSION,
            capabilities=self.server.get_capabilities(
                notification_options=NotificationOptions(),
                experimental_capabilities={},
            ),
            instructions=build_server_instructions(),
        )

    async def run(self, transport_type: str = "stdio") -> None:
        """Run the MCP server with the specified transport.

        Args:
            transport_type: Transport type to use (default: "stdio")
        """
        if not self._initialized:
            await self.initialize()

        if transport_type == "stdio":
            from mcp.server.stdio import stdio_server

            async with stdio_server() as (read_stream, write_stream):
                logger.info("Maps MCP server running on stdio")
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.get_initialization_options(),
                )
        else:
            raise ValueError(f"Unsupported transport type: {transport_type}")

    async def shutdown(self) -> None:
        """Clear registries; there are no long-lived resources to release."""
        self.tool_registry.clear_registry()
        self._tool_categories.clear()
        self._initialized = False
        logger.info("MCP server shutdown completed")

    def get_server_info(self) -> Dict[str, Any]:
        """
        Get server information and statistics.

        Returns:
            Dictionary containing server info
        """
        return {
            'initialized': self._initialized,
            'tool_count': self.tool_registry.get_tool_count() if self._initialized else 0,
            'tool_categories': self.tool_registry.get_tool_stats()['categories'] if self._initialized else {},
            'dry_run': self.config.executor.dry_run,
            'server_name': SERVER_NAME,
            'server_version': SERVER_VERSION,
        }
