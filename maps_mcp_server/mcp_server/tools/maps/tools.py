"""Apple Maps tools for the Maps MCP server.

Each handler validates its arguments into a request model, translates it and
runs the resulting command. Handlers return the confirmation text and let
``MapsCommandError`` propagate to the registry, which turns it into an error
result.
"""

import logging
from typing import Any, Dict, Optional, TYPE_CHECKING
from mcp.types import Tool

from ....models import (
    CreateUrlRequest,
    DirectionsRequest,
    DropPinRequest,
    NearbyRequest,
    OpenAppRequest,
    SearchRequest,
    ShowCoordinatesRequest,
    ShowLocationRequest,
)
from ...config.tool_definitions import MAPS_TOOLS_SCHEMAS, TOOL_CATEGORIES

if TYPE_CHECKING:
    from ....translator import CommandTranslator
    from ....executor import CommandExecutor

logger = logging.getLogger(__name__)


class MapsTools:
    """Apple Maps tools for MCP server."""

    def __init__(self, translator: "CommandTranslator", executor: "CommandExecutor"):
        """Initialize maps tools.

        Args:
            translator: Builds commands and confirmation messages
            executor: Runs the commands on the host
        """
        self.translator = translator
        self.executor = executor
        self._tool_handlers: Dict[str, Any] = {}
        self._tools: Dict[str, Tool] = {}

    def get_tools(self) -> Dict[str, Tool]:
        """Get all maps tool definitions."""
        return self._tools.copy()

    def get_handlers(self) -> Dict[str, Any]:
        """Get all maps tool handlers."""
        return self._tool_handlers.copy()

    @staticmethod
    def get_category(tool_name: str) -> str:
        for category, names in TOOL_CATEGORIES.items():
            if tool_name in names:
                return category
        return "uncategorized"

    def _run(self, request) -> str:
        result = self.translator.translate(request)
        self.executor.execute(result)
        return result.message

    def register_tools(self) -> None:
        """Register all maps tools and handlers."""
        for name, schema in MAPS_TOOLS_SCHEMAS.items():
            self._tools[name] = Tool(**schema)

        async def maps_open():
            return self._run(OpenAppRequest())

        async def maps_search(query):
            return self._run(SearchRequest(query=query))

        async def maps_get_directions(to, mode=None, **kwargs):
            # "from" is a Python keyword, so it arrives through kwargs
            origin: Optional[str] = kwargs.get("from")
            return self._run(
                DirectionsRequest(to=to, from_=origin, mode=mode if mode is not None else "driving")
            )

        async def maps_show_location(address):
            return self._run(ShowLocationRequest(address=address))

        async def maps_show_coordinates(latitude, longitude, label=None):
            return self._run(
                ShowCoordinatesRequest(latitude=latitude, longitude=longitude, label=label)
            )

        async def maps_drop_pin(address, label=None):
            return self._run(DropPinRequest(address=address, label=label))

        async def maps_nearby(type, near=None):
            return self._run(NearbyRequest(place_type=type, near=near))

        async def maps_create_url(address):
            result = self.translator.translate(CreateUrlRequest(address=address))
            return result.message

        self._tool_handlers["maps_open"] = maps_open
        self._tool_handlers["maps_search"] = maps_search
        self._tool_handlers["maps_get_directions"] = maps_get_directions
        self._tool_handlers["maps_show_location"] = maps_show_location
        self._tool_handlers["maps_show_coordinates"] = maps_show_coordinates
        self._tool_handlers["maps_drop_pin"] = maps_drop_pin
        self._tool_handlers["maps_nearby"] = maps_nearby
        self._tool_handlers["maps_create_url"] = maps_create_url

        logger.debug(f"Registered {len(self._tools)} maps tools")
