"""Apple Maps tools for the Maps MCP server.

Opening the app, search, directions, locations, pins, nearby search and
shareable URLs.
"""

from .tools import MapsTools

__all__ = ["MapsTools"]
