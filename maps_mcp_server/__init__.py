"""
Maps MCP Server

An MCP server that drives Apple Maps on macOS: searches, directions, pins and
shareable links are translated into AppleScript or ``maps://`` deep links.
"""

# Logging is configured at app entry point via maps_mcp_server/logging_utils.py
# No need to configure logging here.

__version__ = "1.0.0"
__description__ = "MCP server for Apple Maps automation"
