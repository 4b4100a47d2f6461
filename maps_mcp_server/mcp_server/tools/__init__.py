"""
MCP Server Tools Package

Tool implementations organized by category.
"""

from .maps import MapsTools

__all__ = ["MapsTools"]
