#!/usr/bin/env python3
"""
Maps MCP Server Entry Point

Starts the Apple Maps MCP server on stdio for MCP clients such as Claude
Desktop.

Usage:
    python mcp_maps_server.py [--config CONFIG_FILE] [--log-level LEVEL]
"""

import sys
import asyncio
import logging
import argparse
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from maps_mcp_server.config import load_config
from maps_mcp_server.logging_utils import setup_logging
from maps_mcp_server.mcp_server import MapsMCPServer


def _is_client_disconnect_error(exception: BaseException) -> bool:
    """Check if an exception represents a client disconnect."""
    if isinstance(exception, (BrokenPipeError, ConnectionResetError, ConnectionAbortedError)):
        return True

    error_str = str(exception)
    error_indicators = [
        "Broken pipe", "Connection reset", "Connection aborted",
        "BrokenResourceError", "ClosedResourceError",
        "[Errno 32]", "[Errno 104]"
    ]

    return any(indicator in error_str for indicator in error_indicators)


def _is_client_disconnect_group(exception_group) -> bool:
    """Check if an ExceptionGroup contains only client disconnect errors."""
    exceptions = getattr(exception_group, "exceptions", None)
    if not exceptions:
        return False

    for exc in exceptions:
        if isinstance(exc, BaseExceptionGroup):
            if not _is_client_disconnect_group(exc):
                return False
        elif not _is_client_disconnect_error(exc):
            return False

    return True


async def main():
    """Main entry point for the Maps MCP server."""
    parser = argparse.ArgumentParser(description="Apple Maps MCP Server")
    parser.add_argument(
        "--config", "-c",
        type=str,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set the logging level"
    )
    parser.add_argument(
        "--transport", "-t",
        choices=["stdio"],
        default="stdio",
        help="Transport type for MCP server"
    )
    parser.add_argument(
        "--force-mcp",
        action="store_true",
        help="Force MCP server mode even when run in terminal"
    )

    args = parser.parse_args()

    # Check if this is being run manually in a terminal
    if sys.stdin.isatty() and sys.stdout.isatty() and not args.force_mcp:
        print("╭─────────────────────────────────────────────────────────────────╮")
        print("│                       Apple Maps MCP Server                     │")
        print("╰─────────────────────────────────────────────────────────────────╯")
        print()
        print("This is an MCP (Model Context Protocol) server designed to be")
        print("called by AI clients like Claude Desktop, not run manually.")
        print()
        print("To try the operations from a terminal, use:")
        print("  maps-mcp-server search 'coffee' --dry-run")
        print()
        print("To force MCP server mode anyway, use: --force-mcp")
        sys.exit(0)

    config = load_config(args.config)
    setup_logging(args.log_level or config.log_level)
    logger = logging.getLogger(__name__)

    server = MapsMCPServer(config)
    try:
        logger.info(f"Starting Maps MCP Server (transport: {args.transport})")
        await server.initialize()
        sys.stderr.flush()
        await server.run(transport_type=args.transport)
    except (BrokenPipeError, ConnectionResetError, ConnectionAbortedError):
        logger.debug("Client disconnected")
    except BaseExceptionGroup as eg:
        if _is_client_disconnect_group(eg):
            logger.debug("Client disconnected (exception group)")
        else:
            logger.exception("Fatal error in MCP server (exception group)")
            sys.exit(1)
    except asyncio.CancelledError:
        logger.debug("Server task cancelled")
    except Exception as e:
        if _is_client_disconnect_error(e):
            logger.debug(f"Client disconnected (wrapped): {type(e).__name__}")
        else:
            logger.exception("Fatal error in MCP server")
            sys.exit(1)
    finally:
        await server.shutdown()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        sys.exit(0)
