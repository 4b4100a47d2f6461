import logging
import sys
from typing import Optional

from .utils.request_context import get_request_id, format_request_id


class RequestIDFormatter(logging.Formatter):
    """Log formatter that includes the current tool call's request ID.

    Format: timestamp [request_id] level logger_name: message
    Example: 2026-10-18 14:30:15,123 [req_a1b2c3] INFO maps_mcp_server.executor: Opening URL maps://?q=coffee
    """

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None):
        """Initialize the formatter with request ID support.

        Args:
            fmt: Optional format string (will be modified to include request ID)
            datefmt: Optional date format string
        """
        if fmt is None:
            fmt = "%(asctime)s [%(request_id)s] %(levelname)s %(name)s: %(message)s"
        elif "[%(request_id)s]" not in fmt:
            fmt = fmt.replace("%(levelname)s", "[%(request_id)s] %(levelname)s")

        super().__init__(fmt, datefmt)

    def format(self, record: logging.LogRecord) -> str:
        record.request_id = format_request_id(get_request_id())
        return super().format(record)


def setup_logging(log_level: str = "INFO", include_request_id: bool = True):
    """
    Set up logging for the application with optional request ID support.

    Output goes to stderr because stdout carries the MCP stdio transport.

    Args:
        log_level (str): Logging level as a string (e.g., 'DEBUG', 'INFO').
        include_request_id (bool): Whether to include request IDs in log messages.
    """
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {log_level}")

    if include_request_id:
        formatter = RequestIDFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)

    # The stdio transport logs every broken pipe on client disconnect
    logging.getLogger("mcp.server.stdio").setLevel(logging.CRITICAL)
    logging.getLogger("anyio").setLevel(logging.WARNING)
