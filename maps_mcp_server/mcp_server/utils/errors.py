"""
Error Handling Utilities

Turns unexpected exceptions into short messages that are safe to return to
an MCP client.
"""

import re
from pathlib import Path

MAX_ERROR_LENGTH = 200


def sanitize_error(error: Exception) -> str:
    """
    Sanitize error messages to prevent information disclosure.

    Replaces the home directory with ``~``, strips directory components from
    absolute paths and truncates messages longer than 200 characters.

    Args:
        error: The exception to sanitize

    Returns:
        Sanitized error message string

    Example:
        >>> sanitize_error(FileNotFoundError("/usr/bin/osascript not found"))
        'osascript not found'
    """
    try:
        sanitized = str(error).replace(str(Path.home()), "~")

        # Keep only the final path component
        sanitized = re.sub(r"(?<![:/])/[a-zA-Z0-9_/.-]*/", "", sanitized)

        if len(sanitized) > MAX_ERROR_LENGTH:
            sanitized = sanitized[:MAX_ERROR_LENGTH] + "..."

        return sanitized

    except Exception:
        return "Internal server error occurred"
