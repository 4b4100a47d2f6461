"""Exception types raised by the translator and the command executor."""

from typing import Optional


class MapsCommandError(Exception):
    """Base class for errors reported back to the MCP client as tool errors."""


class UnknownOperationError(MapsCommandError):
    """Raised when a tool name is not one of the known Maps operations."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Unknown tool: {operation}")


class CommandExecutionError(MapsCommandError):
    """Raised when an external command exits non-zero or cannot be spawned."""

    def __init__(
        self,
        message: str,
        stderr: Optional[str] = None,
        returncode: Optional[int] = None,
    ):
        super().__init__(message)
        self.stderr = stderr
        self.returncode = returncode


class AppleScriptError(CommandExecutionError):
    """Raised when ``osascript`` fails."""
