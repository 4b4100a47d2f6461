"""Request context management for tracing tool calls through the server.

Every MCP tool call gets a short request ID that is carried through the
translator and executor logs, so one call can be followed from the incoming
arguments to the shell command that was run.

Key features:
- Async-safe request ID propagation using contextvars
- Short 6-digit hex IDs with a ``req_`` prefix
- Fallback formatting for log lines emitted outside of a tool call
"""

import secrets
import inspect
from contextvars import ContextVar
from typing import Optional, Callable, TypeVar
from functools import wraps

# Global context variable for request ID - thread-safe and async-safe
REQUEST_ID_CONTEXT: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

T = TypeVar("T")


def generate_request_id() -> str:
    """Generate a unique 6-digit hex request ID with req_ prefix.

    Returns:
        str: Request ID in format 'req_a1b2c3'

    Examples:
        >>> request_id = generate_request_id()
        >>> request_id.startswith('req_')
        True
        >>> len(request_id) == 10  # 'req_' + 6 hex chars
        True
    """
    return f"req_{secrets.token_hex(3)}"  # 3 bytes = 6 hex chars


def get_request_id() -> Optional[str]:
    """Get the current request ID from context, or None if unset."""
    return REQUEST_ID_CONTEXT.get()


def format_request_id(request_id: Optional[str]) -> str:
    """Format request ID for logging and display.

    Examples:
        >>> format_request_id('req_a1b2c3')
        'req_a1b2c3'
        >>> format_request_id(None)
        'req_unknown'
    """
    return request_id or "req_unknown"


def with_request_id(request_id: Optional[str] = None):
    """Decorator that runs a function inside a request ID context.

    The provided ID wins, then an ID already present in the context, then a
    freshly generated one. The previous context value is restored afterwards.

    Examples:
        @with_request_id()
        def translate():
            return get_request_id()

        @with_request_id('req_specific')
        async def handle():
            return get_request_id()
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args, **kwargs) -> T:
                current_id = request_id or get_request_id() or generate_request_id()
                token = REQUEST_ID_CONTEXT.set(current_id)
                try:
                    return await func(*args, **kwargs)
                finally:
                    REQUEST_ID_CONTEXT.reset(token)

            return async_wrapper
        else:

            @wraps(func)
            def sync_wrapper(*args, **kwargs) -> T:
                current_id = request_id or get_request_id() or generate_request_id()
                token = REQUEST_ID_CONTEXT.set(current_id)
                try:
                    return func(*args, **kwargs)
                finally:
                    REQUEST_ID_CONTEXT.reset(token)

            return sync_wrapper

    return decorator
