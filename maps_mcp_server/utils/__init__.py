"""Shared helpers: request tracing and URL/shell escaping."""

from .escaping import encode_uri_component, escape_single_quotes, format_number
from .request_context import (
    generate_request_id,
    get_request_id,
    format_request_id,
    with_request_id,
)

__all__ = [
    "encode_uri_component",
    "escape_single_quotes",
    "format_number",
    "generate_request_id",
    "get_request_id",
    "format_request_id",
    "with_request_id",
]
