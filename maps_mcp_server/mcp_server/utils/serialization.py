"""
JSON Serialization Utilities

Serializes tool schemas, server info and translation results, including
Enums and pydantic models.
"""

import json
from datetime import datetime, date
from enum import Enum
from typing import Any


class MCPJSONEncoder(json.JSONEncoder):
    """JSON encoder that handles datetime, Enum and pydantic objects."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        elif isinstance(obj, Enum):
            return obj.value
        elif hasattr(obj, "model_dump"):
            return obj.model_dump(mode="json", by_alias=True)
        return super().default(obj)


def safe_json_dumps(obj: Any, indent: Any = None) -> str:
    """
    Serialize ``obj`` to JSON, falling back to an error document instead of
    raising when something is not serializable.

    Example:
        >>> safe_json_dumps({"tool": "maps_search", "count": 1})
        '{"tool": "maps_search", "count": 1}'
    """
    try:
        return json.dumps(obj, cls=MCPJSONEncoder, ensure_ascii=False, indent=indent)
    except Exception as e:
        return json.dumps(
            {"error": f"Serialization failed: {str(e)}", "data": str(obj)}
        )
