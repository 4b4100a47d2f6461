"""
Tool Definitions Configuration

Schema definitions and metadata for every Maps MCP tool. These dictionaries
are the single source of truth for the tools advertised through
``tools/list``; the property names here are the keyword arguments the tool
handlers accept.
"""

from typing import Dict, Any, List

# Tool Selection Guidance for LLMs
TOOL_SELECTION_GUIDANCE = {
    "workflow_patterns": {
        "find_a_place": [
            "maps_search (known name or free text) OR maps_nearby (category of place)",
        ],
        "navigate": [
            "maps_get_directions (omit 'from' or pass 'current location' to start from the device)",
        ],
        "point_at_a_place": [
            "maps_show_location (address) OR maps_show_coordinates (lat/lon) OR maps_drop_pin (labelled pin)",
        ],
        "share": [
            "maps_create_url (returns links only, does not open Maps)",
        ],
    },
    "disambiguation_rules": {
        "search_vs_nearby": "Use maps_search for a specific place, maps_nearby for a type of place around a location",
        "show_vs_pin": "Use maps_drop_pin when the pin needs a label, maps_show_location otherwise",
    },
}

MAPS_TOOLS_SCHEMAS: Dict[str, Dict[str, Any]] = {
    "maps_open": {
        "name": "maps_open",
        "description": "Open the Apple Maps app",
        "inputSchema": {
            "type": "object",
            "properties": {},
            "required": [],
        },
    },
    "maps_search": {
        "name": "maps_search",
        "description": "Search for a location in Apple Maps",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search query (e.g., 'coffee shops near me', 'Eiffel Tower')",
                },
            },
            "required": ["query"],
        },
    },
    "maps_get_directions": {
        "name": "maps_get_directions",
        "description": "Get directions between two locations",
        "inputSchema": {
            "type": "object",
            "properties": {
                "from": {
                    "type": "string",
                    "description": "Starting location (address or place name, or 'current location')",
                },
                "to": {
                    "type": "string",
                    "description": "Destination (address or place name)",
                },
                "mode": {
                    "type": "string",
                    "enum": ["driving", "walking", "transit"],
                    "description": "Transportation mode (default: driving)",
                },
            },
            "required": ["to"],
        },
    },
    "maps_show_location": {
        "name": "maps_show_location",
        "description": "Show a specific location on the map",
        "inputSchema": {
            "type": "object",
            "properties": {
                "address": {
                    "type": "string",
                    "description": "Address or place name to show",
                },
            },
            "required": ["address"],
        },
    },
    "maps_show_coordinates": {
        "name": "maps_show_coordinates",
        "description": "Show a location by coordinates",
        "inputSchema": {
            "type": "object",
            "properties": {
                "latitude": {
                    "type": "number",
                    "description": "Latitude coordinate",
                },
                "longitude": {
                    "type": "number",
                    "description": "Longitude coordinate",
                },
                "label": {
                    "type": "string",
                    "description": "Optional label for the pin",
                },
            },
            "required": ["latitude", "longitude"],
        },
    },
    "maps_drop_pin": {
        "name": "maps_drop_pin",
        "description": "Drop a pin at a specific location",
        "inputSchema": {
            "type": "object",
            "properties": {
                "address": {
                    "type": "string",
                    "description": "Address where to drop the pin",
                },
                "label": {
                    "type": "string",
                    "description": "Label for the pin (optional)",
                },
            },
            "required": ["address"],
        },
    },
    "maps_nearby": {
        "name": "maps_nearby",
        "description": "Find nearby places of a specific type",
        "inputSchema": {
            "type": "object",
            "properties": {
                "type": {
                    "type": "string",
                    "description": "Type of place (e.g., 'restaurants', 'gas stations', 'hotels', 'coffee')",
                },
                "near": {
                    "type": "string",
                    "description": "Location to search near (optional, defaults to current location)",
                },
            },
            "required": ["type"],
        },
    },
    "maps_create_url": {
        "name": "maps_create_url",
        "description": "Create a shareable Apple Maps URL for a location",
        "inputSchema": {
            "type": "object",
            "properties": {
                "address": {
                    "type": "string",
                    "description": "Address or place name",
                },
            },
            "required": ["address"],
        },
    },
}

# All tool schemas combined
ALL_TOOL_SCHEMAS: Dict[str, Dict[str, Any]] = {
    **MAPS_TOOLS_SCHEMAS,
}

# Tool categories for organization
TOOL_CATEGORIES: Dict[str, List[str]] = {
    "app_tools": ["maps_open"],
    "search_tools": ["maps_search", "maps_nearby"],
    "navigation_tools": ["maps_get_directions"],
    "location_tools": ["maps_show_location", "maps_show_coordinates", "maps_drop_pin"],
    "sharing_tools": ["maps_create_url"],
}


def get_workflow_guidance(task_type: str) -> List[str]:
    """Get workflow guidance for common task types."""
    return TOOL_SELECTION_GUIDANCE["workflow_patterns"].get(task_type, [])


def build_server_instructions() -> str:
    """Render the tool guidance as the server's MCP ``instructions`` text."""
    lines = ["Apple Maps tools. Typical workflows:"]
    for task_type in TOOL_SELECTION_GUIDANCE["workflow_patterns"]:
        for step in get_workflow_guidance(task_type):
            lines.append(f"- {task_type.replace('_', ' ')}: {step}")
    lines.append("Choosing between similar tools:")
    for rule in TOOL_SELECTION_GUIDANCE["disambiguation_rules"].values():
        lines.append(f"- {rule}")
    return "\n".join(lines)


def validate_tool_definitions() -> bool:
    """
    Validate that tool definitions are consistent and complete.

    Every categorised tool must have a schema whose name matches its key,
    a description, an object input schema, and required fields that are
    declared as properties. Every schema must belong to a category.

    Returns:
        True if all definitions are valid
    """
    categorised = set()
    for tools in TOOL_CATEGORIES.values():
        for tool_name in tools:
            if tool_name not in ALL_TOOL_SCHEMAS:
                return False

            schema = ALL_TOOL_SCHEMAS[tool_name]
            if schema.get("name") != tool_name or not schema.get("description"):
                return False

            input_schema = schema.get("inputSchema", {})
            if input_schema.get("type") != "object":
                return False

            properties = input_schema.get("properties", {})
            for required in input_schema.get("required", []):
                if required not in properties:
                    return False

            categorised.add(tool_name)

    return categorised == set(ALL_TOOL_SCHEMAS)
