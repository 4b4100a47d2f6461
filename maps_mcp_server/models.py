"""Request and result models for the Maps operations.

Each MCP tool has one request model. The models form a discriminated union on
``operation`` so a tool name plus its argument bag can be validated into the
right type in one step.
"""

from enum import Enum
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .exceptions import UnknownOperationError


class Operation(str, Enum):
    """MCP tool names, one per Maps operation."""

    OPEN = "maps_open"
    SEARCH = "maps_search"
    GET_DIRECTIONS = "maps_get_directions"
    SHOW_LOCATION = "maps_show_location"
    SHOW_COORDINATES = "maps_show_coordinates"
    DROP_PIN = "maps_drop_pin"
    NEARBY = "maps_nearby"
    CREATE_URL = "maps_create_url"


class CommandKind(str, Enum):
    """How a translated command is carried out."""

    APPLESCRIPT = "applescript"
    OPEN_URL = "open_url"
    NONE = "none"


class OpenAppRequest(BaseModel):
    operation: Literal["maps_open"] = "maps_open"


class SearchRequest(BaseModel):
    operation: Literal["maps_search"] = "maps_search"
    query: str = Field(..., description="Search query")


class DirectionsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    operation: Literal["maps_get_directions"] = "maps_get_directions"
    to: str = Field(..., description="Destination")
    from_: Optional[str] = Field(None, alias="from", description="Starting location")
    mode: str = Field("driving", description="Transportation mode")


class ShowLocationRequest(BaseModel):
    operation: Literal["maps_show_location"] = "maps_show_location"
    address: str = Field(..., description="Address or place name")


class ShowCoordinatesRequest(BaseModel):
    operation: Literal["maps_show_coordinates"] = "maps_show_coordinates"
    # int before float so whole numbers keep rendering as "0", not "0.0"
    latitude: Union[int, float] = Field(..., description="Latitude coordinate")
    longitude: Union[int, float] = Field(..., description="Longitude coordinate")
    label: Optional[str] = Field(None, description="Pin label")


class DropPinRequest(BaseModel):
    operation: Literal["maps_drop_pin"] = "maps_drop_pin"
    address: str = Field(..., description="Address where to drop the pin")
    label: Optional[str] = Field(None, description="Pin label")


class NearbyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    operation: Literal["maps_nearby"] = "maps_nearby"
    place_type: str = Field(..., alias="type", description="Type of place")
    near: Optional[str] = Field(None, description="Location to search near")


class CreateUrlRequest(BaseModel):
    operation: Literal["maps_create_url"] = "maps_create_url"
    address: str = Field(..., description="Address or place name")


OperationRequest = Annotated[
    Union[
        OpenAppRequest,
        SearchRequest,
        DirectionsRequest,
        ShowLocationRequest,
        ShowCoordinatesRequest,
        DropPinRequest,
        NearbyRequest,
        CreateUrlRequest,
    ],
    Field(discriminator="operation"),
]

OPERATION_REQUEST_ADAPTER: TypeAdapter = TypeAdapter(OperationRequest)

OPERATION_NAMES = frozenset(op.value for op in Operation)


def parse_operation_request(name: str, arguments: Optional[Dict[str, Any]] = None):
    """Validate a tool name and its arguments into a typed request.

    Raises:
        UnknownOperationError: If ``name`` is not a Maps tool
        pydantic.ValidationError: If the arguments do not fit the request model
    """
    if name not in OPERATION_NAMES:
        raise UnknownOperationError(name)

    payload = dict(arguments or {})
    payload["operation"] = name
    return OPERATION_REQUEST_ADAPTER.validate_python(payload)


class TranslationResult(BaseModel):
    """Outcome of translating one request.

    ``target`` is the raw AppleScript source or deep-link URL; shell quoting is
    applied only when the executor builds the command line.
    """

    operation: Operation = Field(description="Operation that produced this result")
    kind: CommandKind = Field(description="How the command is executed")
    target: Optional[str] = Field(None, description="AppleScript source or URL")
    message: str = Field(description="Confirmation text returned to the client")
    urls: Dict[str, str] = Field(
        default_factory=dict, description="Generated URLs, keyed by 'app' and 'web'"
    )
