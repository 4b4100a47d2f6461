"""Command translation for Apple Maps operations.

Turns a validated request into the AppleScript or ``maps://`` deep link that
carries it out, together with the confirmation text returned to the client.
Nothing in here touches the operating system; see ``executor.py`` for that.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from .models import (
    CommandKind,
    CreateUrlRequest,
    DirectionsRequest,
    DropPinRequest,
    NearbyRequest,
    OpenAppRequest,
    Operation,
    SearchRequest,
    ShowCoordinatesRequest,
    ShowLocationRequest,
    TranslationResult,
    parse_operation_request,
)
from .utils.escaping import encode_uri_component, escape_single_quotes, format_number

logger = logging.getLogger(__name__)

OPEN_MAPS_SCRIPT = 'tell application "Maps" to activate'

DEFAULT_APP_URL_BASE = "maps://"
DEFAULT_WEB_URL_BASE = "https://maps.apple.com/"

DEFAULT_MODE = "driving"
MODE_FLAGS: Dict[str, str] = {
    "driving": "d",
    "walking": "w",
    "transit": "r",
}
DEFAULT_MODE_FLAG = MODE_FLAGS[DEFAULT_MODE]

CURRENT_LOCATION = "current location"


def direction_flag(mode: Optional[str]) -> str:
    """Map a transport mode to its ``dirflg`` code; unknown modes drive."""
    return MODE_FLAGS.get(mode or DEFAULT_MODE, DEFAULT_MODE_FLAG)


def is_current_location(value: Optional[str]) -> bool:
    return bool(value) and value.lower() == CURRENT_LOCATION


def build_applescript_command(script: str, osascript: str = "osascript") -> str:
    """Shell command that runs ``script`` through osascript."""
    return f"{osascript} -e '{escape_single_quotes(script)}'"


def build_open_command(url: str, opener: str = "open") -> str:
    """Shell command that hands ``url`` to the system URL opener."""
    return f"{opener} '{escape_single_quotes(url)}'"


class CommandTranslator:
    """
    Translates Maps requests into commands and confirmation messages.

    The translator is stateless apart from the two URL bases, so a single
    instance is shared by every tool handler.
    """

    def __init__(
        self,
        app_url_base: str = DEFAULT_APP_URL_BASE,
        web_url_base: str = DEFAULT_WEB_URL_BASE,
    ):
        self.app_url_base = app_url_base
        self.web_url_base = web_url_base
        self._translators: Dict[str, Callable[[Any], TranslationResult]] = {
            Operation.OPEN.value: self.open_app,
            Operation.SEARCH.value: self.search,
            Operation.GET_DIRECTIONS.value: self.directions,
            Operation.SHOW_LOCATION.value: self.show_location,
            Operation.SHOW_COORDINATES.value: self.show_coordinates,
            Operation.DROP_PIN.value: self.drop_pin,
            Operation.NEARBY.value: self.nearby,
            Operation.CREATE_URL.value: self.create_url,
        }

    def translate(self, request) -> TranslationResult:
        """Translate any request model from ``models.OperationRequest``."""
        translator = self._translators[request.operation]
        result = translator(request)
        logger.debug(f"Translated {request.operation} -> {result.kind.value}: {result.target}")
        return result

    def translate_call(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> TranslationResult:
        """Validate a raw tool call and translate it.

        Raises:
            UnknownOperationError: If ``name`` is not a Maps tool
        """
        return self.translate(parse_operation_request(name, arguments))

    def _app_url(self, params: List[Tuple[str, str]]) -> str:
        return self._join_url(self.app_url_base, params)

    @staticmethod
    def _join_url(base: str, params: List[Tuple[str, str]]) -> str:
        # values must already be encoded
        query = "&".join(f"{key}={value}" for key, value in params)
        return f"{base}?{query}"

    def _open_url_result(self, operation: Operation, url: str, message: str) -> TranslationResult:
        return TranslationResult(
            operation=operation,
            kind=CommandKind.OPEN_URL,
            target=url,
            message=message,
        )

    def open_app(self, request: OpenAppRequest) -> TranslationResult:
        return TranslationResult(
            operation=Operation.OPEN,
            kind=CommandKind.APPLESCRIPT,
            target=OPEN_MAPS_SCRIPT,
            message="Apple Maps opened",
        )

    def search(self, request: SearchRequest) -> TranslationResult:
        url = self._app_url([("q", encode_uri_component(request.query))])
        return self._open_url_result(
            Operation.SEARCH, url, f"Searching for: {request.query}"
        )

    def directions(self, request: DirectionsRequest) -> TranslationResult:
        """Directions to ``to``, optionally from ``from``.

        A ``from`` of "current location" (any casing) leaves out ``saddr`` so
        Maps starts from the device location.
        """
        origin = request.from_
        params: List[Tuple[str, str]] = []
        if origin and not is_current_location(origin):
            params.append(("saddr", encode_uri_component(origin)))
        params.append(("daddr", encode_uri_component(request.to)))
        params.append(("dirflg", direction_flag(request.mode)))

        from_text = f" from {origin}" if origin else ""
        message = f"Getting {request.mode} directions{from_text} to {request.to}"
        return self._open_url_result(Operation.GET_DIRECTIONS, self._app_url(params), message)

    def show_location(self, request: ShowLocationRequest) -> TranslationResult:
        url = self._app_url([("address", encode_uri_component(request.address))])
        return self._open_url_result(
            Operation.SHOW_LOCATION, url, f"Showing: {request.address}"
        )

    def show_coordinates(self, request: ShowCoordinatesRequest) -> TranslationResult:
        latitude = format_number(request.latitude)
        longitude = format_number(request.longitude)

        params = [("ll", f"{latitude},{longitude}")]
        if request.label:
            params.append(("q", encode_uri_component(request.label)))

        label_text = f" ({request.label})" if request.label else ""
        message = f"Showing coordinates: {latitude}, {longitude}{label_text}"
        return self._open_url_result(Operation.SHOW_COORDINATES, self._app_url(params), message)

    def drop_pin(self, request: DropPinRequest) -> TranslationResult:
        params = [("address", encode_uri_component(request.address))]
        if request.label:
            params.append(("q", encode_uri_component(request.label)))

        label_text = f" ({request.label})" if request.label else ""
        message = f"Dropped pin at: {request.address}{label_text}"
        return self._open_url_result(Operation.DROP_PIN, self._app_url(params), message)

    def nearby(self, request: NearbyRequest) -> TranslationResult:
        """Search for a kind of place, near a location or near the device."""
        query = request.place_type
        if request.near:
            query += f" near {request.near}"
        url = self._app_url([("q", encode_uri_component(query))])

        where = f" near {request.near}" if request.near else " nearby"
        message = f"Searching for {request.place_type}{where}"
        return self._open_url_result(Operation.NEARBY, url, message)

    def create_url(self, request: CreateUrlRequest) -> TranslationResult:
        """Build shareable app and web URLs; nothing is executed."""
        params = [("address", encode_uri_component(request.address))]
        app_url = self._app_url(params)
        web_url = self._join_url(self.web_url_base, params)

        message = (
            f'Apple Maps URLs for "{request.address}":\n\n'
            f"App URL: {app_url}\n"
            f"Web URL: {web_url}"
        )
        return TranslationResult(
            operation=Operation.CREATE_URL,
            kind=CommandKind.NONE,
            message=message,
            urls={"app": app_url, "web": web_url},
        )
