"""Tests for MCP server tool registry handlers."""

import re

import pytest
from unittest.mock import AsyncMock, Mock

from mcp.types import CallToolResult, Tool

from maps_mcp_server.exceptions import CommandExecutionError
from maps_mcp_server.mcp_server.handlers.registry import ToolCallError, ToolRegistry
from maps_mcp_server.utils.request_context import get_request_id

REQUEST_ID_PATTERN = re.compile(r"^req_[0-9a-f]{6}$")

TEST_TOOL = Tool(
    name="test_tool",
    description="A test tool",
    inputSchema={
        "type": "object",
        "properties": {
            "param": {"type": "string"}
        }
    }
)


class TestToolRegistry:
    """Test cases for ToolRegistry class."""

    @pytest.fixture
    def registry(self):
        return ToolRegistry()

    @pytest.fixture
    def mock_handler(self):
        handler = AsyncMock()
        handler.return_value = "test result"
        return handler

    def test_registry_initialization(self, registry):
        assert registry.get_tool_count() == 0
        assert registry.list_tools() == []

    def test_register_tool_basic(self, registry, mock_handler):
        registry.register_tool("test_tool", TEST_TOOL, mock_handler, {"category": "test"})

        assert registry.has_tool("test_tool")
        assert registry.get_tool_definition("test_tool") == TEST_TOOL
        assert registry.get_tool_handler("test_tool") == mock_handler
        assert registry.list_tools() == [TEST_TOOL]

    def test_register_tool_overwrites(self, registry, mock_handler):
        other_handler = AsyncMock()
        registry.register_tool("test_tool", TEST_TOOL, mock_handler)
        registry.register_tool("test_tool", TEST_TOOL, other_handler)

        assert registry.get_tool_count() == 1
        assert registry.get_tool_handler("test_tool") is other_handler

    def test_lookups_for_missing_tool(self, registry):
        assert not registry.has_tool("missing")
        assert registry.get_tool_handler("missing") is None
        assert registry.get_tool_definition("missing") is None

    def test_tool_stats(self, registry, mock_handler):
        registry.register_tool("a", TEST_TOOL, mock_handler, {"category": "search_tools"})
        registry.register_tool("b", TEST_TOOL, mock_handler, {"category": "location_tools"})
        registry.register_tool("c", TEST_TOOL, mock_handler)

        assert registry.get_tool_stats() == {
            "total_tools": 3,
            "categories": {"search_tools": 1, "location_tools": 1, "uncategorized": 1},
            "tool_names": ["a", "b", "c"],
        }

    def test_clear_registry(self, registry, mock_handler):
        registry.register_tool("test_tool", TEST_TOOL, mock_handler)

        registry.clear_registry()

        assert registry.get_tool_count() == 0


def make_registry(handler) -> ToolRegistry:
    registry = ToolRegistry()
    registry.register_tool("test_tool", TEST_TOOL, handler)
    return registry


class TestCallTool:
    @pytest.mark.asyncio
    async def test_success(self):
        calls = []

        async def handler(param=None):
            calls.append(param)
            return "done"

        result = await make_registry(handler).call_tool("test_tool", {"param": "x"})

        assert isinstance(result, CallToolResult)
        assert result.isError is False
        assert result.content[0].type == "text"
        assert result.content[0].text == "done"
        assert REQUEST_ID_PATTERN.match(result.meta["request_id"])
        assert calls == ["x"]

    @pytest.mark.asyncio
    async def test_request_id_is_scoped_to_the_call(self):
        seen = []

        async def handler(param=None):
            seen.append(get_request_id())
            return "done"

        registry = make_registry(handler)
        first = await registry.call_tool("test_tool", {})
        second = await registry.call_tool("test_tool", {})

        assert seen == [first.meta["request_id"], second.meta["request_id"]]
        assert seen[0] != seen[1]
        assert get_request_id() is None

    @pytest.mark.asyncio
    async def test_undeclared_arguments_are_dropped(self):
        handler = AsyncMock(return_value="done")

        await make_registry(handler).call_tool("test_tool", {"param": "x", "other": 1})

        handler.assert_awaited_once_with(param="x")

    @pytest.mark.asyncio
    async def test_none_arguments(self):
        handler = AsyncMock(return_value="done")

        result = await make_registry(handler).call_tool("test_tool", None)

        assert result.isError is False
        handler.assert_awaited_once_with()

    @pytest.mark.asyncio
    async def test_unknown_tool(self):
        handler = AsyncMock(return_value="done")

        result = await make_registry(handler).call_tool("unknown_tool", {})

        assert result.isError is True
        assert result.content[0].text == "Unknown tool: unknown_tool"
        handler.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_command_error(self):
        handler = AsyncMock(side_effect=CommandExecutionError("Failed to open URL: boom"))

        result = await make_registry(handler).call_tool("test_tool", {})

        assert result.isError is True
        assert result.content[0].text == "Error: Failed to open URL: boom"

    @pytest.mark.asyncio
    async def test_missing_argument(self):
        calls = []

        async def handler(param):
            calls.append(param)
            return "done"

        result = await make_registry(handler).call_tool("test_tool", {})

        assert result.isError is True
        assert result.content[0].text.startswith("Error: Invalid arguments for test_tool")
        assert calls == []

    @pytest.mark.asyncio
    async def test_type_error_inside_handler_is_not_an_argument_error(self):
        async def handler(param=None):
            return len(None)

        result = await make_registry(handler).call_tool("test_tool", {})

        assert result.isError is True
        assert "Invalid arguments" not in result.content[0].text
        assert result.content[0].text.startswith("Error: object of type 'NoneType' has no len()")

    @pytest.mark.asyncio
    async def test_unexpected_error_is_sanitized(self):
        handler = AsyncMock(side_effect=RuntimeError("cannot read /usr/local/lib/secret/data.bin"))

        result = await make_registry(handler).call_tool("test_tool", {})

        assert result.isError is True
        assert result.content[0].text == "Error: cannot read data.bin"


class TestRegisterMcpHandlers:
    def test_registers_list_and_call_handlers(self):
        registry = ToolRegistry()
        server = Mock()
        server.list_tools.return_value = lambda func: func
        server.call_tool.return_value = lambda func: func

        registry.register_mcp_handlers(server)

        server.list_tools.assert_called_once_with()
        server.call_tool.assert_called_once_with(validate_input=False)

    @pytest.mark.asyncio
    async def test_call_handler_raises_for_errors(self):
        registry = ToolRegistry()
        captured = {}

        def capture(key):
            def decorator(func):
                captured[key] = func
                return func
            return decorator

        server = Mock()
        server.list_tools.return_value = capture("list")
        server.call_tool.return_value = capture("call")
        registry.register_mcp_handlers(server)

        with pytest.raises(ToolCallError, match="Unknown tool: nope"):
            await captured["call"]("nope", {})
        assert await captured["list"]() == []
