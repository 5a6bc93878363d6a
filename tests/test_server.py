"""
Tests for MCP server core functionality
"""

import json
from typing import Optional
from unittest.mock import AsyncMock

import pytest
from pydantic import BaseModel, Field

from gcloud_docs_mcp.core.server import MCPServer
from gcloud_docs_mcp.core.transport import StdioTransport
from gcloud_docs_mcp.core.protocol import RequestHandlerExtra
from gcloud_docs_mcp.tools.decorators import tool

EXTRA = RequestHandlerExtra(id=1)


class GreetInput(BaseModel):
    name: str = Field(description="Who to greet")
    excited: Optional[bool] = Field(default=False, description="Add an exclamation mark")


@pytest.fixture
def server():
    """Create a server instance with a few test tools"""
    server = MCPServer(name="test-server", version="1.0.0")

    @tool(description="Greet someone", input_model=GreetInput)
    async def greet(name: str, excited: Optional[bool] = False) -> str:
        return f"Hello, {name}{'!' if excited else '.'}"

    @tool(description="Sync lookup")
    def lookup(key: str) -> dict:
        return {"key": key, "found": True}

    @tool(description="Returns an error payload")
    async def failing_lookup() -> dict:
        return {"error": "Unknown service: nope", "availableServices": ["compute"]}

    @tool(description="Raises")
    async def exploding() -> str:
        raise RuntimeError("kaboom")

    for func in (greet, lookup, failing_lookup, exploding):
        server.tool_registry.tool()(func)
    return server


def test_server_initialization():
    """Test server initializes correctly"""
    server = MCPServer()

    assert server.name == "google-cloud-docs-mcp-server"
    assert server.version == "0.1.0"
    assert server.initialized is False
    assert server.transport is None
    assert server.tool_registry.list_tools() == []


@pytest.mark.asyncio
async def test_server_connect_transport(server):
    transport = AsyncMock()

    await server.connect(transport)

    assert server.transport is transport
    transport.connect.assert_awaited_once()


@pytest.mark.asyncio
async def test_server_connect_null_transport_error(server):
    with pytest.raises(ValueError, match="Cannot connect to null transport"):
        await server.connect(None)


@pytest.mark.asyncio
async def test_server_run_with_transport(server):
    """Test running server until the transport reports EOF"""
    mock_transport = AsyncMock()
    mock_transport.receive = AsyncMock(
        side_effect=[{"jsonrpc": "2.0", "id": 1, "method": "ping"}, None]
    )

    await server.run(mock_transport)

    mock_transport.connect.assert_awaited_once()
    mock_transport.send.assert_awaited_once_with({"jsonrpc": "2.0", "id": 1, "result": {}})
    mock_transport.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_server_run_default_transport(server, monkeypatch):
    created = []

    class FakeStdio(StdioTransport):
        async def connect(self):
            created.append(self)

        async def receive(self):
            return None

    monkeypatch.setattr("gcloud_docs_mcp.core.server.StdioTransport", FakeStdio)

    await server.run()

    assert len(created) == 1


@pytest.mark.asyncio
async def test_handle_initialize(server):
    result = await server._handle_initialize(
        {"protocolVersion": "2024-11-05", "clientInfo": {"name": "client", "version": "2.0"}},
        EXTRA,
    )

    assert server.initialized is True
    assert result["protocolVersion"] == "2024-11-05"
    assert result["serverInfo"] == {"name": "test-server", "version": "1.0.0"}
    assert "tools" in result["capabilities"]


@pytest.mark.asyncio
async def test_handle_initialize_without_version(server):
    result = await server._handle_initialize({}, EXTRA)

    assert result["protocolVersion"] == "2024-11-05"


@pytest.mark.asyncio
async def test_handle_list_tools(server):
    result = await server._handle_list_tools({}, EXTRA)

    names = [t["name"] for t in result["tools"]]
    assert names == ["greet", "lookup", "failing_lookup", "exploding"]
    greet = result["tools"][0]
    assert greet["description"] == "Greet someone"
    assert greet["inputSchema"]["required"] == ["name"]


@pytest.mark.asyncio
async def test_call_async_tool_with_input_model(server):
    result = await server._handle_call_tool(
        {"name": "greet", "arguments": {"name": "Ada", "excited": True}}, EXTRA
    )

    assert result == {"content": [{"type": "text", "text": "Hello, Ada!"}], "isError": False}


@pytest.mark.asyncio
async def test_call_tool_applies_model_defaults(server):
    result = await server._handle_call_tool({"name": "greet", "arguments": {"name": "Ada"}}, EXTRA)

    assert result["content"][0]["text"] == "Hello, Ada."


@pytest.mark.asyncio
async def test_call_tool_with_invalid_arguments(server):
    result = await server._handle_call_tool({"name": "greet", "arguments": {}}, EXTRA)

    assert result["isError"] is True
    assert result["content"][0]["text"].startswith("Invalid arguments for greet")


@pytest.mark.asyncio
async def test_call_sync_tool_serializes_dict(server):
    result = await server._handle_call_tool({"name": "lookup", "arguments": {"key": "k"}}, EXTRA)

    assert result["isError"] is False
    assert json.loads(result["content"][0]["text"]) == {"key": "k", "found": True}


@pytest.mark.asyncio
async def test_call_tool_error_payload(server):
    result = await server._handle_call_tool({"name": "failing_lookup"}, EXTRA)

    assert result["isError"] is True
    payload = json.loads(result["content"][0]["text"])
    assert payload["error"] == "Unknown service: nope"
    assert payload["availableServices"] == ["compute"]


@pytest.mark.asyncio
async def test_call_tool_exception(server):
    result = await server._handle_call_tool({"name": "exploding", "arguments": {}}, EXTRA)

    assert result == {"content": [{"type": "text", "text": "Error: kaboom"}], "isError": True}


@pytest.mark.asyncio
async def test_call_unknown_tool(server):
    result = await server._handle_call_tool({"name": "nope", "arguments": {}}, EXTRA)

    assert result == {"content": [{"type": "text", "text": "Unknown tool: nope"}], "isError": True}


@pytest.mark.asyncio
async def test_call_tool_without_name(server):
    result = await server._handle_call_tool({}, EXTRA)

    assert result["isError"] is True
    assert "Missing required parameter" in result["content"][0]["text"]
