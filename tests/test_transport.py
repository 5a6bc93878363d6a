"""
Transport layer tests
"""

import json
from unittest.mock import patch

import pytest

from gcloud_docs_mcp.core.transport import StdioTransport


@pytest.mark.asyncio
async def test_stdio_transport_basic():
    """Test basic stdio transport functionality"""
    transport = StdioTransport()

    assert transport.closed is False
    assert transport._stdin_reader is None
    assert transport._stdin_task is None

    # Should be able to close without connecting
    await transport.close()
    assert transport.closed is True
    assert await transport.receive() is None


@pytest.mark.asyncio
async def test_stdio_transport_send():
    """Test stdio transport send functionality"""
    transport = StdioTransport()

    with patch("builtins.print") as mock_print:
        await transport.send({"id": 1, "result": {"text": "Größe"}})

    mock_print.assert_called_once()
    output = mock_print.call_args[0][0]
    assert "\n" not in output
    parsed = json.loads(output)
    assert parsed == {"jsonrpc": "2.0", "id": 1, "result": {"text": "Größe"}}
    assert mock_print.call_args.kwargs["flush"] is True


@pytest.mark.asyncio
async def test_feed_line_queues_message():
    transport = StdioTransport()

    await transport.feed_line(b'{"jsonrpc": "2.0", "id": 1, "method": "ping"}\r')

    assert await transport.receive() == {"jsonrpc": "2.0", "id": 1, "method": "ping"}


@pytest.mark.asyncio
async def test_feed_line_skips_blank_lines():
    transport = StdioTransport()

    await transport.feed_line(b"   ")

    assert transport._receive_queue.empty()


@pytest.mark.asyncio
async def test_feed_line_invalid_json_answers_parse_error():
    transport = StdioTransport()

    with patch("builtins.print") as mock_print:
        await transport.feed_line("{not json")

    assert transport._receive_queue.empty()
    response = json.loads(mock_print.call_args[0][0])
    assert response["id"] is None
    assert response["error"]["code"] == -32700
    assert response["error"]["message"].startswith("Parse error:")


@pytest.mark.asyncio
async def test_receive_returns_messages_in_order():
    transport = StdioTransport()

    await transport.feed_line('{"jsonrpc": "2.0", "id": 1, "method": "a"}')
    await transport.feed_line('{"jsonrpc": "2.0", "id": 2, "method": "b"}')

    first = await transport.receive()
    second = await transport.receive()
    assert [first["id"], second["id"]] == [1, 2]
