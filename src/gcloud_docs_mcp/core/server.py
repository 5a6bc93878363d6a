"""
MCP server: wires the protocol, the tool registry and a transport together
"""

import asyncio
import functools
import json
import logging
from typing import Any, Optional

from pydantic import ValidationError

from .protocol import MCPProtocol, RequestHandlerExtra
from .registry import ToolRegistry
from .transport import StdioTransport, Transport

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"


def _text_content(text: str, is_error: bool) -> dict[str, Any]:
    return {"content": [{"type": "text", "text": text}], "isError": is_error}


class MCPServer:
    """
    Core MCP server that manages protocol handling, tool registry,
    and connection to a transport layer.
    """

    def __init__(self, name: str = "google-cloud-docs-mcp-server", version: str = "0.1.0"):
        self.name = name
        self.version = version
        self.protocol = MCPProtocol()
        self.tool_registry = ToolRegistry()
        self.transport: Optional[Transport] = None
        self.initialized = False

        logger.info(f"MCPServer '{name}' v{version} initialized")
        self._register_default_handlers()

    def _register_default_handlers(self):
        """Register the built-in MCP request handlers with the protocol"""
        handlers = {
            "initialize": self._handle_initialize,
            "notifications/initialized": self._handle_initialized,
            "ping": self._handle_ping,
            "tools/list": self._handle_list_tools,
            "tools/call": self._handle_call_tool,
        }

        for method, handler in handlers.items():
            self.protocol.set_request_handler(method, handler)

        logger.debug(f"Registered {len(handlers)} default MCP handlers")

    def tool(self):
        """Get tool decorator from registry"""
        return self.tool_registry.tool()

    async def run(self, transport: Optional[Transport] = None):
        """Serve messages from the transport until it closes"""
        if transport is None:
            transport = StdioTransport()

        await self.connect(transport)

        try:
            while True:
                message = await transport.receive()
                if message is None:
                    logger.info("Transport closed, shutting down")
                    break

                try:
                    response = await self.protocol.handle_message(message)
                except Exception as e:
                    logger.error(f"Error in message processing loop: {e}", exc_info=True)
                    continue

                if response:
                    await transport.send(response)
        finally:
            await transport.close()

    async def connect(self, transport: Transport):
        """Connect the server to a transport"""
        if self.transport:
            logger.warning("MCPServer already connected, overwriting")

        if not transport:
            raise ValueError("Cannot connect to null transport")

        self.transport = transport
        logger.info(f"Connecting to transport: {type(transport).__name__}")
        await transport.connect()

    async def _handle_initialize(
        self, params: dict[str, Any], extra: RequestHandlerExtra
    ) -> dict[str, Any]:
        """Handle 'initialize' request"""
        client_info = params.get("clientInfo", {})
        logger.info(
            f"Initialize request from {client_info.get('name', 'Unknown Client')} "
            f"v{client_info.get('version', 'N/A')} (ID: {extra.id})"
        )

        self.initialized = True

        return {
            "protocolVersion": params.get("protocolVersion") or PROTOCOL_VERSION,
            "serverInfo": {"name": self.name, "version": self.version},
            "capabilities": {"tools": {}},
        }

    async def _handle_initialized(
        self, params: dict[str, Any], extra: RequestHandlerExtra
    ) -> None:
        logger.debug("Client finished initialization")

    async def _handle_ping(
        self, params: dict[str, Any], extra: RequestHandlerExtra
    ) -> dict[str, Any]:
        return {}

    async def _handle_list_tools(
        self, params: dict[str, Any], extra: RequestHandlerExtra
    ) -> dict[str, Any]:
        """Handle 'tools/list' request"""
        tools = self.tool_registry.tools
        logger.debug(f"Returning {len(tools)} tools (ID: {extra.id})")
        return {"tools": tools}

    async def _handle_call_tool(
        self, params: dict[str, Any], extra: RequestHandlerExtra
    ) -> dict[str, Any]:
        """
        Handle 'tools/call' request.

        Every failure inside a tool surfaces as an ``isError`` result rather
        than a JSON-RPC error, so the client always gets readable text back.
        """
        tool_name = params.get("name")
        arguments = params.get("arguments") or {}

        if not tool_name:
            return _text_content("Missing required parameter: 'name'", True)

        logger.info(f"Tool call: {tool_name} (ID: {extra.id})")

        tool_func = self.tool_registry.get_tool(tool_name)
        if tool_func is None:
            return _text_content(f"Unknown tool: {tool_name}", True)

        metadata = tool_func._mcp_tool_metadata
        input_model = metadata.get("input_model")
        if input_model is not None:
            try:
                arguments = input_model.model_validate(arguments).model_dump()
            except ValidationError as e:
                logger.info(f"Invalid arguments for '{tool_name}': {e.error_count()} error(s)")
                return _text_content(f"Invalid arguments for {tool_name}: {e}", True)

        try:
            if metadata.get("async"):
                result = await tool_func(**arguments)
            else:
                loop = asyncio.get_running_loop()
                result = await loop.run_in_executor(
                    None, functools.partial(tool_func, **arguments)
                )
        except Exception as e:
            logger.error(f"Tool '{tool_name}' execution failed: {e}", exc_info=True)
            return _text_content(f"Error: {e}", True)

        if isinstance(result, dict):
            is_error = "error" in result
            text = json.dumps(result, indent=2, ensure_ascii=False)
        else:
            is_error = False
            text = result if isinstance(result, str) else str(result)

        logger.info(f"Tool '{tool_name}' finished{' with error payload' if is_error else ''}")
        return _text_content(text, is_error)
