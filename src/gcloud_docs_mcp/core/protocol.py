"""
JSON-RPC 2.0 message handling for the MCP server
Parses requests, routes them to handlers and formats responses
"""

import json
import logging
import traceback
from collections.abc import Callable, Coroutine
from typing import Any, NamedTuple

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"

# JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
SERVER_ERROR = -32000

RequestHandler = Callable[[dict[str, Any], "RequestHandlerExtra"], Coroutine[Any, Any, Any]]


class RequestHandlerExtra(NamedTuple):
    """Extra information passed to request handlers"""

    id: str | int | None  # Request ID


class MCPProtocol:
    """Routes JSON-RPC messages to registered handlers"""

    def __init__(self):
        self._request_handlers: dict[str, RequestHandler] = {}
        logger.debug("MCPProtocol initialized")

    def set_request_handler(self, method: str, handler: RequestHandler):
        """Register a handler for a request or notification method"""
        self._request_handlers[method] = handler
        logger.debug(f"Registered request handler for method: {method}")

    async def handle_message(
        self, message_data: dict[str, Any]
    ) -> dict[str, Any] | None:
        """
        Process one incoming message and build its response.

        Args:
            message_data: The parsed JSON object from the incoming message

        Returns:
            The JSON-RPC response to send, or None for notifications
        """
        if not isinstance(message_data, dict):
            return self._format_error(
                None, INVALID_REQUEST, "Invalid Request", "Message must be a JSON object"
            )

        request_id = message_data.get("id")
        method = message_data.get("method")
        params = message_data.get("params") or {}
        extra = RequestHandlerExtra(id=request_id)

        if message_data.get("jsonrpc") != JSONRPC_VERSION:
            logger.warning(
                f"Invalid JSON-RPC version in message: {str(message_data)[:150]}"
            )
            return self._format_error(
                None, INVALID_REQUEST, "Invalid Request", "Invalid JSON-RPC version"
            )

        if not method:
            logger.warning(f"Missing method in message: {str(message_data)[:150]}")
            return self._format_error(
                request_id, INVALID_REQUEST, "Invalid Request", "'method' parameter is missing"
            )

        handler = self._request_handlers.get(method)
        if handler is None:
            if request_id is None:
                logger.debug(f"Ignoring unhandled notification '{method}'")
                return None
            logger.warning(f"No handler found for method '{method}' (ID: {request_id})")
            return self._format_error(request_id, METHOD_NOT_FOUND, f"Method not found: {method}")

        try:
            logger.debug(f"Calling handler for method '{method}' (ID: {request_id})")
            result_data = await handler(params, extra)
        except Exception as e:
            detailed_error = (
                f"Server error executing method '{method}': {type(e).__name__}: {e}"
            )
            logger.error(
                f"Exception during handler execution for '{method}' (ID: {request_id}): {detailed_error}",
                exc_info=True,
            )
            if request_id is None:
                return None
            error_data = (
                traceback.format_exc() if logger.isEnabledFor(logging.DEBUG) else None
            )
            return self._format_error(request_id, SERVER_ERROR, detailed_error, error_data)

        if request_id is None:
            logger.debug(f"Notification for method '{method}' processed")
            return None
        return self._format_result(request_id, result_data)

    def parse_error(self, detail: str) -> dict[str, Any]:
        """Response for a message that was not valid JSON"""
        return self._format_error(None, PARSE_ERROR, f"Parse error: {detail}")

    def _format_result(self, req_id: str | int, result: Any) -> dict[str, Any]:
        """Format a successful JSON-RPC response"""
        try:
            json.dumps(result)
            final_result = result
        except (TypeError, ValueError) as e:
            logger.error(
                f"Result for request ID {req_id} is not JSON serializable: {e}"
            )
            final_result = f"[Non-Serializable Result: {type(result).__name__}] {str(result)[:500]}"

        return {"jsonrpc": JSONRPC_VERSION, "id": req_id, "result": final_result}

    def _format_error(
        self, req_id: str | int | None, code: int, message: str, data: Any | None = None
    ) -> dict[str, Any]:
        """Format a JSON-RPC error response"""
        error_obj: dict[str, Any] = {"code": code, "message": message}

        if data is not None:
            if isinstance(data, (str, int, float, bool, list, dict)):
                error_obj["data"] = data
            else:
                error_obj["data"] = (
                    f"Non-serializable data of type {type(data).__name__}: {str(data)[:100]}"
                )

        return {"jsonrpc": JSONRPC_VERSION, "id": req_id, "error": error_obj}
