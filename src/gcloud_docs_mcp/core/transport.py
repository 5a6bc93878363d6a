"""
Transport layer for the MCP server
Newline-delimited JSON-RPC over standard input/output
"""

import asyncio
import json
import logging
import sys
from abc import ABC, abstractmethod
from typing import Any

from .protocol import JSONRPC_VERSION, PARSE_ERROR

logger = logging.getLogger(__name__)


class Transport(ABC):
    """Abstract base class for MCP transport implementations"""

    @abstractmethod
    async def connect(self):
        """Establish connection"""

    @abstractmethod
    async def send(self, message: dict[str, Any]) -> None:
        """Send a message"""

    @abstractmethod
    async def receive(self) -> dict[str, Any] | None:
        """Receive the next message, or None once the peer has gone away"""

    @abstractmethod
    async def close(self) -> None:
        """Close the connection"""


class StdioTransport(Transport):
    """
    Transport using standard input/output for communication.

    Each message is one JSON object on one line. stdout carries protocol
    traffic only, so logging must go to stderr while this transport is in use.
    """

    def __init__(self):
        self.closed = False
        self._receive_queue: asyncio.Queue = asyncio.Queue()
        self._stdin_reader: asyncio.StreamReader | None = None
        self._stdin_task: asyncio.Task | None = None
        logger.info("StdioTransport initialized")

    async def connect(self):
        """Connect to stdio streams"""
        if self._stdin_task and not self._stdin_task.done():
            logger.warning("StdioTransport: Already connected")
            return

        try:
            loop = asyncio.get_running_loop()
            self._stdin_reader = asyncio.StreamReader(loop=loop)
            protocol = asyncio.StreamReaderProtocol(self._stdin_reader, loop=loop)
            await loop.connect_read_pipe(lambda: protocol, sys.stdin)
        except (OSError, ValueError) as e:
            logger.error(f"StdioTransport: Failed to connect to stdin: {e}", exc_info=True)
            self.closed = True
            await self._receive_queue.put(None)
            return

        self._stdin_task = asyncio.create_task(self._read_stdin_async(), name="StdioReader")
        logger.info("StdioTransport: Connected to stdin")

    async def _read_stdin_async(self):
        """Async stdin reader task"""
        buffer = b""
        while not self.closed:
            try:
                chunk = await self._stdin_reader.read(4096)
            except asyncio.CancelledError:
                logger.info("StdioTransport: Reader task cancelled")
                break
            except OSError as e:
                logger.error(f"StdioTransport: Error reading stdin: {e}", exc_info=True)
                break

            if not chunk:
                logger.info("StdioTransport: EOF received, closing")
                if buffer.strip():
                    await self.feed_line(buffer)
                break

            buffer += chunk
            while b"\n" in buffer:
                line, buffer = buffer.split(b"\n", 1)
                await self.feed_line(line)

        self.closed = True
        await self._receive_queue.put(None)
        logger.debug("StdioTransport: Reader task finished")

    async def feed_line(self, line: bytes | str) -> None:
        """Decode one input line and queue the message it carries"""
        if isinstance(line, bytes):
            line = line.decode("utf-8", errors="replace")
        line = line.strip()
        if not line:
            return

        try:
            message = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning(f"StdioTransport: Invalid JSON: {e}")
            await self.send({
                "jsonrpc": JSONRPC_VERSION,
                "id": None,
                "error": {"code": PARSE_ERROR, "message": f"Parse error: {e}"},
            })
            return

        await self._receive_queue.put(message)

    async def send(self, message: dict[str, Any]) -> None:
        """Write one message to stdout"""
        if "jsonrpc" not in message:
            message["jsonrpc"] = JSONRPC_VERSION

        try:
            message_json = json.dumps(message, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.error(f"StdioTransport: Could not serialize message: {e}")
            return

        print(message_json, flush=True)
        logger.debug(
            f"StdioTransport: Sent {self._get_message_type(message)} (ID: {message.get('id', 'N/A')})"
        )

    def _get_message_type(self, message: dict[str, Any]) -> str:
        """Determine message type for logging"""
        if "result" in message:
            return "response"
        elif "error" in message:
            return "error"
        elif "method" in message:
            return "notification"
        return "unknown"

    async def receive(self) -> dict[str, Any] | None:
        """Receive message from queue"""
        if self.closed and self._receive_queue.empty():
            return None

        message = await self._receive_queue.get()
        self._receive_queue.task_done()
        if message is None:
            self.closed = True
        return message

    async def close(self) -> None:
        """Close the transport"""
        if self.closed and not self._stdin_task:
            return

        logger.info("StdioTransport: Closing")
        self.closed = True

        if self._stdin_task and not self._stdin_task.done():
            self._stdin_task.cancel()
            try:
                await asyncio.wait_for(self._stdin_task, timeout=1.0)
            except (asyncio.CancelledError, asyncio.TimeoutError):
                pass
        self._stdin_task = None

        self._receive_queue.put_nowait(None)
        logger.info("StdioTransport: Closed")
