"""Core components for the Google Cloud docs MCP server"""

from .protocol import MCPProtocol, RequestHandlerExtra
from .registry import ToolRegistry
from .server import MCPServer
from .transport import StdioTransport, Transport

__all__ = [
    "MCPServer",
    "ToolRegistry",
    "MCPProtocol",
    "RequestHandlerExtra",
    "Transport",
    "StdioTransport",
]
