"""
Google Cloud docs MCP server
Search, fetch and read Google Cloud documentation from any MCP client
"""

__version__ = "0.1.0"

from .config import Settings, get_settings
from .core.protocol import MCPProtocol
from .core.registry import ToolRegistry
from .core.server import MCPServer
from .core.transport import StdioTransport, Transport
from .docs.service import DocsService
from .tools.decorators import tool

__all__ = [
    "DocsService",
    "MCPServer",
    "MCPProtocol",
    "Settings",
    "StdioTransport",
    "ToolRegistry",
    "Transport",
    "get_settings",
    "tool",
]
