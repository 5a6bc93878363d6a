"""
Main entry point for the Google Cloud docs MCP server
"""

import argparse
import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

from . import __version__
from .config import get_settings
from .core.server import MCPServer
from .core.transport import StdioTransport
from .exceptions import ConfigurationError
from .utils.logging import setup_logging

DEFAULT_SERVER_NAME = "google-cloud-docs-mcp-server"

logger = logging.getLogger(__name__)


def create_server(server_name: str | None = None) -> MCPServer:
    """Build a server with the documentation tools registered"""
    server = MCPServer(name=server_name or DEFAULT_SERVER_NAME, version=__version__)

    from . import tools

    server.tool_registry.auto_discover_tools(tools)
    logger.info(f"Discovered {len(server.tool_registry.list_tools())} tools")
    return server


async def run_stdio_server(server_name: str | None = None, log_level: str = "INFO") -> None:
    """Run MCP server with stdio transport"""
    # stdout belongs to the protocol
    setup_logging(level=log_level, disable_stdio_logging=True)

    server = create_server(server_name)
    await server.run(StdioTransport())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gcloud-docs-mcp",
        description="MCP server for searching and reading Google Cloud documentation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
  GCLOUD_DOCS_MCP_SERVER_NAME    Server name identifier
  GCLOUD_DOCS_MCP_LOG_LEVEL      Logging level (DEBUG, INFO, WARNING, ERROR)
  GCLOUD_DOCS_BASE_URL           Documentation site (default: https://cloud.google.com)
  GCLOUD_DOCS_PAGE_TIMEOUT       Page fetch timeout in seconds (default: 30)
  GCLOUD_DOCS_SEARCH_TIMEOUT     Search probe timeout in seconds (default: 15)
  GCLOUD_DOCS_MAX_CONTENT_CHARS  Maximum characters of page content (default: 20000)
  GCLOUD_DOCS_WEB_SEARCH         Enable the web search probe (default: true)
  GCLOUD_DOCS_SITE_SEARCH        Enable the site search probe (default: true)
  GCLOUD_DOCS_USER_AGENT         User agent sent with every request

Variables may also be set in a .env file in the working directory.

Examples:
  # Run with stdio (for MCP clients)
  gcloud-docs-mcp

  # Verbose logging to stderr
  gcloud-docs-mcp --log-level DEBUG
""",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=os.getenv("GCLOUD_DOCS_MCP_LOG_LEVEL", "INFO"),
        help="Logging level (default: INFO, env: GCLOUD_DOCS_MCP_LOG_LEVEL)",
    )
    parser.add_argument(
        "--server-name",
        default=os.getenv("GCLOUD_DOCS_MCP_SERVER_NAME", DEFAULT_SERVER_NAME),
        help=f"Server name identifier (default: {DEFAULT_SERVER_NAME}, env: GCLOUD_DOCS_MCP_SERVER_NAME)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def cli_main() -> None:
    """CLI entry point"""
    load_dotenv()
    args = build_parser().parse_args()

    try:
        get_settings()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        asyncio.run(run_stdio_server(server_name=args.server_name, log_level=args.log_level))
    except KeyboardInterrupt:
        print("Server stopped by user", file=sys.stderr)
        sys.exit(0)
    except Exception as e:
        print(f"Server error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    cli_main()
