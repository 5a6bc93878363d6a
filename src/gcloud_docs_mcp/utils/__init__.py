"""Utilities for the Google Cloud docs MCP server"""

from .logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
