"""
Logging utilities for the Google Cloud docs MCP server
"""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "gcloud_docs_mcp"


def setup_logging(
    level: str = "INFO",
    format_string: Optional[str] = None,
    include_timestamp: bool = True,
    disable_stdio_logging: bool = False,
) -> None:
    """
    Set up logging configuration for the MCP server.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string for log messages
        include_timestamp: Whether to include timestamp in log messages
        disable_stdio_logging: Keep stdout free for protocol messages by
            writing log records to stderr instead
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_string is None:
        if include_timestamp:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(name)s - %(levelname)s - %(message)s"

    stream = sys.stderr if disable_stdio_logging else sys.stdout

    logging.basicConfig(
        level=log_level,
        format=format_string,
        stream=stream,
        force=True,
    )

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(log_level)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))

    logger.info(f"Logging configured at {level} level")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Name of the logger (typically __name__)

    Returns:
        Logger instance
    """
    if name.startswith(PACKAGE_LOGGER):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
