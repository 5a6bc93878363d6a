"""MCP tools: the ``@tool`` decorator and the Google Cloud documentation tools"""

from .decorators import tool

__all__ = ["tool"]
