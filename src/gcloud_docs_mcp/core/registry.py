"""
Tool registry for managing MCP tools
"""

import importlib
import logging
import pkgutil
from collections.abc import Callable
from types import ModuleType
from typing import Any, Optional

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    Registry of functions decorated with ``@tool``, keyed by tool name
    """

    def __init__(self):
        self._tools: dict[str, Callable] = {}

    def tool(self) -> Callable[[Callable], Callable]:
        """
        Decorator that registers a function already carrying ``@tool`` metadata.

        Registering a name twice replaces the earlier function.
        """

        def decorator(func: Callable) -> Callable:
            metadata = getattr(func, "_mcp_tool_metadata", None)
            if metadata is None:
                logger.warning(
                    f"Function {func.__name__} does not have MCP tool metadata. Use @tool decorator first."
                )
                return func

            tool_name = metadata["name"]
            if tool_name in self._tools:
                logger.debug(f"Replacing registered tool: {tool_name}")
            self._tools[tool_name] = func
            logger.info(f"Registered tool: {tool_name}")
            return func

        return decorator

    def get_tool(self, name: str) -> Optional[Callable]:
        """Get a registered tool by name"""
        return self._tools.get(name)

    def get_metadata(self, name: str) -> Optional[dict[str, Any]]:
        func = self._tools.get(name)
        return None if func is None else func._mcp_tool_metadata

    def list_tools(self) -> list[str]:
        """List all registered tool names"""
        return list(self._tools.keys())

    @property
    def tools(self) -> list[dict[str, Any]]:
        """MCP tool descriptors for ``tools/list``"""
        descriptors = []
        for func in self._tools.values():
            metadata = func._mcp_tool_metadata
            descriptors.append({
                "name": metadata["name"],
                "description": metadata["description"],
                "inputSchema": metadata["parameters"],
            })
        return descriptors

    def auto_discover_tools(self, module_or_package: ModuleType | str):
        """
        Register every ``@tool`` function found in a module or package.

        Args:
            module_or_package: The module or package (or its dotted name) to scan
        """
        if isinstance(module_or_package, str):
            module_or_package = importlib.import_module(module_or_package)

        if hasattr(module_or_package, "__path__"):
            for _, modname, _ in pkgutil.iter_modules(
                module_or_package.__path__, module_or_package.__name__ + "."
            ):
                try:
                    submodule = importlib.import_module(modname)
                except ImportError as e:
                    logger.warning(f"Could not import {modname}: {e}")
                    continue
                self._scan_module_for_tools(submodule)
        else:
            self._scan_module_for_tools(module_or_package)

    def _scan_module_for_tools(self, module: ModuleType):
        """Scan a module for functions decorated with @tool"""
        for name in dir(module):
            obj = getattr(module, name)
            if callable(obj) and hasattr(obj, "_mcp_tool_metadata"):
                self.tool()(obj)
                logger.debug(f"Auto-discovered tool: {obj._mcp_tool_metadata['name']}")
