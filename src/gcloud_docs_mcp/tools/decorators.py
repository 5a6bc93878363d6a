"""
Tool registration decorators for the MCP server
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any, Optional, get_type_hints

from pydantic import BaseModel

logger = logging.getLogger(__name__)


def tool(
    name: str | None = None,
    description: str | None = None,
    input_model: Optional[type[BaseModel]] = None,
) -> Callable[[Callable], Callable]:
    """
    Decorator to mark a function as an MCP tool.

    The input schema comes from ``input_model`` when given (field
    descriptions and constraints included); otherwise it is generated from
    the function signature and type hints. The server validates call
    arguments against ``input_model`` before invoking the function.

    Args:
        name: Optional custom name for the tool. Defaults to function name.
        description: Optional description for the tool. Defaults to function docstring.
        input_model: Optional pydantic model describing the arguments.

    Example:
        class EchoInput(BaseModel):
            text: str = Field(description="Text to echo back")

        @tool(description="Echo text", input_model=EchoInput)
        async def echo(text: str) -> str:
            return text
    """

    def decorator(func: Callable) -> Callable:
        tool_name = name or func.__name__
        tool_description = description or inspect.cleandoc(func.__doc__ or "")

        if input_model is not None:
            parameters_schema = model_parameters_schema(input_model)
        else:
            parameters_schema = _generate_parameters_schema(
                inspect.signature(func), get_type_hints(func)
            )

        func._mcp_tool_metadata = {
            "name": tool_name,
            "description": tool_description,
            "parameters": parameters_schema,
            "input_model": input_model,
            "function": func,
            "async": inspect.iscoroutinefunction(func),
        }

        logger.debug(
            f"Tool decorated: {tool_name} ({'async' if inspect.iscoroutinefunction(func) else 'sync'})"
        )

        return func

    return decorator


def model_parameters_schema(model: type[BaseModel]) -> dict[str, Any]:
    """JSON schema of a pydantic model, without pydantic's generated titles"""
    schema = model.model_json_schema()
    properties = {}
    for field_name, field_schema in schema.get("properties", {}).items():
        properties[field_name] = {k: v for k, v in field_schema.items() if k != "title"}

    result: dict[str, Any] = {"type": "object", "properties": properties}
    if schema.get("required"):
        result["required"] = list(schema["required"])
    return result


def _generate_parameters_schema(
    signature: inspect.Signature, type_hints: dict[str, Any]
) -> dict[str, Any]:
    """Generate JSON schema for function parameters"""
    properties = {}
    required = []

    for param_name, param in signature.parameters.items():
        if param_name == "self":
            continue

        param_info = _type_to_json_schema(type_hints.get(param_name, str))

        if param.default is not inspect.Parameter.empty:
            if param.default is not None:
                param_info["default"] = param.default
        else:
            required.append(param_name)

        properties[param_name] = param_info

    schema: dict[str, Any] = {"type": "object", "properties": properties}

    if required:
        schema["required"] = required

    return schema


def _type_to_json_schema(python_type: Any) -> dict[str, Any]:
    """Convert Python type to JSON schema"""
    simple_types = {
        str: "string",
        int: "integer",
        float: "number",
        bool: "boolean",
        list: "array",
        dict: "object",
    }
    if python_type in simple_types:
        return {"type": simple_types[python_type]}

    origin = getattr(python_type, "__origin__", None)
    if origin in (list, dict):
        return {"type": simple_types[origin]}

    # Optional[X] and other unions: use the first non-None member
    for arg in getattr(python_type, "__args__", ()):
        if arg is not type(None):
            return _type_to_json_schema(arg)

    return {"type": "string"}
