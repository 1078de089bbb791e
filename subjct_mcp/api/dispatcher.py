"""Tool call dispatch for the SUBJCT MCP server.

This module provides the ToolDispatcher class which resolves a tool name to
its endpoint, checks the arguments, issues the request through a client and
wraps whatever happens into an MCP CallToolResult.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match
from mcp import types as mcp_types

from ..config import SubjctConfig
from .catalog import EndpointCatalog
from .errors import ArgumentValidationError
from .models import EndpointSpec


def format_result(result: Any) -> str:
    """Pretty-print an API result with two-space indentation"""
    return json.dumps(result, indent=2, ensure_ascii=False)


def text_result(text: str, is_error: bool = False) -> mcp_types.CallToolResult:
    return mcp_types.CallToolResult(
        content=[mcp_types.TextContent(type="text", text=text)],
        isError=is_error,
    )


def error_result(error: Exception) -> mcp_types.CallToolResult:
    return text_result(f"Error: {str(error) or type(error).__name__}", is_error=True)


def validate_arguments(endpoint: EndpointSpec, arguments: Dict[str, Any]) -> None:
    """Check arguments against the endpoint's input schema

    Raises:
        ArgumentValidationError: On the first schema violation found
    """
    validator = Draft7Validator(endpoint.input_schema)
    error = best_match(validator.iter_errors(arguments))
    if error is not None:
        path = ".".join(str(part) for part in error.path)
        raise ArgumentValidationError(endpoint.name, error.message, path)


class ToolDispatcher:
    """Dispatches MCP tool calls onto SUBJCT API requests

    Args:
        client: Object with an async request(path, method, body, use_secret_key) method
        config: Settings providing fallback organisation/property IDs
        catalog: Endpoint catalog, the full SUBJCT catalog by default
    """

    def __init__(self, client, config: Optional[SubjctConfig] = None, catalog: Optional[EndpointCatalog] = None):
        self.client = client
        self.config = config or SubjctConfig()
        self.catalog = catalog if catalog is not None else EndpointCatalog()

    def list_tools(self) -> List[mcp_types.Tool]:
        return self.catalog.list_tools()

    def apply_defaults(self, endpoint: EndpointSpec, arguments: Dict[str, Any]) -> Dict[str, Any]:
        """Fill omitted required IDs from the configured defaults"""
        arguments = dict(arguments)
        for name, value in self.config.argument_defaults.items():
            if name in endpoint.required and arguments.get(name) is None:
                arguments[name] = value
        return arguments

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> mcp_types.CallToolResult:
        """Run a tool call end to end

        Raises:
            UnknownToolError: If the tool name is not registered. Every
                other failure is returned as an isError result.
        """
        endpoint = self.catalog.get_endpoint(name)

        try:
            arguments = self.apply_defaults(endpoint, arguments or {})
            validate_arguments(endpoint, arguments)

            result = await self.client.request(
                endpoint.build_path(arguments),
                endpoint.method,
                endpoint.build_body(arguments),
                endpoint.use_secret_key,
            )
        except Exception as e:
            logging.error(f"[Dispatcher] Tool '{name}' failed: {e}")
            return error_result(e)

        logging.info(f"[Dispatcher] Tool '{name}' completed")
        return text_result(self.render(endpoint, result))

    @staticmethod
    def render(endpoint: EndpointSpec, result: Any) -> str:
        if endpoint.empty_response_text is not None:
            if not result:
                return endpoint.empty_response_text
            if isinstance(result, str):
                return result
        return format_result(result)


__all__ = [
    "ToolDispatcher",
    "format_result",
    "error_result",
    "validate_arguments",
]
