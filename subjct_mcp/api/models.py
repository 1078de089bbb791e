"""Data models for SUBJCT API endpoints.

This module contains the EndpointSpec structure that describes how a single
MCP tool maps onto one SUBJCT REST endpoint: method, path template, which
credential to attach and how the request body is shaped.
"""

import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote, urlencode

from mcp import types as mcp_types


class HTTPMethod(Enum):
    """HTTP methods used by the SUBJCT API"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"


class BodySource(Enum):
    """Where the JSON request body comes from"""
    NONE = "none"
    ARGUMENT = "argument"
    FIELDS = "fields"


@dataclass(frozen=True)
class EndpointSpec:
    """Configuration for one SUBJCT API endpoint exposed as an MCP tool

    Args:
        name: Unique tool name
        description: Tool description shown to the MCP client
        method: HTTP method to use
        path: Path template, placeholders like /metrics/{organisationId}
        input_schema: JSON schema for the tool arguments
        use_secret_key: Send the secret-key header instead of the bearer token
        body_source: How the request body is built
        body_argument: Argument forwarded verbatim when body_source is ARGUMENT
        body_fields: Arguments copied into the body when body_source is FIELDS
        query_fields: Arguments sent as query parameters, in order
        scope_field: Argument whose presence switches to scoped_path
        scoped_path: Path template used when scope_field is present
        empty_response_text: Text returned when the API answers with an empty body
    """
    name: str
    description: str
    method: HTTPMethod
    path: str
    input_schema: Dict[str, Any] = field(default_factory=lambda: {"type": "object", "properties": {}})
    use_secret_key: bool = False
    body_source: BodySource = BodySource.NONE
    body_argument: Optional[str] = None
    body_fields: Tuple[str, ...] = ()
    query_fields: Tuple[str, ...] = ()
    scope_field: Optional[str] = None
    scoped_path: Optional[str] = None
    empty_response_text: Optional[str] = None

    @property
    def required(self) -> Tuple[str, ...]:
        return tuple(self.input_schema.get("required", ()))

    def path_template(self, arguments: Dict[str, Any]) -> str:
        """Pick the path template, honouring the optional scope argument"""
        if self.scope_field and arguments.get(self.scope_field) is not None:
            return self.scoped_path
        return self.path

    def build_path(self, arguments: Dict[str, Any]) -> str:
        """Fill the path template and append the query string

        Path segments are percent-encoded. Query parameters with falsy
        values are left out; when query_fields is set the '?' is always
        emitted, even with no parameters.
        """
        template = self.path_template(arguments)
        segments = {
            placeholder: quote(str(arguments[placeholder]), safe="")
            for _, placeholder, _, _ in string.Formatter().parse(template)
            if placeholder
        }
        path = template.format(**segments)

        if self.query_fields:
            params = [
                (param, str(arguments[param]))
                for param in self.query_fields
                if arguments.get(param)
            ]
            path = f"{path}?{urlencode(params)}"
        return path

    def build_body(self, arguments: Dict[str, Any]) -> Optional[Any]:
        """Build the JSON body, or None when the request carries no body"""
        if self.body_source is BodySource.ARGUMENT:
            return arguments.get(self.body_argument)
        if self.body_source is BodySource.FIELDS:
            return {
                name: arguments[name]
                for name in self.body_fields
                if arguments.get(name) is not None
            }
        return None

    def to_tool(self) -> mcp_types.Tool:
        """Convert to the MCP tool descriptor"""
        return mcp_types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )


__all__ = [
    "HTTPMethod",
    "BodySource",
    "EndpointSpec",
]
