"""SUBJCT API tools for MCP.

This package maps SUBJCT REST endpoints onto MCP tools and serves them
through a low-level MCP server.
"""

from .catalog import ENDPOINTS, EndpointCatalog
from .client import SubjctClient
from .core import SubjctMCPServer
from .dispatcher import ToolDispatcher
from .errors import APIRequestError, APITimeoutError, ArgumentValidationError, SubjctError, UnknownToolError
from .models import BodySource, EndpointSpec, HTTPMethod

__all__ = [
    "SubjctMCPServer",
    "ToolDispatcher",
    "SubjctClient",
    "EndpointCatalog",
    "ENDPOINTS",
    "EndpointSpec",
    "BodySource",
    "HTTPMethod",
    "SubjctError",
    "APIRequestError",
    "APITimeoutError",
    "ArgumentValidationError",
    "UnknownToolError",
]
