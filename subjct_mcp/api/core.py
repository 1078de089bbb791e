"""Core MCP server implementation for the SUBJCT API.

This module provides the SubjctMCPServer class which serves as the main
MCP server that handles tool listing and execution using a ToolDispatcher.
"""

import json
import logging

from mcp import types as mcp_types
from mcp.server.lowlevel import Server
from mcp.shared.exceptions import McpError

from ..config import SubjctConfig
from .client import SubjctClient
from .dispatcher import ToolDispatcher
from .errors import UnknownToolError

SERVER_NAME = "subjct-api-server"
SERVER_VERSION = "1.0.0"


class SubjctMCPServer:
    """MCP Server that serves the SUBJCT tools from a ToolDispatcher

    This server focuses solely on MCP protocol handling (list_tools, call_tool)
    and delegates request building and execution to a ToolDispatcher.

    Args:
        server_name: Name for the MCP server instance
        dispatcher: ToolDispatcher to route calls through
        config: Settings used to build the default dispatcher and client
    """

    def __init__(self, server_name: str = SERVER_NAME, dispatcher: ToolDispatcher = None, config: SubjctConfig = None):
        self.server_name = server_name
        self.server = Server(server_name, version=SERVER_VERSION)
        if dispatcher is None:
            config = config or SubjctConfig.from_env()
            dispatcher = ToolDispatcher(SubjctClient(config), config)
        self.dispatcher = dispatcher
        self._setup_server()
        logging.info(f"[SubjctMCP] Initialized MCP server '{server_name}'")

    def _setup_server(self) -> None:
        """Setup the MCP server with list_tools and call_tool handlers"""

        @self.server.list_tools()
        async def list_tools():
            tools = self.dispatcher.list_tools()
            logging.info(f"[SubjctMCP] Returning {len(tools)} tools to MCP client")
            return tools

        # Registered directly so unknown tools surface as JSON-RPC errors
        # instead of being folded into an isError result.
        self.server.request_handlers[mcp_types.CallToolRequest] = self._handle_call_tool

    async def _handle_call_tool(self, request: mcp_types.CallToolRequest) -> mcp_types.ServerResult:
        name = request.params.name
        arguments = request.params.arguments or {}
        logging.info(f"[SubjctMCP] Tool call: {name} with args: {json.dumps(sorted(arguments))}")

        try:
            result = await self.dispatcher.call_tool(name, arguments)
        except UnknownToolError as e:
            logging.warning(f"[SubjctMCP] Tool '{name}' not found")
            raise McpError(mcp_types.ErrorData(code=mcp_types.METHOD_NOT_FOUND, message=str(e))) from e

        return mcp_types.ServerResult(result)

    def get_server(self) -> Server:
        """Get the configured MCP server instance

        Returns:
            The underlying MCP Server instance
        """
        return self.server

    def get_dispatcher(self) -> ToolDispatcher:
        return self.dispatcher


__all__ = [
    "SERVER_NAME",
    "SERVER_VERSION",
    "SubjctMCPServer",
]
