import contextlib
import logging
import os
import sys
from collections.abc import AsyncIterator

from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route
from starlette.types import Receive, Scope, Send

from subjct_mcp.api import SubjctMCPServer
from subjct_mcp.config import SubjctConfig

logging.basicConfig(stream=sys.stderr, level=logging.INFO, format='[%(levelname)s] %(message)s')


def build_app(subjct_server: SubjctMCPServer) -> Starlette:
    """Build the Starlette app serving MCP over streamable HTTP

    Args:
        subjct_server: Server whose tools are exposed

    Returns:
        Starlette application with the MCP mount and a health route
    """
    mcp_server = subjct_server.get_server()
    tool_names = [tool.name for tool in subjct_server.get_dispatcher().list_tools()]

    session_manager = StreamableHTTPSessionManager(
        app=mcp_server,
        event_store=None,
        json_response=True,
        stateless=True,
    )

    async def handle_streamable_http(scope: Scope, receive: Receive, send: Send) -> None:
        """Handle MCP protocol requests via streamable HTTP"""
        await session_manager.handle_request(scope, receive, send)

    async def health_handler(request: Request) -> JSONResponse:
        return JSONResponse({
            "status": "healthy",
            "server": subjct_server.server_name,
            "tools_count": len(tool_names),
        })

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        """Context manager for session manager lifecycle."""
        async with session_manager.run():
            logging.info(f"[SubjctHTTP] {len(tool_names)} tools ready: {tool_names}")
            try:
                yield
            finally:
                logging.info("[SubjctHTTP] SUBJCT MCP Server shutting down...")

    return Starlette(
        routes=[
            Route("/health", health_handler, methods=["GET"]),
            Mount("/", app=handle_streamable_http),
        ],
        lifespan=lifespan,
    )


def main() -> None:
    port = int(os.getenv("PORT", 8080))
    host = os.getenv("HOST", "0.0.0.0")

    starlette_app = build_app(SubjctMCPServer(config=SubjctConfig.from_env()))
    logging.info(f"[SubjctHTTP] SUBJCT MCP Streamable HTTP Server starting on {host}:{port}")
    logging.info(f"[SubjctHTTP]   - POST http://{host}:{port}/ (MCP protocol)")
    logging.info(f"[SubjctHTTP]   - GET http://{host}:{port}/health (Health check)")

    import uvicorn
    uvicorn.run(starlette_app, host=host, port=port)


__all__ = ["build_app", "main"]


if __name__ == "__main__":
    main()
