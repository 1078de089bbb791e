import asyncio
import logging
import sys

from mcp.server.stdio import stdio_server

from subjct_mcp.api import SubjctMCPServer
from subjct_mcp.config import SubjctConfig

logging.basicConfig(stream=sys.stderr, level=logging.INFO, format='[%(levelname)s] %(message)s')


async def run(config: SubjctConfig = None) -> None:
    """Serve the SUBJCT tools over stdin/stdout until the client disconnects"""
    mcp_server = SubjctMCPServer(config=config or SubjctConfig.from_env()).get_server()

    async with stdio_server() as (read_stream, write_stream):
        logging.info("SUBJCT MCP server running on stdio")
        await mcp_server.run(read_stream, write_stream, mcp_server.create_initialization_options())


def main() -> None:
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logging.info("SUBJCT MCP server shutting down...")
        sys.exit(0)


__all__ = ["run", "main"]


if __name__ == "__main__":
    main()
