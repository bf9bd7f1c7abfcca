"""HomeSlice MCP Server - stdio entry point.

Binds the tool router to the MCP SDK's low-level server and serves it
over stdin/stdout. stdout carries protocol messages only; diagnostics
go to stderr.
"""

import asyncio
import sys
from typing import Any

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from shared.config import HomeSliceSettings, get_settings
from shared.errors import ConfigurationError
from shared.logging import get_logger, setup_logging
from domains import load_all_domains
from homeslice_server.router import ToolRouter

logger = get_logger(__name__)


def create_server(router: ToolRouter, settings: HomeSliceSettings) -> Server:
    """
    Create the MCP server for a router.

    Argument validation is done by the adapters, so the SDK's own
    schema check is turned off.
    """
    server = Server(settings.server_name, version=settings.server_version)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return router.list_tools()

    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> types.CallToolResult:
        return await router.call_tool(name, arguments)

    return server


async def serve(settings: HomeSliceSettings) -> None:
    """Run the server until stdin is closed."""
    router = ToolRouter()
    load_all_domains(router, settings)
    server = create_server(router, settings)

    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info(
                "HomeSlice MCP Server running on stdio",
                api_base=settings.api_base,
                tool_count=len(router.registry)
            )
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options()
            )
    finally:
        await router.close()
        logger.info("HomeSlice MCP Server stopped")


def main() -> None:
    """Run the HomeSlice MCP Server."""
    try:
        settings = get_settings()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Please set it in your .env file or as an environment variable", file=sys.stderr)
        sys.exit(1)

    setup_logging(settings.log_level, json_output=settings.json_logs)

    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger.error("Server error", error=str(e), exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
