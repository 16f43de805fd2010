"""FeaturePulse MCP Server - Expose feedback management to AI assistants."""
import sys
import asyncio
import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, TextContent, Tool

from . import __version__
from . import handlers
from . import tools
from .client import FeaturePulseClient
from .config import ConfigError, Settings


# Configure logging to stderr (stdout carries the MCP protocol)
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stderr,
    force=True
)
logger = logging.getLogger("featurepulse-mcp")


def create_server(settings: Settings) -> Server:
    """Build the MCP server. Each tool call gets its own API client."""
    app = Server("featurepulse", version=__version__)

    @app.list_tools()
    async def list_tools() -> list[Tool]:
        """List available MCP tools for feedback management."""
        return tools.get_tools()

    @app.call_tool()
    async def call_tool(name: str, arguments: Any) -> CallToolResult:
        """Handle MCP tool calls by delegating to handlers.dispatch."""
        logger.info(f"Tool call: {name} with arguments: {arguments}")

        async with FeaturePulseClient(settings) as client:
            result = await handlers.dispatch(name, arguments, client)

        return CallToolResult(
            content=[TextContent(type="text", text=result.text)],
            isError=result.is_error,
        )

    return app


async def main(settings: Settings):
    """Run the MCP server over stdio."""
    logger.info(f"MCP Server starting with FEATUREPULSE_URL: {settings.base_url}")
    app = create_server(settings)
    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())


def run():
    """Console entry point: load configuration, then serve until stdin closes."""
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    asyncio.run(main(settings))


if __name__ == "__main__":
    run()
