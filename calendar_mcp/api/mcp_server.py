"""MCP stdio host for the calendar and routing tools.

Tool listing and calls are forwarded to the Dispatcher; this module only
translates between MCP types and ToolResult envelopes.
"""

import logging
from typing import Any, Dict, List

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from calendar_mcp.api.dispatcher import Dispatcher

logger = logging.getLogger(__name__)

SERVER_NAME = "calendar"
SERVER_VERSION = "1.0.0"


class ToolCallFailed(Exception):
    """Raised to the MCP runtime so it answers with isError=true."""


def create_mcp_server(dispatcher: Dispatcher, name: str = SERVER_NAME) -> Server:
    """Build an MCP Server whose tools are the dispatcher's registry."""
    server = Server(name, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> List[Tool]:
        """Return list of available tools."""
        return [
            Tool(name=d.name, description=d.description, inputSchema=d.input_schema())
            for d in dispatcher.registry.descriptors()
        ]

    # arguments are validated by the registry, not by the MCP runtime
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
        """Handle tool calls."""
        result = await dispatcher.call(name, arguments)
        if result.is_error:
            raise ToolCallFailed(result.text)
        return [TextContent(type="text", text=block.text) for block in result.content]

    return server


async def run_mcp_server(server: Server) -> None:
    """Serve MCP over stdio until the client disconnects."""
    logger.info("Calendar MCP Server running on stdio")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
