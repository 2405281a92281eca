"""
ToolGate MCP server.

Serves the Perforce tool catalog to agents over stdio.

Usage:
    p4bridge-mcp
    PERFORCE_API_URL=http://gateway:3000/api p4bridge-mcp
"""

import asyncio
from typing import List, Optional

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from p4bridge import Config
from p4bridge.shared.gate import GateLogger
from p4bridge.ToolGate.client import GatewayClient
from p4bridge.ToolGate.dispatcher import ToolDispatcher
from p4bridge.ToolGate.registry import ToolRegistry

_log = GateLogger.get("ToolGate.Server")

SERVER_NAME = "perforce-mcp-server"
SERVER_VERSION = "0.1.0"


def list_tool_specs() -> List[types.Tool]:
    """Catalog in the protocol's Tool form, with read-only hints from each tool's policy."""
    return [
        types.Tool(
            name=tool.name,
            description=tool.description,
            inputSchema=tool.get_json_schema(),
            annotations=types.ToolAnnotations(
                readOnlyHint=tool.read_only,
                destructiveHint=False,
                openWorldHint=False,
            ),
        )
        for tool in ToolRegistry.list_tools()
    ]


def create_server(dispatcher: ToolDispatcher) -> Server:
    """
    Build an MCP server wired to a dispatcher.

    The call handler is registered directly so that McpError from the
    dispatcher reaches the client as a JSON-RPC error carrying its code.
    The call_tool() decorator would fold it into an isError result.
    """
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def handle_list_tools() -> List[types.Tool]:
        return list_tool_specs()

    async def handle_call_tool(request: types.CallToolRequest) -> types.ServerResult:
        params = request.params
        text = await dispatcher.call(params.name, params.arguments or {})
        return types.ServerResult(
            types.CallToolResult(
                content=[types.TextContent(type="text", text=text)],
                isError=False,
            )
        )

    server.request_handlers[types.CallToolRequest] = handle_call_tool
    return server


def build_dispatcher(manager: Optional[Config.ConfigManager] = None) -> ToolDispatcher:
    """Dispatcher for the gateway named in configuration."""
    manager = manager or Config.get_manager()
    client = GatewayClient(
        base_url=manager.get("PERFORCE_API_URL"),
        timeout=manager.get("PERFORCE_API_TIMEOUT"),
    )
    return ToolDispatcher(client)


async def serve() -> None:
    dispatcher = build_dispatcher()
    server = create_server(dispatcher)
    _log.info(f"Perforce MCP server running on stdio (gateway {dispatcher.client.base_url})")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main() -> None:
    GateLogger.set_level(Config.get("LOG_LEVEL", "INFO"))
    asyncio.run(serve())


if __name__ == "__main__":
    main()
