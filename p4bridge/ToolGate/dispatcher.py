"""
ToolGate dispatcher.

Routes a tool call to the gateway and renders the reply as text. Protocol
errors use the agent protocol's error codes:

- unknown tool: METHOD_NOT_FOUND
- bad or missing arguments: INVALID_PARAMS
- anything else (gateway errors included): INTERNAL_ERROR
"""

from typing import Any, Awaitable, Callable, Dict, Optional

from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND, ErrorData

from p4bridge.shared.gate import GateLogger
from p4bridge.ToolGate import formatting
from p4bridge.ToolGate.client import GatewayClient
from p4bridge.ToolGate.protocol import validate_args
from p4bridge.ToolGate.registry import ToolRegistry
from p4bridge.ToolGate.scanner import analyze_sensitive_changes

_log = GateLogger.get("ToolGate")

Handler = Callable[[Dict[str, Any]], Awaitable[str]]


def _error(code: int, message: str) -> McpError:
    return McpError(ErrorData(code=code, message=message))


class ToolDispatcher:
    """Executes catalog tools against a GatewayClient."""

    def __init__(self, client: GatewayClient):
        self.client = client
        self._handlers: Dict[str, Handler] = {
            "get_server_info": self.get_server_info,
            "list_files": self.list_files,
            "get_file_content": self.get_file_content,
            "get_file_history": self.get_file_history,
            "list_changes": self.list_changes,
            "get_change_details": self.get_change_details,
            "list_users": self.list_users,
            "sync_files": self.sync_files,
            "analyze_sensitive_changes": self.analyze_sensitive_changes,
        }

    async def call(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> str:
        """
        Run one tool and return its text.

        Raises:
            McpError: With the protocol error code for the failure
        """
        tool = ToolRegistry.get_tool(name)
        handler = self._handlers.get(name)
        if tool is None or handler is None:
            raise _error(METHOD_NOT_FOUND, f"Unknown tool: {name}")

        args = tool.apply_defaults(arguments)
        is_valid, message = validate_args(tool, args)
        if not is_valid:
            raise _error(INVALID_PARAMS, message)

        try:
            return await handler(args)
        except McpError:
            raise
        except Exception as e:
            _log.error(f"Error in tool {name}: {e}")
            raise _error(INTERNAL_ERROR, f"Tool execution failed: {e}") from e

    # ==================== Tools ====================

    async def get_server_info(self, args: Dict[str, Any]) -> str:
        result = await self.client.get("/info")
        return formatting.server_info(result.get("data", {}))

    async def list_files(self, args: Dict[str, Any]) -> str:
        path = args["path"]
        result = await self.client.get("/files", params={"path": path, "max": args["max"]})
        return formatting.file_list(path, result.get("data", {}))

    async def get_file_content(self, args: Dict[str, Any]) -> str:
        path = args["path"]
        revision = args.get("revision")
        result = await self.client.get(
            "/files/content", params={"path": path, "revision": revision}
        )
        return formatting.file_content(path, revision, result.get("data", {}))

    async def get_file_history(self, args: Dict[str, Any]) -> str:
        path = args["path"]
        result = await self.client.get("/files/history", params={"path": path, "max": args["max"]})
        return formatting.file_history(path, result.get("data", {}))

    async def list_changes(self, args: Dict[str, Any]) -> str:
        params = {
            "max": args["max"],
            "status": args.get("status") or None,
            "user": args.get("user") or None,
        }
        result = await self.client.get("/changes", params=params)
        return formatting.change_list(result.get("data", {}))

    async def get_change_details(self, args: Dict[str, Any]) -> str:
        change_id = args["changeId"]
        result = await self.client.get(f"/changes/{change_id}")
        return formatting.change_detail(change_id, result.get("data", {}))

    async def list_users(self, args: Dict[str, Any]) -> str:
        result = await self.client.get("/users")
        return formatting.user_list(result.get("data", {}))

    async def sync_files(self, args: Dict[str, Any]) -> str:
        path = args["path"]
        force = bool(args["force"])
        result = await self.client.post("/sync", json={"path": path, "force": force})
        return formatting.sync_result(path, force, result.get("data", {}))

    async def analyze_sensitive_changes(self, args: Dict[str, Any]) -> str:
        return await analyze_sensitive_changes(
            self.client,
            max_changes=args["maxChanges"],
            keywords=args["keywords"],
        )


__all__ = [
    "ToolDispatcher",
]
