"""
ToolGate Registry.

Catalog of the Perforce tools offered to agents, with their argument schemas.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from p4bridge.shared.gate import GateLogger
from p4bridge.ToolGate.models import (
    ArgSchema,
    PolicyClass,
    ToolDefinition,
)

_log = GateLogger.get("ToolGate")


DEFAULT_SENSITIVE_KEYWORDS = ["password", "secret", "key", "token", "credential", "auth"]


PERFORCE_TOOLS: List[Dict[str, Any]] = [
    {
        "name": "get_server_info",
        "description": "Get Perforce server information and status",
        "args": {},
    },
    {
        "name": "list_files",
        "description": "List files in the Perforce depot with optional path filtering",
        "args": {
            "path": ArgSchema(type="string", description="Depot path to list files from (e.g., //depot/...)", required=False, default="//depot/..."),
            "max": ArgSchema(type="integer", description="Maximum number of files to return (1-1000)", required=False, default=100, minimum=1, maximum=1000),
        },
    },
    {
        "name": "get_file_content",
        "description": "Get the content of a specific file from Perforce",
        "args": {
            "path": ArgSchema(type="string", description="Full depot path to the file (e.g., //depot/main/file.txt)", required=True),
            "revision": ArgSchema(type="integer", description="Specific revision number to retrieve (optional)", required=False),
        },
    },
    {
        "name": "get_file_history",
        "description": "Get the revision history of a specific file",
        "args": {
            "path": ArgSchema(type="string", description="Full depot path to the file", required=True),
            "max": ArgSchema(type="integer", description="Maximum number of history entries to return (1-100)", required=False, default=10, minimum=1, maximum=100),
        },
    },
    {
        "name": "list_changes",
        "description": "List recent changes/commits in Perforce",
        "args": {
            "max": ArgSchema(type="integer", description="Maximum number of changes to return (1-100)", required=False, default=20, minimum=1, maximum=100),
            "status": ArgSchema(type="string", description="Filter changes by status", required=False, enum=["pending", "submitted"]),
            "user": ArgSchema(type="string", description="Filter changes by specific user", required=False),
        },
    },
    {
        "name": "get_change_details",
        "description": "Get detailed information about a specific change/commit",
        "args": {
            "changeId": ArgSchema(type="integer", description="The change number to get details for", required=True),
        },
    },
    {
        "name": "list_users",
        "description": "List all users in the Perforce system",
        "args": {},
    },
    {
        "name": "sync_files",
        "description": "Synchronize files from the Perforce depot",
        "policy": PolicyClass.WRITE,
        "args": {
            "path": ArgSchema(type="string", description="Depot path to sync (e.g., //depot/...)", required=False, default="//depot/..."),
            "force": ArgSchema(type="boolean", description="Force sync even if files are up-to-date", required=False, default=False),
        },
    },
    {
        "name": "analyze_sensitive_changes",
        "description": "Analyze recent changes for potentially sensitive content (combines multiple API calls)",
        "args": {
            "maxChanges": ArgSchema(type="integer", description="Maximum number of recent changes to analyze", required=False, default=10, minimum=1, maximum=50),
            "keywords": ArgSchema(
                type="array",
                description='Keywords to look for in change descriptions (e.g., ["password", "key", "secret"])',
                required=False,
                default=DEFAULT_SENSITIVE_KEYWORDS,
                items={"type": "string"},
            ),
        },
    },
]


class ToolRegistry:
    """Central registry of the Perforce tools."""

    _tools: Dict[str, ToolDefinition] = {}
    _initialized: bool = False

    @classmethod
    def initialize(cls) -> None:
        """Initialize registry with the tool catalog."""
        if cls._initialized:
            return

        for tool_config in PERFORCE_TOOLS:
            args_schema = {}
            for arg_name, arg_def in tool_config.get("args", {}).items():
                if isinstance(arg_def, ArgSchema):
                    args_schema[arg_name] = arg_def
                elif isinstance(arg_def, dict):
                    args_schema[arg_name] = ArgSchema(**arg_def)

            tool = ToolDefinition(
                name=tool_config["name"],
                description=tool_config["description"],
                policy_class=tool_config.get("policy", PolicyClass.READ_ONLY),
                args_schema=args_schema,
            )
            cls._tools[tool.name] = tool

        cls._initialized = True
        _log.info(f"Tool registry initialized with {len(cls._tools)} tools")

    @classmethod
    def get_tool(cls, name: str) -> Optional[ToolDefinition]:
        """Get tool definition by name."""
        cls.initialize()
        return cls._tools.get(name)

    @classmethod
    def list_tools(cls) -> List[ToolDefinition]:
        """All tools in catalog order."""
        cls.initialize()
        return list(cls._tools.values())

    @classmethod
    def list_tool_names(cls) -> List[str]:
        return [t.name for t in cls.list_tools()]

    @classmethod
    def reset(cls) -> None:
        """Reset registry (for testing)."""
        cls._tools = {}
        cls._initialized = False


__all__ = [
    "DEFAULT_SENSITIVE_KEYWORDS",
    "PERFORCE_TOOLS",
    "ToolRegistry",
]
