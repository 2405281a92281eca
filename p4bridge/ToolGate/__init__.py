"""
ToolGate - Perforce tools for AI agents.

Exposes the depot operations as MCP tools. Each tool calls the REST gateway
over HTTP and renders the reply as text.

Usage:
    from p4bridge.ToolGate import GatewayClient, ToolDispatcher

    dispatcher = ToolDispatcher(GatewayClient("http://localhost:3000/api"))
    text = await dispatcher.call("list_files", {"path": "//depot/main/..."})
"""

from __future__ import annotations

from p4bridge.ToolGate.models import ArgSchema, PolicyClass, ToolDefinition
from p4bridge.ToolGate.registry import (
    DEFAULT_SENSITIVE_KEYWORDS,
    PERFORCE_TOOLS,
    ToolRegistry,
)
from p4bridge.ToolGate.protocol import validate_args
from p4bridge.ToolGate.client import GatewayClient, GatewayError
from p4bridge.ToolGate.scanner import analyze_sensitive_changes, find_keywords
from p4bridge.ToolGate.dispatcher import ToolDispatcher


__all__ = [
    "ArgSchema",
    "DEFAULT_SENSITIVE_KEYWORDS",
    "GatewayClient",
    "GatewayError",
    "PERFORCE_TOOLS",
    "PolicyClass",
    "ToolDefinition",
    "ToolDispatcher",
    "ToolRegistry",
    "analyze_sensitive_changes",
    "find_keywords",
    "validate_args",
]
