"""
ToolGate Models.

Tool definitions and argument schemas for the agent tool catalog.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class PolicyClass(str, Enum):
    """Side-effect class of a tool."""

    READ_ONLY = "read_only"  # Queries only
    WRITE = "write"  # Touches the workspace


class ArgSchema(BaseModel):
    """JSON Schema for a tool argument."""

    type: str = "string"
    description: str = ""
    required: bool = True
    default: Optional[Any] = None
    enum: Optional[List[Any]] = None
    items: Optional[Dict[str, Any]] = None  # For array types
    minimum: Optional[int] = None
    maximum: Optional[int] = None


class ToolDefinition(BaseModel):
    """Complete tool definition for registry."""

    name: str = Field(description="Tool name, e.g., list_files")
    description: str = Field(description="Human-readable description")
    policy_class: PolicyClass = Field(default=PolicyClass.READ_ONLY)
    args_schema: Dict[str, ArgSchema] = Field(
        default_factory=dict, description="Argument schemas"
    )

    @property
    def read_only(self) -> bool:
        return self.policy_class == PolicyClass.READ_ONLY

    def get_json_schema(self) -> Dict[str, Any]:
        """Generate JSON Schema for this tool's arguments."""
        properties = {}
        required = []

        for arg_name, arg_schema in self.args_schema.items():
            prop = {"type": arg_schema.type, "description": arg_schema.description}

            if arg_schema.enum:
                prop["enum"] = arg_schema.enum
            if arg_schema.items:
                prop["items"] = arg_schema.items
            if arg_schema.minimum is not None:
                prop["minimum"] = arg_schema.minimum
            if arg_schema.maximum is not None:
                prop["maximum"] = arg_schema.maximum
            if arg_schema.default is not None:
                prop["default"] = arg_schema.default

            properties[arg_name] = prop

            if arg_schema.required:
                required.append(arg_name)

        return {
            "type": "object",
            "properties": properties,
            "required": required,
        }

    def apply_defaults(self, args: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Arguments with schema defaults filled in for omitted optional ones."""
        resolved = dict(args or {})
        for arg_name, arg_schema in self.args_schema.items():
            if resolved.get(arg_name) is None and arg_schema.default is not None:
                resolved[arg_name] = arg_schema.default
        return resolved


__all__ = [
    "ArgSchema",
    "PolicyClass",
    "ToolDefinition",
]
