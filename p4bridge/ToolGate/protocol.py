"""
ToolGate argument checking.

Checks tool arguments against the declared schema before anything is sent
to the gateway.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from p4bridge.ToolGate.models import ToolDefinition


def _type_error(arg_name: str, expected: str, value: Any) -> str:
    return f"Argument {arg_name} must be {expected}, got {type(value).__name__}"


def validate_args(tool: ToolDefinition, args: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate arguments against tool's schema.

    Args:
        tool: Tool definition with schema
        args: Arguments to validate (defaults already applied)

    Returns:
        Tuple of (is_valid, error_message)
    """
    schema = tool.args_schema

    # Required arguments must be present and non-empty
    for arg_name, arg_schema in schema.items():
        if arg_schema.required and args.get(arg_name) in (None, ""):
            return False, f"Missing required argument: {arg_name}"

    for arg_name, value in args.items():
        if arg_name not in schema:
            # Unknown arguments are ignored
            continue

        arg_schema = schema[arg_name]
        expected_type = arg_schema.type

        if value is None and not arg_schema.required:
            continue

        if expected_type == "string" and not isinstance(value, str):
            return False, _type_error(arg_name, "string", value)
        elif expected_type == "integer" and (isinstance(value, bool) or not isinstance(value, int)):
            return False, _type_error(arg_name, "integer", value)
        elif expected_type == "boolean" and not isinstance(value, bool):
            return False, _type_error(arg_name, "boolean", value)
        elif expected_type == "array":
            if not isinstance(value, list):
                return False, _type_error(arg_name, "array", value)
            item_type = (arg_schema.items or {}).get("type")
            if item_type == "string" and not all(isinstance(v, str) for v in value):
                return False, f"Argument {arg_name} must contain only strings"

        if arg_schema.enum and value not in arg_schema.enum:
            return False, f"Argument {arg_name} must be one of {arg_schema.enum}"

        if arg_schema.minimum is not None and value < arg_schema.minimum:
            return False, f"Argument {arg_name} must be at least {arg_schema.minimum}"
        if arg_schema.maximum is not None and value > arg_schema.maximum:
            return False, f"Argument {arg_name} must be at most {arg_schema.maximum}"

    return True, None


__all__ = [
    "validate_args",
]
