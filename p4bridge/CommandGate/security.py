"""
CommandGate security module.

Provides argument-token checks, environment construction, and credential redaction.
"""

import os
from typing import Dict, List, Optional, Tuple

from .models import ConnectionConfig


class CommandSecurityError(Exception):
    """Raised when an argument vector fails security validation."""
    pass


def check_token(value: str) -> Tuple[bool, Optional[str]]:
    """
    Check a user-supplied value that will become a single p4 argument.

    Values are passed as discrete argv entries, so shell metacharacters are
    inert; a leading dash would still be read as an option by p4.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if value.startswith("-"):
        return False, "must not begin with '-'"
    if "\x00" in value:
        return False, "must not contain NUL characters"
    return True, None


def validate_args(args: List[str]) -> None:
    """
    Ensure an argument vector is a flat list of strings.

    Raises:
        CommandSecurityError: If any entry is not a string or contains NUL
    """
    if not args:
        raise CommandSecurityError("Empty command")
    for arg in args:
        if not isinstance(arg, str):
            raise CommandSecurityError(f"Argument must be a string, got {type(arg).__name__}")
        if "\x00" in arg:
            raise CommandSecurityError("Argument contains NUL character")


def build_environment(
    connection: ConnectionConfig,
    base_env: Optional[Dict[str, str]] = None,
) -> Dict[str, str]:
    """
    Merge process environment with the fixed backend connection settings.

    Args:
        connection: Backend connection settings
        base_env: Environment to start from (default: os.environ)

    Returns:
        Environment dict for the child process
    """
    env = dict(os.environ if base_env is None else base_env)
    if not connection.password:
        env.pop("P4PASSWD", None)
    env.update(connection.to_env())
    return env


def redact(text: str, connection: ConnectionConfig) -> str:
    """Mask the backend credential wherever it appears in ``text``."""
    if connection.password and text:
        return text.replace(connection.password, "****")
    return text
