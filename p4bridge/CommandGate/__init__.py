"""
CommandGate - Backend command execution for P4Bridge.

Provides:
- p4 execution with an argument vector (no shell interpretation)
- Fixed connection environment (P4PORT, P4USER, P4PASSWD, P4CLIENT)
- Bounded timeout with child termination
- Tri-state results captured in CommandResult, never raised

Usage:
    from p4bridge.CommandGate import CommandGate

    gate = CommandGate(connection, config)
    result = await gate.run(["info"])
    if result.success:
        print(result.output)
"""

from typing import Any, Dict, List, Optional

from p4bridge.shared.gate import GateLogger

from .models import (
    CommandConfig,
    CommandResult,
    CommandStatus,
    ConnectionConfig,
    format_command,
)
from .security import (
    CommandSecurityError,
    build_environment,
    check_token,
    redact,
    validate_args,
)
from .executor import execute_async

_log = GateLogger.get("CommandGate")


class CommandGate:
    """
    Process-scoped executor service.

    Built once at startup from configuration and handed to the DepotGate.
    """

    def __init__(
        self,
        connection: Optional[ConnectionConfig] = None,
        config: Optional[CommandConfig] = None,
    ):
        self.connection = connection or ConnectionConfig()
        self.config = config or CommandConfig()

    async def run(
        self,
        args: List[str],
        working_dir: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> CommandResult:
        """
        Run a p4 subcommand.

        Args:
            args: Argument vector after the binary, e.g. ["files", "-m", "5", "//depot/..."]
            working_dir: Override the workspace root
            timeout: Override the default timeout in seconds

        Returns:
            CommandResult
        """
        _log.info(f"Executing P4 command: {format_command(self.config.binary, args)}")

        env = build_environment(self.connection)
        result = await execute_async(
            args,
            self.config,
            working_dir=working_dir,
            timeout=timeout,
            env=env,
        )

        result.stderr = redact(result.stderr, self.connection)
        if result.success:
            if result.stderr.strip():
                _log.warning(f"P4 command warning: {result.stderr.strip()}")
            _log.info(f'P4 command stdout for "{result.command}":\n{result.output}')
        else:
            result.error = redact(result.error or "", self.connection)
            _log.error(f"P4 command failed ({result.status.value}): {result.error}")

        return result

    def get_info(self) -> Dict[str, Any]:
        """Executor settings safe for logging."""
        return {
            "connection": self.connection.to_safe_dict(),
            "binary": self.config.binary,
            "workspace_root": self.config.workspace_root,
            "timeout_seconds": self.config.default_timeout_seconds,
        }


__all__ = [
    "CommandConfig",
    "CommandGate",
    "CommandResult",
    "CommandSecurityError",
    "CommandStatus",
    "ConnectionConfig",
    "build_environment",
    "check_token",
    "execute_async",
    "format_command",
    "redact",
    "validate_args",
]
