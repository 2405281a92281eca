"""
CommandGate Pydantic models.

Defines backend connection settings, executor configuration, and results.
"""

from enum import Enum
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field


class CommandStatus(str, Enum):
    """Terminal status of a command execution."""
    COMPLETED = "completed"
    FAILED = "failed"
    TIMEOUT = "timeout"


class ConnectionConfig(BaseModel):
    """Backend connection settings; immutable after startup."""
    model_config = ConfigDict(frozen=True)

    port: str = Field(default="localhost:1666", description="P4PORT")
    user: str = Field(default="super", description="P4USER")
    password: str = Field(default="", repr=False, description="P4PASSWD")
    client: str = Field(default="p4bridge-client", description="P4CLIENT")

    def to_env(self) -> Dict[str, str]:
        """Environment variables the p4 client reads."""
        env = {
            "P4PORT": self.port,
            "P4USER": self.user,
            "P4CLIENT": self.client,
        }
        if self.password:
            env["P4PASSWD"] = self.password
        return env

    def to_safe_dict(self) -> Dict[str, Any]:
        """Connection settings with the credential masked."""
        return {
            "port": self.port,
            "user": self.user,
            "password": "****" if self.password else None,
            "client": self.client,
        }


class CommandConfig(BaseModel):
    """Configuration for p4 command execution."""
    binary: str = Field(default="p4", description="Command-line client executable")
    workspace_root: str = Field(default="/workspace", description="Default working directory")
    default_timeout_seconds: int = Field(default=30, ge=1, le=600)
    max_output_bytes: int = Field(default=10 * 1024 * 1024, description="Max output size (10MB)")


class CommandResult(BaseModel):
    """
    Result of a command execution.

    Exactly one of ``output`` (on success) or ``error`` (on failure) is set.
    """
    success: bool
    command: str
    exit_code: int = 0
    output: Optional[str] = None
    error: Optional[str] = None
    stderr: str = ""
    status: CommandStatus = CommandStatus.COMPLETED
    duration_seconds: float = 0.0
    execution_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return self.model_dump(mode="json")

    @property
    def text(self) -> str:
        """Whatever the backend said, output or error."""
        return (self.output if self.success else self.error) or ""

    @classmethod
    def ok(cls, command: str, output: str, **kwargs) -> "CommandResult":
        return cls(success=True, command=command, output=output, **kwargs)

    @classmethod
    def failed(
        cls,
        command: str,
        error: str,
        status: CommandStatus = CommandStatus.FAILED,
        exit_code: int = -1,
        **kwargs,
    ) -> "CommandResult":
        return cls(
            success=False,
            command=command,
            error=error,
            status=status,
            exit_code=exit_code,
            **kwargs,
        )


def format_command(binary: str, args: List[str]) -> str:
    """Render an argument vector for logs."""
    parts = [binary]
    for arg in args:
        if not arg or any(c.isspace() for c in arg):
            parts.append(f'"{arg}"')
        else:
            parts.append(arg)
    return " ".join(parts)
