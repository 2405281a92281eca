"""
CommandGate command executor.

Runs the backend command-line client as a child process with an argument
vector (never through a shell), a bounded timeout, and a fixed environment.
"""

import asyncio
import time
import uuid
from typing import Dict, List, Optional

from p4bridge.shared.gate import GateLogger

from .models import (
    CommandConfig,
    CommandResult,
    CommandStatus,
    format_command,
)
from .security import CommandSecurityError, validate_args

_log = GateLogger.get("CommandGate")


def _truncate(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[:limit] + "\n... (output truncated)"
    return text


async def _terminate(process: asyncio.subprocess.Process) -> None:
    """Kill a child that is still running and reap it."""
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass
    await process.wait()


async def execute_async(
    args: List[str],
    config: CommandConfig,
    working_dir: Optional[str] = None,
    timeout: Optional[float] = None,
    env: Optional[Dict[str, str]] = None,
) -> CommandResult:
    """
    Execute a backend command asynchronously.

    Args:
        args: Argument vector passed to the client binary
        config: Command configuration
        working_dir: Working directory (default: config.workspace_root)
        timeout: Timeout in seconds (default: config.default_timeout_seconds)
        env: Complete environment for the child

    Returns:
        CommandResult. Failures of any kind are captured, never raised.
    """
    command_line = format_command(config.binary, args)
    execution_id = str(uuid.uuid4())[:8]

    try:
        validate_args(args)
    except CommandSecurityError as e:
        return CommandResult.failed(command_line, str(e), execution_id=execution_id)

    if working_dir is None:
        working_dir = config.workspace_root
    if timeout is None:
        timeout = config.default_timeout_seconds

    start = time.monotonic()

    try:
        process = await asyncio.create_subprocess_exec(
            config.binary,
            *args,
            cwd=working_dir,
            env=env,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        return CommandResult.failed(
            command_line,
            f"Failed to start {config.binary}: {e.strerror or e}",
            execution_id=execution_id,
        )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        await _terminate(process)
        return CommandResult.failed(
            command_line,
            f"Command timed out after {timeout} seconds",
            status=CommandStatus.TIMEOUT,
            duration_seconds=float(timeout),
            execution_id=execution_id,
        )
    except asyncio.CancelledError:
        await _terminate(process)
        raise
    except Exception as e:
        await _terminate(process)
        return CommandResult.failed(command_line, str(e), execution_id=execution_id)

    duration = time.monotonic() - start
    exit_code = process.returncode if process.returncode is not None else -1

    stdout = _truncate(
        (stdout_bytes or b"").decode("utf-8", errors="replace"), config.max_output_bytes
    )
    stderr = _truncate(
        (stderr_bytes or b"").decode("utf-8", errors="replace"), config.max_output_bytes
    )

    if exit_code != 0:
        return CommandResult.failed(
            command_line,
            stderr.strip() or f"Command exited with code {exit_code}",
            exit_code=exit_code,
            stderr=stderr,
            duration_seconds=duration,
            execution_id=execution_id,
        )

    return CommandResult.ok(
        command_line,
        stdout.strip(),
        stderr=stderr,
        duration_seconds=duration,
        execution_id=execution_id,
    )
