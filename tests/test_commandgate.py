"""
Tests for CommandGate command execution.
"""

import asyncio
import logging
import sys
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from p4bridge.CommandGate import (
    CommandConfig,
    CommandGate,
    CommandResult,
    CommandSecurityError,
    CommandStatus,
    ConnectionConfig,
    build_environment,
    check_token,
    execute_async,
    format_command,
    redact,
    validate_args,
)


def _process(stdout=b"", stderr=b"", returncode=0):
    process = MagicMock()
    process.communicate = AsyncMock(return_value=(stdout, stderr))
    process.wait = AsyncMock(return_value=returncode)
    process.returncode = returncode
    return process


def _hanging_process():
    async def hang():
        await asyncio.sleep(30)

    process = MagicMock()
    process.communicate = AsyncMock(side_effect=hang)
    process.wait = AsyncMock(return_value=-9)
    process.returncode = None
    return process


class TestCommandSecurity:
    """Tests for argument checks, environment, and redaction."""

    def test_check_token_accepts_depot_paths(self):
        assert check_token("//depot/main/...") == (True, None)
        assert check_token("//depot/my file.txt") == (True, None)

    def test_check_token_rejects_option_injection(self):
        is_valid, error = check_token("-p")

        assert is_valid is False
        assert "'-'" in error

    def test_check_token_rejects_nul(self):
        is_valid, _ = check_token("//depot/\x00")

        assert is_valid is False

    def test_validate_args_rejects_empty(self):
        with pytest.raises(CommandSecurityError):
            validate_args([])

    def test_validate_args_rejects_non_strings(self):
        with pytest.raises(CommandSecurityError):
            validate_args(["files", "-m", 5])

    def test_build_environment_sets_connection(self, connection_config):
        env = build_environment(connection_config, base_env={"PATH": "/usr/bin"})

        assert env == {
            "PATH": "/usr/bin",
            "P4PORT": "ssl:perforce.example.com:1666",
            "P4USER": "builder",
            "P4PASSWD": "hunter2",
            "P4CLIENT": "builder-ws",
        }

    def test_build_environment_drops_inherited_password(self):
        env = build_environment(ConnectionConfig(), base_env={"P4PASSWD": "stale"})

        assert "P4PASSWD" not in env

    def test_redact(self, connection_config):
        text = "Password invalid: hunter2"

        assert redact(text, connection_config) == "Password invalid: ****"
        assert redact(text, ConnectionConfig()) == text

    def test_connection_repr_hides_password(self, connection_config):
        assert "hunter2" not in repr(connection_config)
        assert connection_config.to_safe_dict()["password"] == "****"

    def test_format_command_quotes_spaces(self):
        assert format_command("p4", ["print", "-q", "//depot/a b.txt"]) == 'p4 print -q "//depot/a b.txt"'


class TestCommandResult:
    def test_ok(self):
        result = CommandResult.ok("p4 info", "Server version: P4D/2023.1")

        assert result.success is True
        assert result.error is None
        assert result.text == "Server version: P4D/2023.1"

    def test_failed(self):
        result = CommandResult.failed("p4 info", "connect refused")

        assert result.success is False
        assert result.output is None
        assert result.status == CommandStatus.FAILED
        assert result.text == "connect refused"
        assert result.to_dict()["status"] == "failed"


class TestExecuteAsyncMocked:
    """Executor behaviour against a mocked child process."""

    @pytest.mark.asyncio
    async def test_success_strips_output(self, command_config):
        process = _process(stdout=b"//depot/a.txt#1 - add change 1 (text)\n\n")
        with patch("asyncio.create_subprocess_exec", new=AsyncMock(return_value=process)) as spawn:
            result = await execute_async(["files", "-m", "5", "//depot/..."], command_config)

        assert result.success is True
        assert result.output == "//depot/a.txt#1 - add change 1 (text)"
        assert result.status == CommandStatus.COMPLETED
        assert spawn.call_args.args == ("p4", "files", "-m", "5", "//depot/...")
        assert spawn.call_args.kwargs["cwd"] == command_config.workspace_root
        assert spawn.call_args.kwargs["stdin"] == asyncio.subprocess.DEVNULL

    @pytest.mark.asyncio
    async def test_stderr_on_zero_exit_is_still_success(self, command_config):
        process = _process(stdout=b"ok", stderr=b"warning: deprecated")
        with patch("asyncio.create_subprocess_exec", new=AsyncMock(return_value=process)):
            result = await execute_async(["info"], command_config)

        assert result.success is True
        assert result.stderr == "warning: deprecated"

    @pytest.mark.asyncio
    async def test_nonzero_exit_uses_stderr(self, command_config):
        process = _process(stderr=b"//depot/nope - no such file(s).\n", returncode=1)
        with patch("asyncio.create_subprocess_exec", new=AsyncMock(return_value=process)):
            result = await execute_async(["print", "-q", "//depot/nope"], command_config)

        assert result.success is False
        assert result.output is None
        assert result.error == "//depot/nope - no such file(s)."
        assert result.exit_code == 1

    @pytest.mark.asyncio
    async def test_nonzero_exit_without_stderr(self, command_config):
        process = _process(returncode=2)
        with patch("asyncio.create_subprocess_exec", new=AsyncMock(return_value=process)):
            result = await execute_async(["users"], command_config)

        assert result.error == "Command exited with code 2"

    @pytest.mark.asyncio
    async def test_timeout_kills_child(self, command_config):
        process = _hanging_process()
        with patch("asyncio.create_subprocess_exec", new=AsyncMock(return_value=process)):
            result = await execute_async(["sync", "//depot/..."], command_config, timeout=0.05)

        assert result.success is False
        assert result.status == CommandStatus.TIMEOUT
        assert result.error == "Command timed out after 0.05 seconds"
        process.kill.assert_called_once()
        process.wait.assert_awaited()

    @pytest.mark.asyncio
    async def test_cancellation_kills_child(self, command_config):
        process = _hanging_process()
        with patch("asyncio.create_subprocess_exec", new=AsyncMock(return_value=process)):
            task = asyncio.create_task(execute_async(["sync", "//depot/..."], command_config))
            await asyncio.sleep(0.01)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        process.kill.assert_called_once()
        process.wait.assert_awaited()

    @pytest.mark.asyncio
    async def test_spawn_failure_is_captured(self, command_config):
        error = FileNotFoundError(2, "No such file or directory")
        with patch("asyncio.create_subprocess_exec", new=AsyncMock(side_effect=error)):
            result = await execute_async(["info"], command_config)

        assert result.success is False
        assert result.error == "Failed to start p4: No such file or directory"

    @pytest.mark.asyncio
    async def test_invalid_args_never_spawn(self, command_config):
        spawn = AsyncMock()
        with patch("asyncio.create_subprocess_exec", new=spawn):
            result = await execute_async(["print", "//depot/\x00"], command_config)

        assert result.success is False
        spawn.assert_not_called()

    @pytest.mark.asyncio
    async def test_output_truncated(self, tmp_path):
        config = CommandConfig(workspace_root=str(tmp_path), max_output_bytes=10)
        process = _process(stdout=b"x" * 50)
        with patch("asyncio.create_subprocess_exec", new=AsyncMock(return_value=process)):
            result = await execute_async(["users"], config)

        assert result.output.startswith("x" * 10)
        assert result.output.endswith("(output truncated)")


class TestExecuteAsyncReal:
    """Executor against a real child process (the Python interpreter)."""

    @pytest.mark.asyncio
    async def test_real_success(self, tmp_path):
        config = CommandConfig(binary=sys.executable, workspace_root=str(tmp_path))

        result = await execute_async(["-c", "print('Server address: localhost:1666')"], config)

        assert result.success is True
        assert result.output == "Server address: localhost:1666"

    @pytest.mark.asyncio
    async def test_real_failure(self, tmp_path):
        config = CommandConfig(binary=sys.executable, workspace_root=str(tmp_path))
        script = "import sys; sys.stderr.write('Change 999999 unknown.'); sys.exit(1)"

        result = await execute_async(["-c", script], config)

        assert result.success is False
        assert result.exit_code == 1
        assert result.error == "Change 999999 unknown."

    @pytest.mark.asyncio
    async def test_real_timeout(self, tmp_path):
        config = CommandConfig(binary=sys.executable, workspace_root=str(tmp_path))

        result = await execute_async(["-c", "import time; time.sleep(10)"], config, timeout=0.5)

        assert result.status == CommandStatus.TIMEOUT

    @pytest.mark.asyncio
    async def test_real_missing_binary(self, tmp_path):
        config = CommandConfig(binary=str(tmp_path / "no-p4-here"), workspace_root=str(tmp_path))

        result = await execute_async(["info"], config)

        assert result.success is False
        assert result.error.startswith("Failed to start")


class TestCommandGate:
    """Tests for the CommandGate service."""

    @pytest.mark.asyncio
    async def test_run_passes_connection_environment(self, connection_config, command_config):
        gate = CommandGate(connection_config, command_config)
        process = _process(stdout=b"User name: builder")
        with patch("asyncio.create_subprocess_exec", new=AsyncMock(return_value=process)) as spawn:
            result = await gate.run(["info"])

        assert result.success is True
        env = spawn.call_args.kwargs["env"]
        assert env["P4PORT"] == "ssl:perforce.example.com:1666"
        assert env["P4USER"] == "builder"
        assert env["P4PASSWD"] == "hunter2"
        assert env["P4CLIENT"] == "builder-ws"

    @pytest.mark.asyncio
    async def test_run_redacts_password(self, connection_config, command_config, caplog):
        gate = CommandGate(connection_config, command_config)
        process = _process(stderr=b"Password hunter2 invalid.", returncode=1)
        with caplog.at_level(logging.INFO, logger="p4bridge"):
            with patch("asyncio.create_subprocess_exec", new=AsyncMock(return_value=process)):
                result = await gate.run(["login", "-s"])

        assert result.error == "Password **** invalid."
        assert "hunter2" not in caplog.text
        assert "Executing P4 command: p4 login -s" in caplog.text

    def test_get_info_is_safe(self, connection_config, command_config):
        info = CommandGate(connection_config, command_config).get_info()

        assert info["connection"]["password"] == "****"
        assert info["binary"] == "p4"
        assert info["timeout_seconds"] == 5
