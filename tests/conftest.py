"""
Pytest configuration and fixtures for P4Bridge tests.
"""

import sys
from pathlib import Path
from typing import Dict, Generator, List, Optional

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from p4bridge import Config
from p4bridge.CommandGate import CommandConfig, CommandResult, ConnectionConfig
from p4bridge.Config.schema import CONFIG_SCHEMA


class FakeCommandGate:
    """
    Stand-in for CommandGate that records argument vectors.

    Replies are looked up by subcommand (``args[0]``); anything without a
    canned reply succeeds with empty output.
    """

    def __init__(self, connection: Optional[ConnectionConfig] = None):
        self.connection = connection or ConnectionConfig()
        self.config = CommandConfig()
        self.calls: List[List[str]] = []
        self.replies: Dict[str, CommandResult] = {}
        self.raises: Optional[Exception] = None

    def reply(self, subcommand: str, output: str = "", error: Optional[str] = None) -> None:
        command = f"p4 {subcommand}"
        if error is None:
            self.replies[subcommand] = CommandResult.ok(command, output)
        else:
            self.replies[subcommand] = CommandResult.failed(command, error, exit_code=1)

    @property
    def last_args(self) -> List[str]:
        return self.calls[-1]

    async def run(self, args, working_dir=None, timeout=None) -> CommandResult:
        self.calls.append(list(args))
        if self.raises is not None:
            raise self.raises
        reply = self.replies.get(args[0])
        if reply is None:
            return CommandResult.ok(f"p4 {' '.join(args)}", "")
        return reply


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path) -> Generator[None, None, None]:
    """Strip P4Bridge settings from the environment and reload config."""
    for field in CONFIG_SCHEMA:
        monkeypatch.delenv(field.env_var, raising=False)
    monkeypatch.delenv("P4BRIDGE_CONFIG_JSON", raising=False)
    monkeypatch.setenv("P4BRIDGE_ENV_FILE", str(tmp_path / "missing.env"))
    Config.reload()
    yield
    Config.reload()


@pytest.fixture
def connection_config() -> ConnectionConfig:
    return ConnectionConfig(
        port="ssl:perforce.example.com:1666",
        user="builder",
        password="hunter2",
        client="builder-ws",
    )


@pytest.fixture
def command_config(tmp_path) -> CommandConfig:
    return CommandConfig(binary="p4", workspace_root=str(tmp_path), default_timeout_seconds=5)


@pytest.fixture
def fake_gate() -> FakeCommandGate:
    return FakeCommandGate()


@pytest.fixture
def make_client(fake_gate, monkeypatch):
    """Factory for a TestClient around a fresh app using fake_gate."""
    from fastapi.testclient import TestClient

    from portal import lifecycle
    from portal.run import create_app

    clients = []

    def _make(**env) -> TestClient:
        for key, value in env.items():
            monkeypatch.setenv(key, str(value))
        manager = Config.reload()
        services = lifecycle.build_services(manager, command_gate=fake_gate)
        client = TestClient(create_app(services), raise_server_exceptions=False)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    """TestClient for the gateway backed by fake_gate."""
    return make_client()
