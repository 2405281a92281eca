from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from p4bridge import Config, __version__
from p4bridge.CommandGate import CommandGate
from p4bridge.DepotGate import DepotGate
from p4bridge.shared.gate import GateLogger

from portal.middleware.rate_limit import SlidingWindowRateLimiter

# Lifecycle logger
_log = GateLogger.get("Lifecycle")


@dataclass
class Services:
    """Process-wide services shared by every request."""

    config: Config.ConfigManager
    command_gate: CommandGate
    depot: DepotGate
    rate_limiter: SlidingWindowRateLimiter


def build_services(
    manager: Optional[Config.ConfigManager] = None,
    command_gate: Optional[CommandGate] = None,
) -> Services:
    """Build services from configuration. Tests pass their own command gate."""
    manager = manager or Config.get_manager()
    GateLogger.set_level(manager.get("LOG_LEVEL", "INFO"))

    if command_gate is None:
        command_gate = CommandGate(
            manager.get_connection_config(),
            manager.get_command_config(),
        )

    return Services(
        config=manager,
        command_gate=command_gate,
        depot=DepotGate(command_gate),
        rate_limiter=SlidingWindowRateLimiter(
            max_requests=manager.get("RATE_LIMIT_MAX_REQUESTS"),
            window_seconds=manager.get("RATE_LIMIT_WINDOW_SECONDS"),
        ),
    )


async def startup(services: Services):
    """Log effective settings once the server is up."""
    manager = services.config

    is_valid, errors = manager.validate()
    for error in errors:
        _log.warning(f"Config: {error}")

    _log.info(f"P4Bridge API {__version__} starting ({manager.get('APP_ENV')} mode)")
    _log.info(f"Perforce connection: {services.command_gate.connection.to_safe_dict()}")
    _log.info(
        f"Rate limit: {services.rate_limiter.max_requests} requests "
        f"per {services.rate_limiter.window_seconds}s"
    )

    port = manager.get("PORT")
    _log.info(f"API Documentation available at http://localhost:{port}/api/docs")
    _log.info(f"Health check available at http://localhost:{port}/health")


async def shutdown(services: Services):
    """Cleanup on server shutdown."""
    services.rate_limiter.reset()
    _log.info("P4Bridge API stopped")
