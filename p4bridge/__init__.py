"""
P4Bridge - Perforce gateway and agent tool adapter.

Gates:
- CommandGate: runs the p4 client
- DepotGate: depot operations and response shaping
- ToolGate: agent tool catalog over the REST gateway
- Config: schema-driven settings
"""

__version__ = "1.0.0"

from p4bridge.CommandGate import CommandGate, CommandResult, ConnectionConfig
from p4bridge.DepotGate import DepotGate, OperationOutcome

__all__ = [
    "__version__",
    "CommandGate",
    "CommandResult",
    "ConnectionConfig",
    "DepotGate",
    "OperationOutcome",
]
