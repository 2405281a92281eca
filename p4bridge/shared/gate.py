"""
Shared Gate utilities for P4Bridge.

Provides consolidated patterns for all Gate implementations:
- GateLogger: Unified logging with Python's logging module
- ResponseEnvelope: Uniform success/error reply shape
- ValidationIssue / ValidationFailed: Collected request constraint violations
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


# =============================================================================
# GateLogger - Unified logging for all Gates
# =============================================================================


LOG_FORMAT = "[%(name)s] %(levelname)s: %(message)s"


class GateLogger:
    """
    Unified logging for all Gates.

    Each gate gets its own namespaced logger under the ``p4bridge`` root.
    """

    _loggers: Dict[str, logging.Logger] = {}
    _configured = False

    @classmethod
    def _ensure_configured(cls):
        """Ensure basic logging is configured."""
        if cls._configured:
            return

        root_logger = logging.getLogger("p4bridge")
        if not root_logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            root_logger.addHandler(handler)
            root_logger.setLevel(logging.INFO)

        cls._configured = True

    @classmethod
    def get(cls, gate_name: str) -> logging.Logger:
        """
        Get a logger for a specific gate.

        Args:
            gate_name: Name of the gate (e.g., "CommandGate", "DepotGate")

        Returns:
            Logger instance for the gate
        """
        cls._ensure_configured()

        logger_name = f"p4bridge.{gate_name}"
        if logger_name not in cls._loggers:
            cls._loggers[logger_name] = logging.getLogger(logger_name)

        return cls._loggers[logger_name]

    @classmethod
    def set_level(cls, level: Union[int, str], gate_name: Optional[str] = None):
        """
        Set logging level.

        Args:
            level: Logging level (e.g., logging.DEBUG or "DEBUG")
            gate_name: Specific gate to set level for, or None for all
        """
        if isinstance(level, str):
            level = logging.getLevelName(level.upper())
            if not isinstance(level, int):
                level = logging.INFO

        if gate_name:
            cls.get(gate_name).setLevel(level)
        else:
            cls._ensure_configured()
            logging.getLogger("p4bridge").setLevel(level)


def get_logger(gate_name: str) -> logging.Logger:
    """Shortcut for GateLogger.get()."""
    return GateLogger.get(gate_name)


# =============================================================================
# ResponseEnvelope - Unified reply shape
# =============================================================================


@dataclass
class ResponseEnvelope:
    """
    Uniform reply shape used by every handler.

    Successful envelopes always carry ``data``; failed envelopes never do.
    """

    success: bool
    data: Any = None
    message: Optional[str] = None
    error: Optional[str] = None

    def __bool__(self) -> bool:
        """Allow using the envelope in boolean context."""
        return self.success

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        if self.success:
            return {"success": True, "data": self.data}
        return {
            "success": False,
            "message": self.message,
            "error": self.error,
        }

    @classmethod
    def ok(cls, data: Any) -> "ResponseEnvelope":
        """Create a successful envelope."""
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, message: str, error: Optional[str] = None) -> "ResponseEnvelope":
        """Create a failed envelope."""
        return cls(success=False, message=message, error=error or message)


# =============================================================================
# Validation errors
# =============================================================================


@dataclass
class ValidationIssue:
    """A single violated request constraint."""

    field: str
    message: str
    type: str = "value_error"
    value: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "message": self.message,
            "type": self.type,
            "value": self.value,
        }


class ValidationFailed(Exception):
    """Raised when a request violates one or more declared constraints."""

    def __init__(self, issues: List[ValidationIssue]):
        self.issues = issues
        fields = ", ".join(issue.field for issue in issues)
        super().__init__(f"Validation failed for: {fields}")

    def to_dict(self) -> Dict[str, Any]:
        """Full violation set in envelope form."""
        return {
            "success": False,
            "message": "Validation errors",
            "errors": [issue.to_dict() for issue in self.issues],
        }


__all__ = [
    "GateLogger",
    "get_logger",
    "ResponseEnvelope",
    "ValidationIssue",
    "ValidationFailed",
]
