"""
Shared utilities for P4Bridge.

Provides access to common functionality used across Gate implementations.
"""

from p4bridge.shared.gate import (
    GateLogger,
    ResponseEnvelope,
    ValidationFailed,
    ValidationIssue,
    get_logger,
)

__all__ = [
    "GateLogger",
    "ResponseEnvelope",
    "ValidationFailed",
    "ValidationIssue",
    "get_logger",
]
