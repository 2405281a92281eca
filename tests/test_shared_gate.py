"""
Tests for shared Gate utilities.
"""

import logging

from p4bridge.shared.gate import (
    GateLogger,
    ResponseEnvelope,
    ValidationFailed,
    ValidationIssue,
    get_logger,
)


class TestGateLogger:
    """Tests for GateLogger."""

    def test_get_returns_logger(self):
        """Should return a namespaced logger instance."""
        logger = GateLogger.get("TestGate")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "p4bridge.TestGate"

    def test_get_same_logger_for_same_name(self):
        """Should return same logger for same gate name."""
        assert GateLogger.get("SameGate") is GateLogger.get("SameGate")

    def test_set_level_specific_gate(self):
        """Should set level for specific gate."""
        logger = GateLogger.get("LevelTestGate")
        GateLogger.set_level(logging.DEBUG, "LevelTestGate")

        assert logger.level == logging.DEBUG

    def test_set_level_accepts_names(self):
        """String level names should be understood; unknown names fall back to INFO."""
        GateLogger.set_level("warning")
        assert logging.getLogger("p4bridge").level == logging.WARNING

        GateLogger.set_level("chatty")
        assert logging.getLogger("p4bridge").level == logging.INFO

    def test_get_logger_shortcut(self):
        """get_logger() should be equivalent to GateLogger.get()."""
        assert GateLogger.get("ShortcutGate") is get_logger("ShortcutGate")


class TestResponseEnvelope:
    """Tests for ResponseEnvelope."""

    def test_ok_carries_data_only(self):
        envelope = ResponseEnvelope.ok({"count": 2})

        assert envelope.to_dict() == {"success": True, "data": {"count": 2}}
        assert bool(envelope) is True

    def test_fail_carries_message_and_error(self):
        envelope = ResponseEnvelope.fail("Failed to list users", "connect refused")

        assert envelope.to_dict() == {
            "success": False,
            "message": "Failed to list users",
            "error": "connect refused",
        }
        assert "data" not in envelope.to_dict()

    def test_fail_error_defaults_to_message(self):
        """A failed envelope always has an error string."""
        envelope = ResponseEnvelope.fail("Method Not Allowed")

        assert envelope.error == "Method Not Allowed"


class TestValidationFailed:
    """Tests for ValidationFailed."""

    def test_to_dict_lists_every_issue(self):
        exc = ValidationFailed([
            ValidationIssue(field="max", message="too big", type="less_than_equal", value="5000"),
            ValidationIssue(field="status", message="bad status", type="literal_error", value="open"),
        ])

        body = exc.to_dict()

        assert body["success"] is False
        assert body["message"] == "Validation errors"
        assert [e["field"] for e in body["errors"]] == ["max", "status"]
        assert body["errors"][0] == {
            "field": "max",
            "message": "too big",
            "type": "less_than_equal",
            "value": "5000",
        }

    def test_str_names_fields(self):
        exc = ValidationFailed([ValidationIssue(field="path", message="required")])

        assert "path" in str(exc)
