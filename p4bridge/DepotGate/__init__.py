"""
DepotGate - Depot operations for P4Bridge.

One operation per logical endpoint. Each operation turns a validated request
into a p4 argument vector, runs it through the CommandGate, and maps the
result to a ResponseEnvelope with an HTTP status.

Failure mapping:
- Lookups of a single resource (file content, file history, change detail)
  fail with 404.
- Collection and server queries fail with 500.
- Sync always reports success; see ``DepotGate.sync``.

Usage:
    from p4bridge.DepotGate import DepotGate, FileListRequest

    depot = DepotGate(command_gate)
    outcome = await depot.list_files(FileListRequest(max=5))
    outcome.status_code, outcome.to_dict()
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from p4bridge import __version__
from p4bridge.CommandGate import CommandGate, CommandResult
from p4bridge.shared.gate import GateLogger, ResponseEnvelope

from . import commands
from .parsing import count_lines, extract_change_ids, parse_info
from .requests import (
    DEFAULT_DEPOT_PATH,
    DEFAULT_MAX_CHANGES,
    DEFAULT_MAX_FILES,
    DEFAULT_MAX_HISTORY,
    ChangeDetailRequest,
    ChangeListRequest,
    DepotRequest,
    FileContentRequest,
    FileHistoryRequest,
    FileListRequest,
    SyncRequest,
    issues_from_error,
    parse_request,
)

_log = GateLogger.get("DepotGate")


@dataclass
class OperationOutcome:
    """HTTP status plus reply body for one operation."""

    status_code: int
    envelope: Optional[ResponseEnvelope] = None
    payload: Optional[Dict[str, Any]] = None

    @property
    def success(self) -> bool:
        if self.envelope is not None:
            return self.envelope.success
        return self.status_code < 400

    def to_dict(self) -> Dict[str, Any]:
        if self.envelope is not None:
            return self.envelope.to_dict()
        return dict(self.payload or {})

    @classmethod
    def ok(cls, data: Any) -> "OperationOutcome":
        return cls(200, ResponseEnvelope.ok(data))

    @classmethod
    def fail(cls, status_code: int, message: str, result: CommandResult) -> "OperationOutcome":
        return cls(status_code, ResponseEnvelope.fail(message, result.error))


class DepotGate:
    """
    Depot operations over a CommandGate.

    Operations never raise for backend failures; those become failed
    outcomes. Requests are expected to be validated already.
    """

    def __init__(self, command_gate: CommandGate):
        self.command_gate = command_gate

    async def _run(self, args: List[str]) -> CommandResult:
        return await self.command_gate.run(args)

    async def server_info(self) -> OperationOutcome:
        """Server metadata parsed from ``p4 info``."""
        result = await self._run(commands.info_args())
        if not result.success:
            return OperationOutcome.fail(500, "Failed to get server info", result)
        return OperationOutcome.ok(parse_info(result.output))

    async def list_files(self, request: Optional[FileListRequest] = None) -> OperationOutcome:
        request = request or FileListRequest()
        path = request.path or DEFAULT_DEPOT_PATH
        max_results = request.max_results or DEFAULT_MAX_FILES

        result = await self._run(commands.files_args(path, max_results))
        if not result.success:
            return OperationOutcome.fail(500, "Failed to list files", result)
        return OperationOutcome.ok({
            "rawOutput": result.output,
            "count": count_lines(result.output),
            "path": path,
        })

    async def file_content(self, request: FileContentRequest) -> OperationOutcome:
        result = await self._run(commands.print_args(request.path, request.revision))
        if not result.success:
            return OperationOutcome.fail(404, "File not found or cannot be accessed", result)
        return OperationOutcome.ok({
            "path": request.path,
            "revision": commands.revision_suffix(request.revision),
            "content": result.output,
        })

    async def file_history(self, request: FileHistoryRequest) -> OperationOutcome:
        max_results = request.max_results or DEFAULT_MAX_HISTORY

        result = await self._run(commands.filelog_args(request.path, max_results))
        if not result.success:
            return OperationOutcome.fail(404, "File history not found", result)
        return OperationOutcome.ok({
            "path": request.path,
            "history": result.output,
        })

    async def list_changes(self, request: Optional[ChangeListRequest] = None) -> OperationOutcome:
        request = request or ChangeListRequest()
        max_results = request.max_results or DEFAULT_MAX_CHANGES

        result = await self._run(
            commands.changes_args(max_results, status=request.status, user=request.user)
        )
        if not result.success:
            return OperationOutcome.fail(500, "Failed to list changes", result)
        return OperationOutcome.ok({
            "rawOutput": result.output,
            "count": count_lines(result.output),
        })

    async def change_detail(self, request: ChangeDetailRequest) -> OperationOutcome:
        result = await self._run(commands.describe_args(request.change_id))
        if not result.success:
            return OperationOutcome.fail(404, "Change not found", result)
        return OperationOutcome.ok({
            "changeId": request.change_id,
            "rawOutput": result.output,
        })

    async def list_users(self) -> OperationOutcome:
        result = await self._run(commands.users_args())
        if not result.success:
            return OperationOutcome.fail(500, "Failed to list users", result)
        return OperationOutcome.ok({
            "rawOutput": result.output,
            "count": count_lines(result.output),
        })

    async def sync(self, request: Optional[SyncRequest] = None) -> OperationOutcome:
        """
        Sync workspace files.

        Always answers 200 with ``success: true``. p4 reports ordinary
        conditions such as "file(s) up-to-date" on stderr with a non-zero
        exit, so the backend's text is passed through as ``rawOutput``
        either way and ``backendSucceeded`` tells the two apart.
        """
        request = request or SyncRequest()
        path = request.path or DEFAULT_DEPOT_PATH
        forced = bool(request.force)

        result = await self._run(commands.sync_args(path, force=forced))
        if not result.success:
            _log.warning(f"Sync of {path} reported: {result.error}")
        return OperationOutcome.ok({
            "path": path,
            "rawOutput": result.text,
            "forced": forced,
            "backendSucceeded": result.success,
        })

    async def health(self) -> OperationOutcome:
        """
        Liveness plus backend reachability.

        ``healthy`` when ``p4 info`` succeeds, ``degraded`` when it fails,
        ``unhealthy`` (503) when the check itself blows up.
        """
        timestamp = datetime.now(timezone.utc).isoformat()
        try:
            result = await self._run(commands.info_args())
        except Exception as e:
            _log.error(f"Health check failed: {e}")
            return OperationOutcome(503, payload={
                "status": "unhealthy",
                "timestamp": timestamp,
                "error": str(e),
            })

        return OperationOutcome(200, payload={
            "status": "healthy" if result.success else "degraded",
            "timestamp": timestamp,
            "backendConnected": result.success,
            "version": __version__,
        })


__all__ = [
    "DEFAULT_DEPOT_PATH",
    "DEFAULT_MAX_CHANGES",
    "DEFAULT_MAX_FILES",
    "DEFAULT_MAX_HISTORY",
    "ChangeDetailRequest",
    "ChangeListRequest",
    "DepotGate",
    "DepotRequest",
    "FileContentRequest",
    "FileHistoryRequest",
    "FileListRequest",
    "OperationOutcome",
    "SyncRequest",
    "count_lines",
    "extract_change_ids",
    "issues_from_error",
    "parse_info",
    "parse_request",
]
