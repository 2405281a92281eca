"""
Request validation dependencies.

Each dependency reads one source of raw parameters (query string, path or
JSON body), checks it against a DepotGate request model, and raises
ValidationFailed with every violation before the handler runs.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Type

from fastapi.requests import Request
from fastapi.responses import JSONResponse

from p4bridge.DepotGate import DepotRequest, OperationOutcome, parse_request
from p4bridge.shared.gate import ValidationFailed, ValidationIssue


def from_query(model: Type[DepotRequest]) -> Callable[[Request], DepotRequest]:
    def dependency(request: Request) -> DepotRequest:
        return parse_request(model, request.query_params)
    return dependency


def from_path(model: Type[DepotRequest]) -> Callable[[Request], DepotRequest]:
    def dependency(request: Request) -> DepotRequest:
        return parse_request(model, request.path_params)
    return dependency


def from_body(model: Type[DepotRequest]) -> Callable[[Request], Any]:
    async def dependency(request: Request) -> DepotRequest:
        raw = await request.body()
        body: Dict[str, Any] = {}
        if raw.strip():
            try:
                body = json.loads(raw)
            except ValueError as e:
                raise ValidationFailed([
                    ValidationIssue(field="body", message=f"Malformed JSON body ({e})", type="json_invalid")
                ]) from None
        if not isinstance(body, dict):
            raise ValidationFailed([
                ValidationIssue(field="body", message="Body must be a JSON object", type="model_type", value=body)
            ])
        return parse_request(model, body)
    return dependency


def respond(outcome: OperationOutcome) -> JSONResponse:
    """Serialize an operation outcome with its status code."""
    return JSONResponse(status_code=outcome.status_code, content=outcome.to_dict())


__all__ = ["from_body", "from_path", "from_query", "respond"]
