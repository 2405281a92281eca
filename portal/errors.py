"""
Exception handlers.

Every error leaves the gateway in the failure envelope shape, except the
unmatched-route reply, which points at the docs.
"""

from __future__ import annotations

from typing import Callable

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.requests import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from p4bridge.DepotGate import issues_from_error
from p4bridge.shared.gate import GateLogger, ResponseEnvelope, ValidationFailed

_log = GateLogger.get("Errors")


def not_found_body() -> dict:
    return {
        "success": False,
        "message": "Endpoint not found",
        "availableEndpoints": "/api/docs",
    }


def internal_error_response(
    request: Request, exc: Exception, is_development: Callable[[], bool]
) -> JSONResponse:
    """500 failure envelope; the exception text is only exposed in development."""
    _log.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    detail = str(exc) if is_development() else "Something went wrong"
    envelope = ResponseEnvelope.fail("Internal server error", detail)
    return JSONResponse(status_code=500, content=envelope.to_dict())


class InternalErrorMiddleware(BaseHTTPMiddleware):
    """
    Turn exceptions escaping a route into the 500 envelope.

    Must be the innermost middleware; the reply then passes through every
    outer one. The Exception handler below only sees errors raised by
    middleware itself.
    """

    def __init__(self, app, is_development: Callable[[], bool]):
        super().__init__(app)
        self._is_development = is_development

    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return internal_error_response(request, exc, self._is_development)


def register_exception_handlers(app: FastAPI, is_development: Callable[[], bool]) -> None:
    """
    Install the gateway's exception handlers.

    Args:
        app: Application to install on
        is_development: Whether internal error detail may be exposed
    """

    @app.exception_handler(ValidationFailed)
    async def validation_failed_handler(request: Request, exc: ValidationFailed):
        _log.info(f"Rejected {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=400, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content=jsonable_encoder(ValidationFailed(issues_from_error(exc)).to_dict()),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content=not_found_body())
        envelope = ResponseEnvelope.fail(str(exc.detail))
        return JSONResponse(
            status_code=exc.status_code,
            content=envelope.to_dict(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        return internal_error_response(request, exc, is_development)


__all__ = [
    "InternalErrorMiddleware",
    "internal_error_response",
    "not_found_body",
    "register_exception_handlers",
]
