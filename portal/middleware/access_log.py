from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware

from p4bridge.shared.gate import GateLogger

_log = GateLogger.get("Access")


class AccessLogMiddleware(BaseHTTPMiddleware):
    """One log line per request: client, request line, status, duration, user agent."""

    async def dispatch(self, request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        client = request.client.host if request.client else "-"
        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        agent = request.headers.get("user-agent", "-")

        _log.info(
            f'{client} "{request.method} {target}" {response.status_code} '
            f'{duration_ms:.1f}ms "{agent}"'
        )
        return response


__all__ = ["AccessLogMiddleware"]
