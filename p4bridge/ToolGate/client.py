"""
ToolGate gateway client.

Async HTTP client for the P4Bridge REST gateway. Every failure surfaces as a
GatewayError carrying a readable message.
"""

from typing import Any, Dict, Optional

import httpx

from p4bridge.shared.gate import GateLogger

_log = GateLogger.get("ToolGate.Client")

DEFAULT_API_URL = "http://localhost:3000/api"
DEFAULT_TIMEOUT = 30


class GatewayError(Exception):
    """Raised when a gateway request fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase


class GatewayClient:
    """
    Client for the REST gateway.

    Args:
        base_url: Gateway API root, e.g. http://localhost:3000/api
        timeout: Per-request timeout in seconds
        transport: Optional httpx transport (tests pass a MockTransport)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def root_url(self) -> str:
        """Server root (the API root without its trailing /api)."""
        if self.base_url.endswith("/api"):
            return self.base_url[: -len("/api")]
        return self.base_url

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        base: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Call a gateway endpoint and return the decoded JSON body.

        Raises:
            GatewayError: On an error status, an unreachable server, or a malformed request
        """
        url = f"{base or self.base_url}{endpoint}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(method, url, params=params, json=json)
        except httpx.TransportError as e:
            _log.error(f"Gateway unreachable at {url}: {e}")
            raise GatewayError("Network Error: Unable to reach Perforce API server") from e
        except httpx.HTTPError as e:
            raise GatewayError(f"Request Error: {e}") from e

        if response.status_code >= 400:
            raise GatewayError(
                f"API Error: {response.status_code} - {_error_message(response)}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise GatewayError(f"Request Error: invalid JSON from {url}") from e

    async def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self.request(endpoint, params=params)

    async def post(self, endpoint: str, json: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request(endpoint, method="POST", json=json)

    async def health(self) -> Dict[str, Any]:
        """GET /health on the server root."""
        return await self.request("/health", base=self.root_url)


__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_TIMEOUT",
    "GatewayClient",
    "GatewayError",
]
