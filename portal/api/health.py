"""
Health check API endpoint.

Reports liveness and whether the Perforce server answers.
"""

from __future__ import annotations

from fastapi import APIRouter

from p4bridge.DepotGate import DepotGate

from portal.validation import respond


def create_router(depot: DepotGate) -> APIRouter:
    router = APIRouter()

    @router.get("/health")
    async def health():
        """
        Health status.

        Returns 200 with status ``healthy`` or ``degraded`` (backend
        unreachable), 503 with ``unhealthy`` when the check itself fails.
        """
        return respond(await depot.health())

    return router
