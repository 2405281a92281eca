from __future__ import annotations

from fastapi import APIRouter

from p4bridge.DepotGate import DepotGate

from portal.validation import respond


def create_router(depot: DepotGate) -> APIRouter:
    router = APIRouter()

    @router.get("/api/info")
    async def api_info():
        """Server information as key/value pairs."""
        return respond(await depot.server_info())

    return router
