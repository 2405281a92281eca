from __future__ import annotations

from fastapi import APIRouter, Depends

from p4bridge.DepotGate import DepotGate, SyncRequest

from portal.validation import from_body, respond


def create_router(depot: DepotGate) -> APIRouter:
    router = APIRouter()

    @router.post("/api/sync")
    async def api_sync(params: SyncRequest = Depends(from_body(SyncRequest))):
        """Sync workspace files (body: path, force)."""
        return respond(await depot.sync(params))

    return router
