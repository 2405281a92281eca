from __future__ import annotations

from fastapi import APIRouter, Depends

from p4bridge.DepotGate import ChangeDetailRequest, ChangeListRequest, DepotGate

from portal.validation import from_path, from_query, respond


def create_router(depot: DepotGate) -> APIRouter:
    router = APIRouter()

    @router.get("/api/changes")
    async def api_list_changes(params: ChangeListRequest = Depends(from_query(ChangeListRequest))):
        """List changes (query: max, status, user)."""
        return respond(await depot.list_changes(params))

    @router.get("/api/changes/{changeId}")
    async def api_change_detail(params: ChangeDetailRequest = Depends(from_path(ChangeDetailRequest))):
        """Describe one change."""
        return respond(await depot.change_detail(params))

    return router
