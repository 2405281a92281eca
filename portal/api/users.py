from __future__ import annotations

from fastapi import APIRouter

from p4bridge.DepotGate import DepotGate

from portal.validation import respond


def create_router(depot: DepotGate) -> APIRouter:
    router = APIRouter()

    @router.get("/api/users")
    async def api_list_users():
        return respond(await depot.list_users())

    return router
