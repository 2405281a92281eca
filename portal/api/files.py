from __future__ import annotations

from fastapi import APIRouter, Depends

from p4bridge.DepotGate import (
    DepotGate,
    FileContentRequest,
    FileHistoryRequest,
    FileListRequest,
)

from portal.validation import from_query, respond


def create_router(depot: DepotGate) -> APIRouter:
    router = APIRouter()

    @router.get("/api/files")
    async def api_list_files(params: FileListRequest = Depends(from_query(FileListRequest))):
        """List depot files (query: path, max)."""
        return respond(await depot.list_files(params))

    @router.get("/api/files/content")
    async def api_file_content(params: FileContentRequest = Depends(from_query(FileContentRequest))):
        """File content at head or a given revision (query: path, revision)."""
        return respond(await depot.file_content(params))

    @router.get("/api/files/history")
    async def api_file_history(params: FileHistoryRequest = Depends(from_query(FileHistoryRequest))):
        """Revision history of a file (query: path, max)."""
        return respond(await depot.file_history(params))

    return router
