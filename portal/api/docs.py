"""
API documentation endpoint.

A static catalog of the gateway's routes with example requests.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter

from p4bridge import __version__

API_TITLE = "Perforce REST API"

ENDPOINTS: Dict[str, str] = {
    "GET /health": "Health check",
    "GET /api/info": "Get server information",
    "GET /api/files": "List files in depot (returns raw P4 output) (query: path, max)",
    "GET /api/files/content": "Get file content (query: path, revision)",
    "GET /api/files/history": "Get file history (returns raw P4 output) (query: path, max)",
    "GET /api/changes": "List changes (returns raw P4 output) (query: max, status, user)",
    "GET /api/changes/:changeId": "Get change details (returns raw P4 output)",
    "GET /api/users": "List users (returns raw P4 output)",
    "POST /api/sync": "Sync files (returns raw P4 output) (body: path, force)",
    "GET /api/docs": "This documentation",
}

EXAMPLES: Dict[str, str] = {
    "List recent files (raw)": "GET /api/files?path=//depot/...&max=10",
    "Get file content": "GET /api/files/content?path=//depot/main/README.md",
    "List recent changes (raw)": "GET /api/changes?max=5",
    "Sync depot": 'POST /api/sync {"path": "//depot/..."}',
}


def api_docs() -> Dict[str, Any]:
    return {
        "title": API_TITLE,
        "version": __version__,
        "endpoints": dict(ENDPOINTS),
        "examples": dict(EXAMPLES),
    }


def create_router() -> APIRouter:
    router = APIRouter()

    @router.get("/api/docs")
    async def api_docs_endpoint() -> Dict[str, Any]:
        return api_docs()

    return router
