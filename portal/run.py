"""
P4Bridge REST gateway.

Usage:
    p4bridge-api
    uvicorn portal.run:app --host 0.0.0.0 --port 3000
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from p4bridge import Config, __version__

from portal import lifecycle
from portal.api import changes, docs, files, health, info, sync, users
from portal.errors import InternalErrorMiddleware, register_exception_handlers
from portal.middleware.access_log import AccessLogMiddleware
from portal.middleware.rate_limit import RateLimitMiddleware
from portal.middleware.security import SecurityHeadersMiddleware


def create_app(services: Optional[lifecycle.Services] = None) -> FastAPI:
    """Build the application around a set of services."""
    services = services or lifecycle.build_services()
    manager = services.config

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await lifecycle.startup(services)
        yield
        await lifecycle.shutdown(services)

    app = FastAPI(
        title="Perforce REST API",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
    )
    app.state.services = services
    app.state.depot = services.depot

    # Added last runs first; InternalErrorMiddleware sits innermost
    app.add_middleware(InternalErrorMiddleware, is_development=manager.is_development)
    app.add_middleware(RateLimitMiddleware, limiter=services.rate_limiter)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=manager.get("CORS_ALLOWED_ORIGINS") or ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(AccessLogMiddleware)

    register_exception_handlers(app, manager.is_development)

    app.include_router(health.create_router(services.depot))
    app.include_router(info.create_router(services.depot))
    app.include_router(files.create_router(services.depot))
    app.include_router(changes.create_router(services.depot))
    app.include_router(users.create_router(services.depot))
    app.include_router(sync.create_router(services.depot))
    app.include_router(docs.create_router())

    return app


def main() -> None:
    manager = Config.get_manager()
    uvicorn.run(
        "portal.run:app",
        host=manager.get("HOST"),
        port=manager.get("PORT"),
        log_level=str(manager.get("LOG_LEVEL", "INFO")).lower(),
    )


app = create_app()


if __name__ == "__main__":
    main()
