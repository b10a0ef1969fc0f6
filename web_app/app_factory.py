"""FastAPI application factory."""

import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import api_router
from .web import web_router
from .middleware.logging import LoggingMiddleware


def create_app(
    store,
    service,
    config,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        store: Link store instance (may be None until the lifespan sets it)
        service: Link service instance (may be None until the lifespan sets it)
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="TinyLink",
        description="Short links with click tracking",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # Store instances in app state for access in routes
    app.state.store = store
    app.state.service = service
    app.state.config = config
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    # API first so /api/... never falls through to the /{code} redirect
    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Web"])

    return app
