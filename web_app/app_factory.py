"""FastAPI application factory."""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import api_router
from .errors import register_error_handlers
from .middleware.logging import LoggingMiddleware
from .web import web_router


def create_app(
    service_instance,
    config,
    logger: Optional[logging.Logger] = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        service_instance: URLShortenerService (None when a lifespan sets it later)
        config: Configuration instance
        logger: Optional logger

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="hashlink",
        description="Hash-based URL shortening service",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.state.service = service_instance
    app.state.config = config
    app.state.logger = logger or logging.getLogger("hashlink")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    register_error_handlers(app)

    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Web"])

    return app
