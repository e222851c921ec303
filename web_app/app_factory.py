"""FastAPI application factory."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import api_router
from .web import web_router
from .errors import register_exception_handlers
from .middleware.headers import ForwardedHeadersMiddleware
from .middleware.logging import LoggingMiddleware


def create_app(
    registry,
    config,
    logger: logging.Logger = None,
) -> FastAPI:
    """Create and configure FastAPI application.
    
    Args:
        registry: LinkRegistry instance (may be None and set later, e.g. in a lifespan)
        config: Configuration instance
        logger: Optional logger for request logging
        
    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="shortlinks",
        description="File-backed URL shortening service",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )
    
    # Routes reach the registry through app state, never a module global
    app.state.registry = registry
    app.state.config = config
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(ForwardedHeadersMiddleware)
    app.add_middleware(LoggingMiddleware, logger=logger)
    
    register_exception_handlers(app)
    
    # API first: the catch-all /{code} redirect lives in the web router
    app.include_router(api_router, tags=["API"])
    app.include_router(web_router, tags=["Web"])
    
    return app
