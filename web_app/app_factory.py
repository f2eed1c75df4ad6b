"""FastAPI application factory."""

from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import api_router
from .web import web_router
from .errors import register_exception_handlers, request_shutdown
from .middleware.logging import LoggingMiddleware


def create_app(
    service_instance,
    config,
    on_fatal: Optional[Callable[[], None]] = None,
) -> FastAPI:
    """Create and configure FastAPI application.
    
    Args:
        service_instance: Service instance (None when the lifespan builds it)
        config: Configuration instance
        on_fatal: Hook run on unrecoverable errors (defaults to SIGTERM to self)
        
    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="URL Shortener",
        description="In-memory URL shortening service",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )
    
    # Store instances in app state for access in routes
    app.state.service = service_instance
    app.state.config = config
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)
    
    register_exception_handlers(app, on_fatal=on_fatal or request_shutdown)
    
    # Order matters: the redirect catch-all goes last
    app.include_router(api_router, tags=["API"])
    app.include_router(web_router, tags=["Redirect"])
    
    return app
