"""Exception handlers rendering every failure as JSON {"error": ...}."""

import logging
import os
import signal
from typing import Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortener.exceptions import (
    EntropySourceError,
    GeneratorExhaustedError,
    InvalidURLError,
)

logger = logging.getLogger("url_shortener.web")


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message},
        headers=headers,
    )


def request_shutdown() -> None:
    """Ask the running server to stop (handled by app.main's signal handler)."""
    os.kill(os.getpid(), signal.SIGTERM)


def register_exception_handlers(app: FastAPI, on_fatal: Callable[[], None] = request_shutdown) -> None:
    """Install the JSON error handlers on app.
    
    Args:
        app: FastAPI application
        on_fatal: Called after an EntropySourceError has been answered
    """
    
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail), headers=exc.headers)
    
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.debug(f"Rejected body on {request.url.path}: {exc.errors()}")
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid JSON")
    
    @app.exception_handler(InvalidURLError)
    async def invalid_url_handler(request: Request, exc: InvalidURLError):
        return error_response(status.HTTP_400_BAD_REQUEST, str(exc))
    
    @app.exception_handler(GeneratorExhaustedError)
    async def exhausted_handler(request: Request, exc: GeneratorExhaustedError):
        logger.error(f"Short code generation failed: {exc}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Could not allocate a short code")
    
    @app.exception_handler(EntropySourceError)
    async def entropy_handler(request: Request, exc: EntropySourceError):
        logger.critical(f"Random source failure, shutting down: {exc}")
        on_fatal()
        return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "Service unavailable")
