"""API routes implementation.

Endpoints are plain functions, so Starlette runs them on its worker thread
pool and the store sees real concurrent callers.
"""

from fastapi import APIRouter, Request, HTTPException, status

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    StatsResponse,
    ServiceInfoResponse,
    HealthResponse,
    ErrorResponse,
)
from shortener.common.url_builder import build_short_url

SERVICE_NAME = "URL Shortener API"
SERVICE_VERSION = "1.0.0"
SERVICE_ENDPOINTS = "POST /shorten, GET /{shortCode}, GET /stats/{shortCode}"

router = APIRouter()


@router.get(
    "/",
    response_model=ServiceInfoResponse,
    summary="Service descriptor",
)
def service_info():
    """Describe the service and its endpoints."""
    return ServiceInfoResponse(
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
        endpoints=SERVICE_ENDPOINTS,
    )


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        500: {"model": ErrorResponse, "description": "No unused short code available"},
    },
    summary="Create short URL",
    description="Create a shortened URL under a random short code.",
)
def shorten_url(request: Request, body: ShortenRequest):
    """Create a shortened URL.
    
    InvalidURLError and GeneratorExhaustedError are turned into JSON errors
    by the handlers registered in the app factory.
    """
    service = request.app.state.service
    config = request.app.state.config
    
    entry = service.create_short_url(body.url)
    
    short_url = build_short_url(
        short_code=entry.short_code,
        base_url=config.base_url,
        path_prefix=config.path_prefix,
    )
    
    return ShortenResponse(
        short_url=short_url,
        short_code=entry.short_code,
        original_url=entry.original_url,
    )


@router.get("/shorten", include_in_schema=False)
def shorten_wrong_method():
    """Keep GET /shorten from being read as a short code."""
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
        headers={"Allow": "POST"},
    )


@router.get(
    "/stats/{short_code}",
    response_model=StatsResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Get click statistics",
    description="Get the original URL, creation time and click count of a short URL.",
)
def get_stats(request: Request, short_code: str):
    """Get statistics for a shortened URL."""
    service = request.app.state.service
    
    entry = service.get_url_info(short_code)
    
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found",
        )
    
    return StatsResponse(
        short_code=entry.short_code,
        original_url=entry.original_url,
        clicks=entry.clicks,
        created_at=entry.created_at,
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is up and report store totals.",
)
def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service
    
    return HealthResponse(**service.health_check())
