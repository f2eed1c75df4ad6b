"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""
    
    # Missing, null and empty are all rejected by the service with the same message
    url: Optional[str] = Field(None, description="The URL to shorten")
    
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""
    
    short_url: str = Field(..., description="The complete short URL")
    short_code: str = Field(..., description="The generated short code")
    original_url: str = Field(..., description="The original long URL")
    
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "short_url": "http://localhost:8080/aB3x_9Qz",
                    "short_code": "aB3x_9Qz",
                    "original_url": "https://example.com/very/long/path",
                }
            ]
        }
    }


class StatsResponse(BaseModel):
    """Click statistics for one short URL."""
    
    short_code: str
    original_url: str
    clicks: int
    created_at: datetime


class ServiceInfoResponse(BaseModel):
    """Service descriptor served at the root path."""
    
    service: str
    version: str
    endpoints: str


class HealthResponse(BaseModel):
    """Health check response."""
    
    status: str = Field(..., description="Overall status")
    urls_stored: int = Field(..., description="Number of short URLs in memory")
    total_clicks: int = Field(..., description="Clicks across every short URL")


class ErrorResponse(BaseModel):
    """Error response."""
    
    error: str = Field(..., description="Error message")
