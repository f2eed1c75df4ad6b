"""Redirect route implementation.

Registered after the API router: the catch-all path must not shadow
/shorten, /stats/... or /health.
"""

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import RedirectResponse

router = APIRouter()


@router.get("/{short_code}", include_in_schema=False)
def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL, counting one click."""
    service = request.app.state.service
    
    original_url = service.resolve(short_code)
    
    if original_url is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found",
        )
    
    # Temporary redirect so repeat visits are tracked
    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
