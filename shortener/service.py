"""Business logic service for URL shortener."""

import logging
from typing import Any, Dict, Optional

from .common.logging_config import get_logger
from .common.validators import is_valid_url
from .exceptions import InvalidURLError
from .models import URLEntry
from .shortcode import ShortCodeGenerator
from .store import URLStore


class URLShortenerService:
    """Service layer between the HTTP handlers and the store."""
    
    def __init__(
        self,
        store: URLStore,
        logger: Optional[logging.Logger] = None,
        strict_urls: bool = False,
    ):
        """Initialize URL shortener service.
        
        Args:
            store: The store holding every mapping
            logger: Optional logger
            strict_urls: Require http(s) URLs with a host instead of any
                non-empty string
        """
        self.store = store
        self.logger = logger or get_logger("url_shortener.service")
        self.strict_urls = strict_urls
    
    def create_short_url(self, original_url: Optional[str]) -> URLEntry:
        """Create a new short URL.
        
        Args:
            original_url: The original long URL
            
        Returns:
            The created entry
            
        Raises:
            InvalidURLError: If the URL is empty, or malformed in strict mode
            GeneratorExhaustedError: If no unused code could be found
        """
        # Stored exactly as submitted; only a missing or empty URL is rejected
        if not original_url:
            raise InvalidURLError("URL is required")
        
        if self.strict_urls:
            is_valid, error = is_valid_url(original_url)
            if not is_valid:
                raise InvalidURLError(f"Invalid URL: {error}")
        
        entry = self.store.create(original_url)
        self.logger.info(f"Created short URL: {entry.short_code} -> {original_url}")
        return entry
    
    def resolve(self, short_code: str) -> Optional[str]:
        """Get the redirect target for a short code and count the click.
        
        Args:
            short_code: The short code to lookup
            
        Returns:
            Original URL or None if not found
        """
        if not ShortCodeGenerator.is_valid_format(short_code):
            self.logger.warning(f"Malformed short code: {short_code!r}")
            return None
        
        entry = self.store.get(short_code)
        if entry is None or not self.store.increment_clicks(short_code):
            self.logger.warning(f"Short code not found: {short_code}")
            return None
        
        self.logger.debug(f"Redirecting {short_code} -> {entry.original_url}")
        return entry.original_url
    
    def get_url_info(self, short_code: str) -> Optional[URLEntry]:
        """Get the current snapshot of a short URL, clicks included."""
        if not ShortCodeGenerator.is_valid_format(short_code):
            return None
        
        entry = self.store.stats(short_code)
        if entry is None:
            self.logger.debug(f"No stats for unknown code: {short_code}")
        return entry
    
    def health_check(self) -> Dict[str, Any]:
        """Report liveness along with store totals.
        
        Returns:
            Dictionary with status, urls_stored and total_clicks
        """
        return {
            "status": "healthy",
            "urls_stored": len(self.store),
            "total_clicks": self.store.total_clicks(),
        }
