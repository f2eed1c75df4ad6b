"""Concurrent in-memory store for URL mappings."""

import logging
from datetime import datetime, timezone
from typing import Dict, Optional

from .common.logging_config import get_logger
from .exceptions import GeneratorExhaustedError, InvalidURLError
from .models import URLEntry
from .rwlock import ReadWriteLock
from .shortcode import ShortCodeGenerator


class URLStore:
    """Thread-safe mapping from short code to URLEntry.
    
    Lookups share the lock; creations and click updates hold it exclusively.
    Entries are immutable, so callers only ever see snapshots and the store
    stays the sole mutator of its mapping. Entries are never removed.
    """
    
    def __init__(
        self,
        generator: Optional[ShortCodeGenerator] = None,
        max_attempts: int = 10,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the store.
        
        Args:
            generator: Short code generator (defaults to 6 bytes of entropy)
            max_attempts: Maximum codes drawn per creation before giving up
            logger: Optional logger
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be positive (given value: {max_attempts})")
        
        self.generator = generator or ShortCodeGenerator()
        self.max_attempts = max_attempts
        self.logger = logger or get_logger("url_shortener.store")
        self._urls: Dict[str, URLEntry] = {}
        self._lock = ReadWriteLock()
    
    def create(self, original_url: str) -> URLEntry:
        """Store a new mapping under a freshly generated short code.
        
        Args:
            original_url: The original long URL (must be non-empty)
            
        Returns:
            The created entry, with zero clicks
            
        Raises:
            InvalidURLError: If original_url is empty
            GeneratorExhaustedError: If every attempt hit an existing code
            EntropySourceError: If the random source failed
        """
        if not original_url:
            raise InvalidURLError("URL is required")
        
        with self._lock.write_locked():
            for attempt in range(1, self.max_attempts + 1):
                code = self.generator.generate()
                if code not in self._urls:
                    break
                self.logger.warning(f"Short code collision on attempt {attempt}: {code}")
            else:
                self.logger.error(f"Short code generation exhausted after {self.max_attempts} attempts")
                raise GeneratorExhaustedError(self.max_attempts)
            
            entry = URLEntry(
                short_code=code,
                original_url=original_url,
                created_at=datetime.now(timezone.utc),
            )
            self._urls[code] = entry
        
        return entry
    
    def get(self, short_code: str) -> Optional[URLEntry]:
        """Look up an entry without touching its click counter.
        
        Args:
            short_code: The short code to lookup
            
        Returns:
            The entry or None if not found
        """
        with self._lock.read_locked():
            return self._urls.get(short_code)
    
    def stats(self, short_code: str) -> Optional[URLEntry]:
        """Look up an entry for reporting. Same guarantees as get()."""
        return self.get(short_code)
    
    def increment_clicks(self, short_code: str) -> bool:
        """Atomically add one click to an entry.
        
        Args:
            short_code: The short code to update
            
        Returns:
            True if updated, False if the code is unknown
        """
        with self._lock.write_locked():
            entry = self._urls.get(short_code)
            if entry is None:
                return False
            self._urls[short_code] = entry.with_click()
        return True
    
    def total_clicks(self) -> int:
        with self._lock.read_locked():
            return sum(entry.clicks for entry in self._urls.values())
    
    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._urls)
    
    def __contains__(self, short_code: object) -> bool:
        with self._lock.read_locked():
            return short_code in self._urls
