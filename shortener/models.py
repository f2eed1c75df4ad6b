"""Data models for URL shortener."""

from dataclasses import dataclass, replace
from datetime import datetime


@dataclass(frozen=True)
class URLEntry:
    """Represents one shortened URL held by the store."""
    
    short_code: str
    original_url: str
    created_at: datetime
    clicks: int = 0
    
    def with_click(self) -> "URLEntry":
        """Return a copy with the click counter advanced by one."""
        return replace(self, clicks=self.clicks + 1)
