"""Core business logic for URL shortener."""

from .exceptions import (
    ShortenerError,
    InvalidURLError,
    GeneratorExhaustedError,
    EntropySourceError,
)
from .models import URLEntry
from .shortcode import ShortCodeGenerator
from .store import URLStore
from .service import URLShortenerService

__all__ = [
    "ShortenerError",
    "InvalidURLError",
    "GeneratorExhaustedError",
    "EntropySourceError",
    "URLEntry",
    "ShortCodeGenerator",
    "URLStore",
    "URLShortenerService",
]
