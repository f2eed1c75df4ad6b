"""Short code generation utilities."""

import base64
import math
import secrets
import string
from typing import Callable, Optional

from .exceptions import EntropySourceError


class ShortCodeGenerator:
    """Generate random, URL-safe short codes."""
    
    # URL-safe base64 alphabet (RFC 4648 section 5)
    URLSAFE_CHARS = string.ascii_letters + string.digits + "-_"
    
    def __init__(
        self,
        entropy_bytes: int = 6,
        token_source: Optional[Callable[[int], bytes]] = None,
    ):
        """Initialize short code generator.
        
        The code length is derived from the entropy budget so that every
        random bit survives encoding: 6 bytes give exactly 8 characters.
        
        Args:
            entropy_bytes: Number of random bytes behind each code
            token_source: Callable returning N random bytes (defaults to
                secrets.token_bytes)
        """
        if entropy_bytes < 1:
            raise ValueError(f"entropy_bytes must be positive (given value: {entropy_bytes})")
        
        self.entropy_bytes = entropy_bytes
        self.token_source = token_source or secrets.token_bytes
    
    @property
    def length(self) -> int:
        """Length of every generated code."""
        return math.ceil(self.entropy_bytes * 8 / 6)
    
    def generate(self) -> str:
        """Generate a random short code.
        
        Returns:
            Random URL-safe short code of `length` characters
            
        Raises:
            EntropySourceError: If the OS random source is unavailable
        """
        try:
            raw = self.token_source(self.entropy_bytes)
        except OSError as e:
            raise EntropySourceError(f"Random source failed: {e}") from e
        
        return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")
    
    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code only uses the URL-safe alphabet.
        
        Args:
            code: Code to validate
            
        Returns:
            True if valid format
        """
        return bool(code) and all(c in ShortCodeGenerator.URLSAFE_CHARS for c in code)
