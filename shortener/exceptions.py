"""Exceptions raised by the URL shortener core.

Classes:
    ShortenerError:
        Generic base class for shortener-related exceptions.

    InvalidURLError:
        Raised when a URL submitted for shortening is rejected.

    GeneratorExhaustedError:
        Raised when no unused short code was found within the retry budget.

    EntropySourceError:
        Raised when the operating system random source fails. Not recoverable.
"""


class ShortenerError(Exception):
    """Generic base class for shortener-related exceptions."""

    pass


class InvalidURLError(ShortenerError, ValueError):
    """Exception raised when a URL cannot be shortened (empty or malformed)."""

    pass


class GeneratorExhaustedError(ShortenerError):
    """Exception raised when every generated short code collided with an existing one."""

    def __init__(self, attempts: int):
        super().__init__(f"Unable to generate unique short code after {attempts} attempts")
        self.attempts = attempts


class EntropySourceError(ShortenerError):
    """Exception raised when random bytes cannot be drawn from the OS.

    Short codes must be unpredictable, so the process must stop issuing them.
    """

    pass
