"""
Registry error classes.

Every failure the link registry reports to its callers is one of these.
Each class carries the HTTP status the transport layer should answer with.
"""

from typing import Optional, Dict, Any


class RegistryError(Exception):
    """
    Base registry error class.

    Attributes:
        status_code: HTTP status code (default: 500)
        message: Error message (default: "Registry error")
        details: Optional additional error details
    """
    status_code: int = 500
    message: str = "Registry error"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """
        Initialize registry error.

        Args:
            message: Error message (overrides default)
            details: Optional additional error details
        """
        self.message = message or self.message
        self.details = details or {}
        super().__init__(self.message)


class InvalidTarget(RegistryError, ValueError):
    """Target URL is empty or malformed."""
    status_code = 400
    message = "Invalid URL"


class InvalidCode(RegistryError, ValueError):
    """Requested short code is not acceptable."""
    status_code = 400
    message = "Invalid short code"


class CodeConflict(RegistryError, ValueError):
    """Requested short code already exists."""
    status_code = 400
    message = "Short code already exists"


class NotFound(RegistryError):
    """Short code does not exist."""
    status_code = 404
    message = "Short code not found"


class StorageFailure(RegistryError):
    """Reading or writing the data file failed."""
    status_code = 500
    message = "Storage failure"


class GenerationExhausted(RegistryError):
    """No free short code found within the retry bound."""
    status_code = 500
    message = "Unable to generate unique short code"
