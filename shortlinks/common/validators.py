"""Validation utilities for link targets and short codes."""

import re
from urllib.parse import urlparse
from typing import Iterable, Tuple


MAX_URL_LENGTH = 2048

# First path segments already taken by the HTTP routes
RESERVED_CODES = frozenset({"api", "links", "shorten", "delete"})

_CODE_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


def is_valid_url(
    url: str,
    allowed_schemes: Iterable[str] = ("http", "https"),
) -> Tuple[bool, str]:
    """Validate a target URL.
    
    Args:
        url: The URL to validate
        allowed_schemes: Schemes accepted as "recognized"
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"
    
    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"
    
    if any(c.isspace() for c in url):
        return False, "URL must not contain whitespace"
    
    try:
        result = urlparse(url)
        # Accessing .port validates the port component
        result.port
    except ValueError as e:
        return False, f"Invalid URL format: {e}"
    
    schemes = {s.lower() for s in allowed_schemes}
    if result.scheme.lower() not in schemes:
        return False, f"URL must use one of: {', '.join(sorted(schemes))}"
    
    if not result.hostname:
        return False, "URL must have a valid domain"
    
    return True, ""


def is_valid_short_code(short_code: str, min_length: int = 1, max_length: int = 64) -> Tuple[bool, str]:
    """Validate a caller-supplied short code.
    
    Codes are case-sensitive and must embed in a URL path segment unescaped.
    
    Args:
        short_code: The short code to validate
        min_length: Minimum length for short code
        max_length: Maximum length for short code
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Short code is required"
    
    if len(short_code) < min_length:
        return False, f"Short code must be at least {min_length} characters"
    
    if len(short_code) > max_length:
        return False, f"Short code must be at most {max_length} characters"
    
    if not _CODE_PATTERN.fullmatch(short_code):
        return False, "Short code can only contain letters, numbers, hyphens, and underscores"
    
    if short_code in RESERVED_CODES:
        return False, f"'{short_code}' is a reserved word and cannot be used"
    
    return True, ""
