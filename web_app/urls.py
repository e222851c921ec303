"""Short URL building for HTTP responses."""

from typing import Mapping, Optional


def build_base_url(
    headers: Mapping[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Work out the public base URL a client reached us on.
    
    Priority:
    1. X-Forwarded-Proto + X-Forwarded-Host (set by a reverse proxy)
    2. Request scheme + Host header
    3. Configured base URL
    
    Args:
        headers: Request headers (any key case)
        fallback_base_url: Base URL from configuration
        request_scheme: Request scheme (http/https)
        request_host: Request host
        
    Returns:
        Base URL without trailing slash (e.g., https://example.com)
    """
    lowered = {k.lower(): v for k, v in headers.items()}
    proto = lowered.get("x-forwarded-proto")
    host = lowered.get("x-forwarded-host")
    
    if proto and host:
        # Proxies may append their own hop: keep the client-facing one
        return f"{proto.split(',')[0].strip()}://{host.split(',')[0].strip()}"
    
    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"
    
    return fallback_base_url.rstrip("/")


def build_short_url(code: str, base_url: str, path_prefix: str = "") -> str:
    """Join base URL, optional prefix and code into the public short URL.
    
    Args:
        code: The short code
        base_url: Base URL (e.g., https://example.com)
        path_prefix: Optional path prefix (e.g., /s)
        
    Returns:
        Complete short URL
    """
    parts = [base_url.rstrip("/")]
    prefix = path_prefix.strip("/")
    if prefix:
        parts.append(prefix)
    parts.append(code)
    return "/".join(parts)
