"""Forwarded headers middleware."""

from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


class ForwardedHeadersMiddleware(BaseHTTPMiddleware):
    """Expose X-Forwarded-* headers on request.state.
    
    Routes read these when building the public short URL so links point at
    the proxy rather than at the backend address.
    """
    
    async def dispatch(self, request: Request, call_next: Callable):
        headers = request.headers
        request.state.forwarded_headers = {
            name: headers[name]
            for name in ("x-forwarded-proto", "x-forwarded-host", "x-forwarded-for")
            if name in headers
        }
        return await call_next(request)
