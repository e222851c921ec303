"""API routes implementation."""

from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, Request

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    SuccessResponse,
    HealthResponse,
    ErrorResponse,
)
from ..urls import build_base_url, build_short_url

router = APIRouter()


@router.get(
    "/links",
    response_model=Dict[str, str],
    summary="List links",
    description="Get every short code with its target URL.",
)
async def list_links(request: Request):
    """List all links."""
    registry = request.app.state.registry
    return await registry.list_all()


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL, invalid or existing short code"},
        500: {"model": ErrorResponse, "description": "Storage failure"},
    },
    summary="Create short URL",
    description="Create a shortened URL. Optionally provide a custom short code.",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    registry = request.app.state.registry
    config = request.app.state.config
    
    code = await registry.create(body.url, body.short_code)
    
    base_url = build_base_url(
        headers=getattr(request.state, "forwarded_headers", {}),
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    
    return ShortenResponse(
        short_code=code,
        short_url=build_short_url(code, base_url, config.path_prefix),
    )


@router.delete(
    "/delete/{code}",
    response_model=SuccessResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
        500: {"model": ErrorResponse, "description": "Storage failure"},
    },
    summary="Delete short URL",
)
async def delete_url(request: Request, code: str):
    """Delete a shortened URL."""
    registry = request.app.state.registry
    await registry.delete(code)
    return SuccessResponse()


@router.get(
    "/api/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check whether the data file is writable.",
)
async def health_check(request: Request):
    """Health check endpoint for monitoring."""
    registry = request.app.state.registry
    
    health = await registry.health_check()
    
    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        storage="healthy" if health["storage"] else "unhealthy",
        links=health["links"],
        timestamp=datetime.now(timezone.utc),
    )
