"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional
from datetime import datetime


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""
    
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
                {"url": "https://github.com/user/repo", "shortCode": "myrepo"},
            ]
        },
    )
    
    url: str = Field(..., description="The URL to shorten")
    short_code: Optional[str] = Field(
        None,
        alias="shortCode",
        description="Optional custom short code; blank means generate one",
    )


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""
    
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "success": True,
                    "shortCode": "9f86d081",
                    "shortUrl": "http://localhost:4000/9f86d081",
                }
            ]
        },
    )
    
    success: bool = True
    short_code: str = Field(..., alias="shortCode", description="The stored short code")
    short_url: str = Field(..., alias="shortUrl", description="The complete short URL")


class SuccessResponse(BaseModel):
    """Bare acknowledgement."""
    
    success: bool = True


class HealthResponse(BaseModel):
    """Health check response."""
    
    status: str = Field(..., description="Overall status")
    storage: str = Field(..., description="Data file status")
    links: Optional[int] = Field(None, description="Number of links, if loaded")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""
    
    success: bool = False
    error: str = Field(..., description="Error message")
    details: Optional[Any] = Field(None, description="Detailed error information")
