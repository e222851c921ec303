"""FastAPI transport for the shortlinks registry."""

from .app_factory import create_app

__all__ = ["create_app"]
