"""Core link registry for the shortlinks service."""

from .shortcode import ShortCodeGenerator
from .registry import LinkRegistry
from .models import LinkEntry

__all__ = ["ShortCodeGenerator", "LinkRegistry", "LinkEntry"]
