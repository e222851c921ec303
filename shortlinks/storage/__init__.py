"""Durable storage for the link registry."""

from .base import LinkStoreBase
from .json_file import JsonFileStore

__all__ = ["LinkStoreBase", "JsonFileStore"]
