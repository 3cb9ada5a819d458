"""Storage layer for URL shortener."""

from .base import URLStoreBase
from .memory import MemoryURLStore
from .models import StoreStatistics, URLRecord
from .postgres import PostgresURLStore

__all__ = [
    "URLStoreBase",
    "MemoryURLStore",
    "PostgresURLStore",
    "StoreStatistics",
    "URLRecord",
]
