"""Hash-based URL shortener core."""

from .shortcode import ShortCodeGenerator
from .resolver import UniquenessResolver
from .lookup import LookupService, LookupResult, LookupStatus
from .service import URLShortenerService

__all__ = [
    "ShortCodeGenerator",
    "UniquenessResolver",
    "LookupService",
    "LookupResult",
    "LookupStatus",
    "URLShortenerService",
]
