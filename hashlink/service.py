"""Business logic service for URL shortener."""

import logging
from typing import Any, Dict, List, Optional

from .common.url_builder import build_short_url
from .common.validators import is_valid_url
from .database.base import URLStoreBase
from .database.cache import RedisCache
from .database.models import URLRecord
from .errors import (
    InvalidShortCodeError,
    InvalidURLError,
    OriginalURLConflictError,
    ShortCodeConflictError,
    ShortCodeNotFoundError,
)
from .lookup import LookupService, LookupStatus
from .resolver import UniquenessResolver
from .shortcode import ShortCodeGenerator


class URLShortenerService:
    """Service layer for URL shortening business logic."""

    def __init__(
        self,
        store: URLStoreBase,
        base_url: str,
        path_prefix: str = "",
        cache: Optional[RedisCache] = None,
        resolver: Optional[UniquenessResolver] = None,
        logger: Optional[logging.Logger] = None,
        strict_url_validation: bool = False,
    ):
        """Initialize URL shortener service.

        Args:
            store: Record store
            base_url: Base URL for generated short URLs
            path_prefix: Optional path prefix for short URLs
            cache: Optional read-through cache used on lookups
            resolver: Optional uniqueness resolver
            logger: Optional logger
            strict_url_validation: Require http(s) URLs with a host
        """
        self.store = store
        self.base_url = base_url
        self.path_prefix = path_prefix
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)
        self.resolver = resolver or UniquenessResolver(
            generator=ShortCodeGenerator(),
            logger=self.logger,
        )
        self.lookup = LookupService(store=store, cache=cache, logger=self.logger)
        self.strict_url_validation = strict_url_validation

    async def create_short_url(self, original_url: str) -> URLRecord:
        """Create a short URL, or return the existing one for the same URL.

        Args:
            original_url: The original long URL, stored exactly as given

        Returns:
            The stored record

        Raises:
            InvalidURLError: If the URL is missing or malformed
            ShortCodeConflictError: If the resolved code was taken at insert time
            StoreError: If the store is unavailable
        """
        # Validate URL
        is_valid, error = is_valid_url(original_url, strict=self.strict_url_validation)
        if not is_valid:
            raise InvalidURLError(error)

        # Reuse the existing short URL for the same original URL
        existing = await self.store.find_by_original_url(original_url)
        if existing:
            self.logger.debug(f"Reusing existing short URL: {existing.short_code} -> {original_url}")
            return existing

        # Generate short code with collision handling
        short_code = await self.resolver.resolve(original_url, self.store.exists_by_code)
        record = URLRecord(
            original_url=original_url,
            short_code=short_code,
            short_url=build_short_url(short_code, self.base_url, self.path_prefix),
            clicks=0,
        )

        try:
            # Create in database
            stored = await self.store.insert(record)
        except (ShortCodeConflictError, OriginalURLConflictError):
            # Same-URL creates race to the same deterministic code; the winner's record is the answer
            winner = await self.store.find_by_original_url(original_url)
            if winner is None:
                self.logger.error(f"Short code conflict at insert for {original_url}: {short_code}")
                raise
            return winner

        self.logger.info(f"Created short URL: {stored.short_code} -> {original_url}")
        return stored

    async def resolve(self, short_code: str) -> URLRecord:
        """Resolve a short code for a redirect and count the click.

        Args:
            short_code: Code from the request (validated here)

        Returns:
            The stored record

        Raises:
            InvalidShortCodeError: If the code is not 6 base62 characters
            ShortCodeNotFoundError: If no record uses the code
            StoreError: If the store is unavailable
        """
        return await self._lookup(short_code, count_click=True)

    async def get_original_url(self, short_code: str) -> str:
        """Resolve a short code to its original URL, counting the click."""
        record = await self.resolve(short_code)
        return record.original_url

    async def get_url_info(self, short_code: str) -> URLRecord:
        """Get a record without counting a click."""
        return await self._lookup(short_code, count_click=False)

    async def list_recent_urls(self, limit: int = 100) -> List[URLRecord]:
        """List recently created records, newest first."""
        return await self.store.list_recent(limit)

    async def get_statistics(self) -> Dict[str, Any]:
        """Get service statistics."""
        stats = await self.store.get_statistics()
        return {
            **stats.to_dict(),
            "cache_enabled": self.cache is not None and self.cache.enabled,
        }

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.store.health_check()

        cache_healthy = True
        if self.cache and self.cache.enabled:
            cache_healthy = await self.cache.ping()

        return {
            "database": db_healthy,
            "cache": cache_healthy,
            "overall": db_healthy and cache_healthy,
        }

    async def wait_for_pending(self) -> None:
        """Wait for background click increments."""
        await self.lookup.wait_for_pending()

    async def close(self) -> None:
        """Finish pending work and close connections."""
        await self.wait_for_pending()
        await self.store.close()
        if self.cache:
            await self.cache.close()

    async def _lookup(self, short_code: str, count_click: bool) -> URLRecord:
        result = await self.lookup.resolve(short_code, count_click=count_click)

        if result.status is LookupStatus.INVALID_FORMAT:
            raise InvalidShortCodeError(result.detail)
        if result.status is LookupStatus.NOT_FOUND:
            raise ShortCodeNotFoundError(short_code)

        return result.record
