"""Resolution of short codes to stored records."""

import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import Optional, Set

from .common.validators import is_valid_short_code
from .database.base import URLStoreBase
from .database.cache import RedisCache
from .database.models import URLRecord


class LookupStatus(enum.Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    INVALID_FORMAT = "invalid_format"


@dataclass(frozen=True)
class LookupResult:
    """Outcome of a lookup. `record` is set only when status is FOUND."""

    status: LookupStatus
    short_code: str
    record: Optional[URLRecord] = None
    detail: str = ""

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND


class LookupService:
    """Validate a short code, fetch its record and count the click."""

    def __init__(
        self,
        store: URLStoreBase,
        cache: Optional[RedisCache] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize lookup service.

        Args:
            store: Record store
            cache: Optional read-through cache in front of the store
            logger: Optional logger
        """
        self.store = store
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)
        self._pending: Set[asyncio.Task] = set()

    async def resolve(self, short_code: str, count_click: bool = True) -> LookupResult:
        """Resolve a short code.

        The format is checked before any store or cache access. A FOUND
        result schedules a background click increment unless
        `count_click` is False.

        Args:
            short_code: Code to resolve (any string)
            count_click: Whether to increment the record's clicks

        Returns:
            LookupResult with status FOUND, NOT_FOUND or INVALID_FORMAT

        Raises:
            StoreError: If the store cannot be queried
        """
        # Validate format before touching the store
        is_valid, error = is_valid_short_code(short_code)
        if not is_valid:
            return LookupResult(LookupStatus.INVALID_FORMAT, short_code, detail=error)

        record = await self._fetch(short_code)
        if record is None:
            self.logger.info(f"Short code not found: {short_code}")
            return LookupResult(
                LookupStatus.NOT_FOUND,
                short_code,
                detail="Short code may have expired or never existed",
            )

        # Increment in background
        if count_click:
            self._schedule_increment(short_code)

        return LookupResult(LookupStatus.FOUND, short_code, record=record)

    async def wait_for_pending(self) -> None:
        """Wait until all scheduled click increments have finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _fetch(self, short_code: str) -> Optional[URLRecord]:
        # Try cache first
        if self.cache:
            cached = await self.cache.get_record(short_code)
            if cached is not None:
                self.logger.debug(f"Cache hit for {short_code}")
                return cached

        # Get from database
        record = await self.store.find_by_code(short_code)

        # Update cache
        if record is not None and self.cache:
            await self.cache.set_record(record)

        return record

    def _schedule_increment(self, short_code: str) -> None:
        task = asyncio.create_task(self._increment(short_code))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _increment(self, short_code: str) -> None:
        try:
            await self.store.increment_clicks(short_code)
        except Exception as e:
            # Click counting is best effort; the redirect already succeeded
            self.logger.warning(f"Failed to increment clicks for {short_code}: {e}")
