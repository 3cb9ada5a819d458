"""In-process store for tests and local runs."""

import asyncio
import logging
from dataclasses import replace
from typing import Dict, List, Optional

from ..errors import OriginalURLConflictError, ShortCodeConflictError
from .base import URLStoreBase
from .models import StoreStatistics, URLRecord, utcnow


class MemoryURLStore(URLStoreBase):
    """Dictionary-backed store with the same contract as the database store."""

    backend_name = "memory"

    def __init__(
        self,
        enforce_unique_original_url: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        self.enforce_unique_original_url = enforce_unique_original_url
        self.logger = logger or logging.getLogger(__name__)
        self._records: Dict[str, URLRecord] = {}
        self._lock = asyncio.Lock()

    async def exists_by_code(self, short_code: str) -> bool:
        return short_code in self._records

    async def insert(self, record: URLRecord) -> URLRecord:
        # The lock plays the role of the database's unique index
        async with self._lock:
            if record.short_code in self._records:
                raise ShortCodeConflictError(record.short_code)
            if self.enforce_unique_original_url and self._by_url(record.original_url):
                raise OriginalURLConflictError(record.original_url)

            stored = record.with_timestamps()
            self._records[stored.short_code] = stored

        self.logger.debug(f"Inserted {stored.short_code} -> {stored.original_url}")
        return replace(stored)

    async def find_by_code(self, short_code: str) -> Optional[URLRecord]:
        record = self._records.get(short_code)
        return replace(record) if record else None

    async def find_by_original_url(self, original_url: str) -> Optional[URLRecord]:
        record = self._by_url(original_url)
        return replace(record) if record else None

    async def increment_clicks(self, short_code: str) -> None:
        async with self._lock:
            record = self._records.get(short_code)
            if record is None:
                self.logger.warning(f"Cannot increment clicks - short code not found: {short_code}")
                return
            record.clicks += 1
            record.updated_at = utcnow()

    async def list_recent(self, limit: int = 100) -> List[URLRecord]:
        # Insertion order is creation order
        records = list(reversed(self._records.values()))
        return [replace(r) for r in records[:limit]]

    async def get_statistics(self) -> StoreStatistics:
        return StoreStatistics(
            total_urls=len(self._records),
            total_clicks=sum(r.clicks for r in self._records.values()),
            backend=self.backend_name,
        )

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        pass

    def _by_url(self, original_url: str) -> Optional[URLRecord]:
        for record in self._records.values():
            if record.original_url == original_url:
                return record
        return None
