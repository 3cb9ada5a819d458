"""Abstract base class for URL record stores."""

from abc import ABC, abstractmethod
from typing import List, Optional

from .models import StoreStatistics, URLRecord


class URLStoreBase(ABC):
    """Abstract base class for URL record storage.

    Implementations enforce short code uniqueness themselves; the service
    layer never locks. Failures of the backing system are raised as
    `hashlink.errors.StoreError`.
    """

    backend_name = "base"

    @abstractmethod
    async def exists_by_code(self, short_code: str) -> bool:
        """Check if a short code is already taken.

        Args:
            short_code: The short code to check

        Returns:
            True if a record uses it
        """

    @abstractmethod
    async def insert(self, record: URLRecord) -> URLRecord:
        """Persist a new record.

        Args:
            record: Record to insert (timestamps are set by the store)

        Returns:
            The stored record

        Raises:
            ShortCodeConflictError: If the short code already exists
            OriginalURLConflictError: If the store enforces URL uniqueness and the URL exists
        """

    @abstractmethod
    async def find_by_code(self, short_code: str) -> Optional[URLRecord]:
        """Get the record for a short code, or None."""

    @abstractmethod
    async def find_by_original_url(self, original_url: str) -> Optional[URLRecord]:
        """Get the record for an exact original URL string, or None."""

    @abstractmethod
    async def increment_clicks(self, short_code: str) -> None:
        """Add one to the click counter and bump updated_at."""

    @abstractmethod
    async def list_recent(self, limit: int = 100) -> List[URLRecord]:
        """List records, most recently created first."""

    @abstractmethod
    async def get_statistics(self) -> StoreStatistics:
        """Get store-wide totals."""

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable."""

    @abstractmethod
    async def close(self) -> None:
        """Release connections."""
