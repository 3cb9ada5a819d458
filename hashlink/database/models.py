"""Data models for URL shortener."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(value) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


@dataclass
class URLRecord:
    """Represents a shortened URL in the store."""

    original_url: str
    short_code: str
    short_url: str
    clicks: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def with_timestamps(self, now: Optional[datetime] = None) -> "URLRecord":
        """Copy with created_at/updated_at set, as a store does on insert."""
        now = now or utcnow()
        return replace(self, created_at=now, updated_at=now)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "original_url": self.original_url,
            "short_code": self.short_code,
            "short_url": self.short_url,
            "clicks": self.clicks,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "URLRecord":
        """Create from dictionary."""
        return cls(
            original_url=data["original_url"],
            short_code=data["short_code"],
            short_url=data["short_url"],
            clicks=data.get("clicks", 0),
            created_at=_parse_timestamp(data.get("created_at")),
            updated_at=_parse_timestamp(data.get("updated_at")),
        )


@dataclass
class StoreStatistics:
    """Aggregate numbers reported by a store."""

    total_urls: int = 0
    total_clicks: int = 0
    backend: str = "unknown"
    extra: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "total_urls": self.total_urls,
            "total_clicks": self.total_clicks,
            "database": self.backend,
            **self.extra,
        }
