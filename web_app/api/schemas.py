"""Pydantic schemas for API requests and responses."""

from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field

from hashlink.database.models import URLRecord


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    # Emptiness and format are checked by the service so they map to invalid_url
    url: Optional[str] = Field(
        None,
        description="The URL to shorten",
        validation_alias=AliasChoices("url", "originalUrl"),
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    original_url: str = Field(..., description="The original long URL")
    short_url: str = Field(..., description="The complete short URL")
    short_code: str = Field(..., description="The 6-character short code")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "original_url": "https://example.com/very/long/path",
                    "short_url": "https://short.link/4Xb1Qz",
                    "short_code": "4Xb1Qz",
                    "created_at": "2024-01-01T12:00:00Z"
                }
            ]
        }
    }

    @classmethod
    def from_record(cls, record: URLRecord) -> "ShortenResponse":
        return cls(
            original_url=record.original_url,
            short_url=record.short_url,
            short_code=record.short_code,
            created_at=record.created_at,
        )


class ResolveResponse(BaseModel):
    """Original URL for a short code, as seen before this click is counted."""

    original_url: str
    short_code: str
    clicks: int


class URLInfoResponse(BaseModel):
    """Full record for a short code."""

    original_url: str
    short_code: str
    short_url: str
    clicks: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: URLRecord) -> "URLInfoResponse":
        return cls(**record.to_dict())


class URLListResponse(BaseModel):
    count: int
    urls: List[URLInfoResponse]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    cache: str = Field(..., description="Cache status")
    timestamp: datetime = Field(..., description="Check timestamp")


class StatusResponse(BaseModel):
    """Service status reported at the root path."""

    message: str
    status: str = Field(..., description="OK when the store is reachable, DEGRADED otherwise")
    database: str = Field(..., description="connected or disconnected")
    backend: str = Field(..., description="Store backend name")
    timestamp: datetime


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Machine-stable error kind")
    detail: Optional[str] = Field(None, description="Human-readable explanation")


class StatisticsResponse(BaseModel):
    """Statistics response."""

    total_urls: int
    total_clicks: int
    database: str
    cache_enabled: bool
