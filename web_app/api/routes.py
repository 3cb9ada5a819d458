"""API routes implementation."""

from datetime import datetime, timezone

from fastapi import APIRouter, Query, Request

from .schemas import (
    ErrorResponse,
    HealthResponse,
    ResolveResponse,
    ShortenRequest,
    ShortenResponse,
    StatisticsResponse,
    URLInfoResponse,
    URLListResponse,
)

router = APIRouter()

LOOKUP_ERRORS = {
    400: {"model": ErrorResponse, "description": "Invalid short code format"},
    404: {"model": ErrorResponse, "description": "Short code not found"},
    503: {"model": ErrorResponse, "description": "Store unavailable"},
}


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        500: {"model": ErrorResponse, "description": "Short code conflict"},
        503: {"model": ErrorResponse, "description": "Store unavailable"},
    },
    summary="Create short URL",
    description="Shorten a URL. Shortening the same URL again returns the existing short URL.",
)
async def shorten_url(request: Request, body: ShortenRequest):
    service = request.app.state.service
    record = await service.create_short_url(body.url)
    return ShortenResponse.from_record(record)


@router.get(
    "/url/{short_code}",
    response_model=ResolveResponse,
    responses=LOOKUP_ERRORS,
    summary="Resolve short code",
    description="Get the original URL for a short code. Counts as a click, which the returned total includes.",
)
async def resolve_url(request: Request, short_code: str):
    service = request.app.state.service
    record = await service.resolve(short_code)
    return ResolveResponse(
        original_url=record.original_url,
        short_code=record.short_code,
        clicks=record.clicks + 1,
    )


@router.get(
    "/urls/{short_code}",
    response_model=URLInfoResponse,
    responses=LOOKUP_ERRORS,
    summary="Get URL information",
    description="Get the stored record for a short code without counting a click.",
)
async def get_url_info(request: Request, short_code: str):
    service = request.app.state.service
    record = await service.get_url_info(short_code)
    return URLInfoResponse.from_record(record)


@router.get(
    "/urls",
    response_model=URLListResponse,
    summary="List URLs",
    description="List short URLs, most recently created first.",
)
async def list_urls(request: Request, limit: int = Query(100, ge=1, le=1000)):
    service = request.app.state.service
    records = await service.list_recent_urls(limit)
    return URLListResponse(
        count=len(records),
        urls=[URLInfoResponse.from_record(r) for r in records],
    )


@router.get(
    "/stats",
    response_model=StatisticsResponse,
    summary="Get statistics",
)
async def get_statistics(request: Request):
    service = request.app.state.service
    stats = await service.get_statistics()
    return StatisticsResponse(**stats)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
)
async def health_check(request: Request):
    service = request.app.state.service
    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        cache="healthy" if health["cache"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
