"""Status, redirect and health routes served at the root path."""

from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from ..api.schemas import StatusResponse

router = APIRouter()


@router.get("/", response_model=StatusResponse, summary="Service status")
async def service_status(request: Request):
    """Report that the service is up and whether its store is reachable."""
    service = request.app.state.service
    health = await service.health_check()

    return StatusResponse(
        message="hashlink is running",
        status="OK" if health["database"] else "DEGRADED",
        database="connected" if health["database"] else "disconnected",
        backend=service.store.backend_name,
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/health", include_in_schema=False)
async def health_check_web(request: Request):
    """Health check endpoint (simple version for load balancers)."""
    service = request.app.state.service

    health = await service.health_check()

    if not health["overall"]:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service unhealthy",
        )
    return {"status": "healthy"}


@router.get("/{short_code}", include_in_schema=False)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL.

    302 so browsers come back through the service and every visit is counted.
    """
    service = request.app.state.service
    record = await service.resolve(short_code)
    return RedirectResponse(url=record.original_url, status_code=status.HTTP_302_FOUND)
