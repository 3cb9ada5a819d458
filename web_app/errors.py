"""Mapping of service errors to HTTP responses."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hashlink.common.logging_config import get_logger
from hashlink.errors import (
    InvalidShortCodeError,
    InvalidURLError,
    OriginalURLConflictError,
    ShortCodeConflictError,
    ShortCodeNotFoundError,
    ShortenerError,
    StoreError,
)

logger = get_logger("web")

ERROR_STATUS = {
    InvalidURLError: status.HTTP_400_BAD_REQUEST,
    InvalidShortCodeError: status.HTTP_400_BAD_REQUEST,
    ShortCodeNotFoundError: status.HTTP_404_NOT_FOUND,
    ShortCodeConflictError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    OriginalURLConflictError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StoreError: status.HTTP_503_SERVICE_UNAVAILABLE,
}

HTTP_ERROR_KINDS = {
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_503_SERVICE_UNAVAILABLE: "service_unhealthy",
}


def error_body(kind: str, detail: str) -> dict:
    return {"error": kind, "detail": detail}


def status_for(exc: ShortenerError) -> int:
    for exc_type in type(exc).__mro__:
        if exc_type in ERROR_STATUS:
            return ERROR_STATUS[exc_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def shortener_error_handler(request: Request, exc: ShortenerError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.kind}: {exc.detail}")
    return JSONResponse(status_code=status_code, content=error_body(exc.kind, exc.detail))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = [
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("invalid_request", "; ".join(messages) or "Invalid request"),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes, wrong methods and raised HTTPExceptions."""
    kind = HTTP_ERROR_KINDS.get(exc.status_code, "http_error")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(kind, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("internal_error", "Server error"),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ShortenerError, shortener_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
