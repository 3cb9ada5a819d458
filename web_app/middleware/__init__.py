"""Middleware for hashlink web app."""

from .logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
