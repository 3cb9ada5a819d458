#!/usr/bin/env python3
"""
Main entry point for the hashlink service.

Usage:
    python app.py

Environment variables:
    STORE_BACKEND - 'postgres' (default) or 'memory'
    DATABASE_URL - PostgreSQL connection URL
    CREATE_TABLES - Set to 'true' to create the table on startup
    REDIS_URL - Redis connection URL (optional)
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from hashlink.common.logging_config import setup_logging
from hashlink.database.base import URLStoreBase
from hashlink.database.cache import RedisCache
from hashlink.database.memory import MemoryURLStore
from hashlink.database.postgres import PostgresURLStore
from hashlink.resolver import UniquenessResolver
from hashlink.service import URLShortenerService
from hashlink.shortcode import ShortCodeGenerator
from web_app import create_app


def build_store(config: Config, logger) -> URLStoreBase:
    """Create the configured record store."""
    if config.store_backend == "memory":
        logger.warning("Using in-memory store; records are lost on restart")
        return MemoryURLStore(
            enforce_unique_original_url=config.enforce_unique_original_url,
            logger=logger,
        )

    return PostgresURLStore(
        db_config=config.database_url,
        enforce_unique_original_url=config.enforce_unique_original_url,
        logger=logger,
    )


def build_service(
    config: Config,
    store: URLStoreBase,
    cache: Optional[RedisCache],
    logger,
) -> URLShortenerService:
    """Wire the resolver and service from configuration."""
    resolver = UniquenessResolver(
        generator=ShortCodeGenerator(),
        max_attempts=config.max_collision_retries,
        monotonic_fallback=config.monotonic_fallback,
        logger=logger,
    )
    return URLShortenerService(
        store=store,
        base_url=config.base_url,
        path_prefix=config.path_prefix,
        cache=cache,
        resolver=resolver,
        logger=logger,
        strict_url_validation=config.strict_url_validation,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting hashlink service...")

    store = build_store(config, logger)
    if config.create_tables and isinstance(store, PostgresURLStore):
        await store.create_tables()

    cache = None
    if config.redis_url:
        cache = RedisCache(
            redis_url=config.redis_url,
            ttl_seconds=config.cache_ttl_seconds,
            logger=logger,
        )
        await cache.connect()
    else:
        logger.info("Redis caching disabled")

    service = build_service(config, store, cache, logger)

    app.state.store = store
    app.state.cache = cache
    app.state.service = service

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down hashlink service...")
    await service.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info(f"Configuration: {config.safe_dump()}")

    app = create_app(service_instance=None, config=config, logger=logger)
    app.router.lifespan_context = lifespan

    server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=config.host,
            port=config.port,
            workers=config.workers,
            log_level=config.log_level.lower(),
            access_log=True,
        )
    )

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
