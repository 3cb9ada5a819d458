#!/usr/bin/env python3
"""
Command-line interface for the hashlink service.

Usage:
    python hashlink_cli.py shorten <url>
    python hashlink_cli.py resolve <short_code>
    python hashlink_cli.py info <short_code>
    python hashlink_cli.py list [--limit N]
    python hashlink_cli.py health
"""

import argparse
import asyncio
import json
import os
import sys
from typing import Optional

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from app import build_service, build_store
from config import load_config
from hashlink.common.logging_config import setup_logging
from hashlink.database.cache import RedisCache
from hashlink.errors import ShortenerError


class HashlinkCLI:
    """Command-line interface for hashlink."""

    def __init__(self, db_url: Optional[str] = None, redis_url: Optional[str] = None, verbose: bool = False):
        self.config = load_config()
        if db_url:
            self.config.database_url = db_url
        if redis_url:
            self.config.redis_url = redis_url
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.service = None

    async def initialize(self):
        """Initialize store, cache and service."""
        store = build_store(self.config, self.logger)

        cache = None
        if self.config.redis_url:
            cache = RedisCache(
                redis_url=self.config.redis_url,
                ttl_seconds=self.config.cache_ttl_seconds,
                logger=self.logger,
            )
            await cache.connect()

        self.service = build_service(self.config, store, cache, self.logger)

    async def cleanup(self):
        if self.service:
            await self.service.close()

    async def shorten(self, url: str) -> int:
        record = await self.service.create_short_url(url)
        return _emit({
            "success": True,
            "original_url": record.original_url,
            "short_url": record.short_url,
            "short_code": record.short_code,
        })

    async def resolve(self, short_code: str) -> int:
        record = await self.service.resolve(short_code)
        return _emit({
            "success": True,
            "short_code": record.short_code,
            "original_url": record.original_url,
        })

    async def info(self, short_code: str) -> int:
        record = await self.service.get_url_info(short_code)
        return _emit({"success": True, **record.to_dict()})

    async def list_urls(self, limit: int = 100) -> int:
        records = await self.service.list_recent_urls(limit)
        return _emit({
            "success": True,
            "count": len(records),
            "urls": [r.to_dict() for r in records],
        })

    async def health(self) -> int:
        health_status = await self.service.health_check()
        stats = await self.service.get_statistics()
        _emit({"success": True, "health": health_status, "statistics": stats})
        return 0 if health_status["overall"] else 1


def _emit(payload: dict) -> int:
    print(json.dumps(payload, indent=2))
    return 0


def _emit_error(kind: str, detail: str) -> int:
    print(json.dumps({"success": False, "error": kind, "detail": detail}, indent=2), file=sys.stderr)
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="hashlink CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s shorten https://example.com/long/url
  %(prog)s resolve 4Xb1Qz
  %(prog)s info 4Xb1Qz
  %(prog)s list --limit 10
  %(prog)s health
        """
    )

    parser.add_argument("--db-url", help="PostgreSQL connection URL (default: DATABASE_URL)")
    parser.add_argument("--redis-url", help="Redis connection URL (default: REDIS_URL)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")

    resolve_parser = subparsers.add_parser("resolve", help="Get original URL (counts a click)")
    resolve_parser.add_argument("short_code", help="Short code to resolve")

    info_parser = subparsers.add_parser("info", help="Show the stored record")
    info_parser.add_argument("short_code", help="Short code to inspect")

    list_parser = subparsers.add_parser("list", help="List recent URLs")
    list_parser.add_argument("--limit", type=int, default=100, help="Maximum number to return")

    subparsers.add_parser("health", help="Check service health")

    return parser


async def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    cli = HashlinkCLI(db_url=args.db_url, redis_url=args.redis_url, verbose=args.verbose)

    commands = {
        "shorten": lambda: cli.shorten(args.url),
        "resolve": lambda: cli.resolve(args.short_code),
        "info": lambda: cli.info(args.short_code),
        "list": lambda: cli.list_urls(args.limit),
        "health": cli.health,
    }

    try:
        await cli.initialize()
        return await commands[args.command]()
    except ShortenerError as e:
        return _emit_error(e.kind, e.detail)
    finally:
        await cli.cleanup()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
