"""In-memory product cache with TTL checked on read.

Entries are never swept in the background: a stale entry simply stops
being returned and is overwritten by the next successful lookup.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Optional

import structlog

from pricewatch.core.clock import Clock, utc_now
from pricewatch.scrapers.base import ProductRecord

logger = structlog.get_logger(__name__)


@dataclass
class CacheEntry:
    """A cached product record and the time it was stored."""

    key: str
    value: ProductRecord
    created_at: datetime


class ProductCache:
    """Async in-memory cache of ProductRecords keyed by URL and ZIP code.

    Provides key-value caching with a single TTL. All methods are async so
    the store can be swapped for a networked cache without touching callers.
    """

    def __init__(self, ttl_seconds: int = 1800, clock: Clock = utc_now):
        """Initialize cache service.

        Args:
            ttl_seconds: Time-to-live in seconds (default: 1800 = 30 minutes)
            clock: Source of the current UTC time
        """
        self.ttl = timedelta(seconds=ttl_seconds)
        self.clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = asyncio.Lock()
        self.logger = logger.bind(service="cache_service")

    async def get(self, key: str, now: Optional[datetime] = None) -> Optional[ProductRecord]:
        """Get a record from cache.

        Args:
            key: Cache key
            now: Current time, defaults to the cache's clock

        Returns:
            Cached record, or None if missing or older than the TTL
        """
        now = now or self.clock()

        async with self._lock:
            entry = self._entries.get(key)

        if entry is None:
            self.logger.debug("cache_miss", key=key)
            return None

        if now - entry.created_at >= self.ttl:
            self.logger.debug("cache_expired", key=key)
            return None

        self.logger.debug("cache_hit", key=key)
        return entry.value

    async def set(self, key: str, record: ProductRecord, now: Optional[datetime] = None) -> None:
        """Store ``record`` under ``key``, replacing any existing entry.

        Args:
            key: Cache key
            record: Record to cache
            now: Creation time, defaults to the cache's clock
        """
        now = now or self.clock()

        async with self._lock:
            self._entries[key] = CacheEntry(key=key, value=record, created_at=now)

        self.logger.debug("cache_set", key=key, ttl=int(self.ttl.total_seconds()))

    def __len__(self) -> int:
        return len(self._entries)

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        """Drop all entries. Called on application shutdown."""
        async with self._lock:
            self._entries.clear()
        self.logger.info("cache_cleared")


def cache_key_for_product(url: str, zip_code: str) -> str:
    """Generate cache key for a product lookup.

    Args:
        url: Canonical product URL
        zip_code: Locale code

    Returns:
        Cache key string ("<url>:<zip>")
    """
    return f"{url}:{zip_code}"
