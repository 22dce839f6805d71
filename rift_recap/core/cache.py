"""
In-memory TTL store shared by the match record cache and the insight cache.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
import structlog

logger = structlog.get_logger(__name__)


@dataclass
class CacheEntry:
    """A stored value and the clock reading after which it is stale."""

    key: str
    value: Any
    expires_at: float


class TTLStore:
    """Key/value store with per-entry expiry.

    Expired entries are never returned. They are dropped lazily on read and
    in bulk by ``sweep``, which ``start_sweeper`` runs on an interval. The
    store is used from a single event loop and takes no locks.
    """

    def __init__(
        self,
        ttl: float = 300,
        maxsize: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: float = 60.0,
        name: str = "store",
    ):
        """
        Initialize TTL store.

        Args:
            ttl: Default time to live in seconds
            maxsize: Maximum number of entries, unbounded if None
            clock: Time source in seconds
            sweep_interval: Seconds between background sweeps
            name: Label used in log events
        """
        self.ttl = ttl
        self.maxsize = maxsize
        self.clock = clock
        self.sweep_interval = sweep_interval
        self.name = name
        self.entries: Dict[str, CacheEntry] = {}
        self._hits = 0
        self._misses = 0
        self._sweeper: Optional[asyncio.Task] = None

    def get(self, key: str) -> Optional[Any]:
        """
        Get value if present and not expired.

        Args:
            key: Cache key

        Returns:
            Cached value, or None on a miss
        """
        entry = self.entries.get(key)
        if entry is None:
            self._misses += 1
            return None
        if self.clock() >= entry.expires_at:
            del self.entries[key]
            self._misses += 1
            logger.debug("Cache expired", store=self.name, key=key)
            return None
        self._hits += 1
        logger.debug("Cache hit", store=self.name, key=key)
        return entry.value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """
        Store a value.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds, store default if None
        """
        ttl = self.ttl if ttl is None else ttl
        if (
            self.maxsize is not None
            and len(self.entries) >= self.maxsize
            and key not in self.entries
        ):
            oldest_key = next(iter(self.entries))
            del self.entries[oldest_key]
            logger.debug("Cache eviction", store=self.name, key=oldest_key, reason="full")

        self.entries[key] = CacheEntry(key=key, value=value, expires_at=self.clock() + ttl)
        logger.debug("Cache set", store=self.name, key=key, ttl=ttl)

    def delete(self, key: str) -> None:
        """Remove a key if present."""
        self.entries.pop(key, None)

    def sweep(self) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self.clock()
        expired = [key for key, entry in self.entries.items() if now >= entry.expires_at]
        for key in expired:
            del self.entries[key]
        if expired:
            logger.debug("Cache sweep", store=self.name, entries_removed=len(expired))
        return len(expired)

    def clear(self) -> None:
        """Clear all entries from the store."""
        count = len(self.entries)
        self.entries.clear()
        self._hits = 0
        self._misses = 0
        logger.info("Cache cleared", store=self.name, entries_removed=count)

    def stats(self) -> Dict[str, Any]:
        """Get store statistics."""
        total = self._hits + self._misses
        return {
            "size": len(self.entries),
            "maxsize": self.maxsize,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": self._hits / total if total > 0 else 0.0,
        }

    def start_sweeper(self) -> asyncio.Task:
        """Start the background sweep task on the running loop."""
        if self._sweeper is None or self._sweeper.done():
            self._sweeper = asyncio.create_task(self._sweep_forever())
            logger.info(
                "Cache sweeper started", store=self.name, interval=self.sweep_interval
            )
        return self._sweeper

    async def stop_sweeper(self) -> None:
        """Cancel the background sweep task and wait for it to finish."""
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        try:
            await self._sweeper
        except asyncio.CancelledError:
            pass
        self._sweeper = None
        logger.info("Cache sweeper stopped", store=self.name)

    async def _sweep_forever(self) -> None:
        while True:
            await asyncio.sleep(self.sweep_interval)
            self.sweep()

    def __len__(self) -> int:
        """Get number of entries, expired ones included until swept."""
        return len(self.entries)
