import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from docscout.core.models.document import DocumentContent

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    content: DocumentContent
    inserted_at: float


class InMemoryContentCache:
    """Process-local TTL cache for fetched documents, keyed by URL.

    Expired entries are evicted lazily on ``get`` or in bulk via
    ``remove_expired``.
    """

    def __init__(self, ttl_seconds: float = 3600, clock: Callable[[], float] = time.monotonic):
        """Initialize cache.

        Args:
            ttl_seconds: Maximum entry age in seconds.
            clock: Monotonic time source, injectable for tests.
        """
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = asyncio.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    async def get(self, key: str) -> Optional[DocumentContent]:
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.inserted_at > self._ttl:
                del self._entries[key]
                logger.debug(f"Cache expired: {key}")
                return None
            return entry.content

    async def set(self, key: str, value: DocumentContent) -> None:
        async with self._lock:
            self._entries[key] = CacheEntry(content=value, inserted_at=self._clock())

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()

    async def remove_expired(self) -> int:
        """Drop every expired entry and return how many were removed."""
        async with self._lock:
            now = self._clock()
            expired = [k for k, e in self._entries.items() if now - e.inserted_at > self._ttl]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.info(f"Cache: removed {len(expired)} expired entries")
        return len(expired)

    async def size(self) -> int:
        async with self._lock:
            return len(self._entries)
