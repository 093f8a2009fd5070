"""In-memory cache driver.

Reference implementation of the CacheDriver contract backed by a dict.
Useful for tests and for processes that don't need the cache to survive
a restart. TTL hints are accepted and ignored.
"""

from typing import Dict, List, Optional

from .base import CacheDriver


class InMemoryDriver(CacheDriver):
    """Dict-backed driver. Entries live as long as the instance."""

    def __init__(self):
        super().__init__()
        self._cache: Dict[str, str] = {}

    async def read(self, key: str) -> Optional[str]:
        return self._cache.get(key)

    async def write(self, key: str, value: str, ttl: Optional[float] = None) -> None:
        self._cache[key] = value
        self.logger.debug(f"Stored {key} ({len(value)} chars)")

    async def delete(self, key: str) -> None:
        self._cache.pop(key, None)

    async def clear(self, prefix: Optional[str] = None) -> None:
        if prefix is None:
            self._cache.clear()
            return

        for key in [k for k in self._cache if k.startswith(prefix)]:
            del self._cache[key]

    def keys(self) -> List[str]:
        """Snapshot of the stored keys."""
        return list(self._cache)

    def __len__(self) -> int:
        return len(self._cache)
