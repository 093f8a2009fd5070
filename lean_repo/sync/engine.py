"""Sync engine for lean_repo.

Philosophy: SHOW WHAT YOU HAVE, THEN WHAT IS TRUE.

SyncEngine.synchronize() walks a key through two phases:
- cache: read the local store and emit what is there (or a loading marker)
- network: call fetch, persist the result, emit it (or the error)

The strategy decides which phases run (see lean_repo.sync.state).
Store faults never leave the engine; fetch faults leave it as data.
"""

import inspect
import json
import time
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List, Optional, TypeVar, Union
import logging

from lean_repo.config import CacheStrategy, EngineConfig, SourceType, coerce_strategy
from lean_repo.drivers.base import CacheDriver
from lean_repo.resource import Resource
from lean_repo.sync.state import SyncPhase, next_phase

logger = logging.getLogger(__name__)

T = TypeVar("T")

Fetcher = Callable[[], Awaitable[T]]
Deserializer = Callable[[Any], Union[T, Awaitable[T]]]
Serializer = Callable[[T], Any]


@dataclass
class SyncStats:
    """Statistics from one synchronize() call."""

    key: str = ""
    strategy: str = "unknown"

    # Cache phase
    cache_hit: bool = False
    cache_failed: bool = False

    # Network phase
    fetch_attempted: bool = False
    fetch_failed: bool = False
    persisted: bool = False
    persist_failed: bool = False

    emissions: int = 0

    # Timing
    started_at: float = 0.0
    completed_at: float = 0.0
    duration_ms: float = 0.0

    # Errors
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "key": self.key,
            "strategy": self.strategy,
            "cache_hit": self.cache_hit,
            "cache_failed": self.cache_failed,
            "fetch_attempted": self.fetch_attempted,
            "fetch_failed": self.fetch_failed,
            "persisted": self.persisted,
            "persist_failed": self.persist_failed,
            "emissions": self.emissions,
            "duration_ms": self.duration_ms,
            "errors": self.errors,
        }


class SyncEngine:
    """Mediates between a local cache driver and a remote fetch.

    The engine holds no per-key state: concurrent calls for the same key
    each do their own read, fetch and write, and the last write wins.

    Attributes:
        driver: CacheDriver used for reads and writes
        config: EngineConfig with default strategy and TTL
        on_cache_error: Callback when a cache read fails (receives key, error)
        on_persist_error: Callback when persisting fetched data fails (receives key, error)
    """

    def __init__(
        self,
        driver: CacheDriver,
        config: Optional[EngineConfig] = None,
        on_cache_error: Optional[Callable[[str, Exception], None]] = None,
        on_persist_error: Optional[Callable[[str, Exception], None]] = None,
    ):
        """Initialize sync engine.

        Args:
            driver: Store implementing the CacheDriver contract
            config: Engine configuration. Defaults to EngineConfig().
            on_cache_error: Called when a cache read or decode fails
            on_persist_error: Called when writing fetched data fails
        """
        self.driver = driver
        self.config = config or EngineConfig()
        self.on_cache_error = on_cache_error
        self.on_persist_error = on_persist_error

    async def synchronize(
        self,
        key: str,
        fetch: Fetcher,
        deserialize: Deserializer,
        serialize: Serializer,
        strategy: Optional[Union[CacheStrategy, str]] = None,
        ttl: Optional[float] = None,
    ) -> AsyncIterator[Resource]:
        """Emit the Resource sequence for key.

        Sequence by strategy (cache hit / miss):
            STALE_WHILE_REVALIDATE: [cached | loading, fresh | error]
            CACHE_FIRST:            [cached] | [loading, fresh | error]
            NETWORK_ONLY:           [fresh | error]
            CACHE_ONLY:             [cached | loading]

        Args:
            key: Store key, used verbatim
            fetch: Zero-argument coroutine function producing fresh data
            deserialize: Turns decoded JSON into T. May be a coroutine function.
            serialize: Turns T into something json.dumps accepts
            strategy: CacheStrategy or its string value.
                      Defaults to config.default_strategy.
            ttl: TTL hint in seconds for the write. Defaults to config.default_ttl.

        Yields:
            Resource snapshots, in order. The sequence ends after at most
            one fetch and never raises for store or fetch faults.

        Raises:
            ValueError: If key is empty or strategy is unknown
        """
        if not key:
            raise ValueError("key must be a non-empty string")

        strategy = coerce_strategy(strategy) if strategy is not None else self.config.default_strategy
        if ttl is None:
            ttl = self.config.default_ttl

        stats = SyncStats(
            key=key,
            strategy=strategy.value,
            started_at=time.time(),
        )

        phase = SyncPhase.NOT_STARTED
        try:
            while True:
                phase = next_phase(phase, strategy, stats.cache_hit)

                if phase is SyncPhase.CACHE:
                    resource = await self._read_cache(key, deserialize, stats)
                elif phase is SyncPhase.NETWORK:
                    resource = await self._fetch(key, fetch, serialize, ttl, stats)
                else:
                    break

                stats.emissions += 1
                yield resource
        finally:
            self._finalize_stats(stats)

    async def _read_cache(
        self,
        key: str,
        deserialize: Deserializer,
        stats: SyncStats,
    ) -> Resource:
        """Cache phase: one read, emitting cached data or a loading marker.

        Any fault (driver error, bad JSON, deserialize error) degrades to the
        empty-cache path.
        """
        try:
            stored = await self.driver.read(key)
            if stored is None:
                logger.debug(f"Cache miss: {key}")
                return Resource.loading()
            data = deserialize(json.loads(stored))
            if inspect.isawaitable(data):
                data = await data
        except Exception as e:
            stats.cache_failed = True
            stats.errors.append(f"Cache read failed: {e}")
            logger.warning(f"Cache read failed for {key}, treating as empty: {e}")
            self._notify(self.on_cache_error, key, e)
            return Resource.loading()

        stats.cache_hit = True
        logger.debug(f"Cache hit: {key}")
        return Resource.success(data, SourceType.CACHE)

    async def _fetch(
        self,
        key: str,
        fetch: Fetcher,
        serialize: Serializer,
        ttl: Optional[float],
        stats: SyncStats,
    ) -> Resource:
        """Network phase: exactly one fetch attempt, no retry.

        Fresh data is persisted before it is emitted. A failed persist is
        logged and the data is emitted anyway.
        """
        stats.fetch_attempted = True
        try:
            data = await fetch()
        except Exception as e:
            stats.fetch_failed = True
            stats.errors.append(f"Fetch failed: {e}")
            logger.warning(f"Fetch failed for {key}: {e}")
            return Resource.failed(e)

        try:
            payload = json.dumps(serialize(data))
            await self.driver.write(key, payload, ttl=ttl)
            stats.persisted = True
        except Exception as e:
            stats.persist_failed = True
            stats.errors.append(f"Persist failed: {e}")
            logger.warning(f"Fetched {key} but could not persist it: {e}")
            self._notify(self.on_persist_error, key, e)

        return Resource.success(data, SourceType.NETWORK)

    def _notify(
        self,
        callback: Optional[Callable[[str, Exception], None]],
        key: str,
        error: Exception,
    ) -> None:
        if callback is None:
            return
        try:
            callback(key, error)
        except Exception as cb_error:
            logger.error(f"Error callback failed for {key}: {cb_error}")

    def _finalize_stats(self, stats: SyncStats) -> SyncStats:
        """Finalize stats with timing info and log them.

        Args:
            stats: Stats object to finalize

        Returns:
            Finalized stats
        """
        stats.completed_at = time.time()
        stats.duration_ms = (stats.completed_at - stats.started_at) * 1000

        logger.info(
            f"Sync {stats.key} ({stats.strategy}): "
            f"cache={'hit' if stats.cache_hit else 'miss'}, "
            f"fetch={'failed' if stats.fetch_failed else 'ok' if stats.fetch_attempted else 'skipped'}, "
            f"{stats.emissions} emitted "
            f"in {stats.duration_ms:.1f}ms",
            extra={"sync_stats": stats.to_dict()},
        )

        return stats

    async def invalidate(self, key: str) -> None:
        """Drop the cached entry for key."""
        await self.driver.delete(key)
        logger.debug(f"Invalidated {key}")

    async def clear(self, prefix: Optional[str] = None) -> None:
        """Clear the store, or only keys starting with prefix."""
        await self.driver.clear(prefix)
        logger.info(f"Cleared cache (prefix={prefix!r})")
