"""Abstract base class for cache drivers.

This module defines the key-value contract every storage backend must
implement. The sync engine only ever talks to this interface, so any
conforming backend can be swapped in.
"""

from abc import ABC, abstractmethod
from typing import Optional
import logging


class DriverError(Exception):
    """Raised by a driver for genuine storage I/O faults.

    A missing key is never a DriverError; read() returns None instead.
    """


class CacheDriver(ABC):
    """Abstract base class for string-keyed, string-valued stores.

    All methods are coroutines. No method has to be atomic across calls,
    but a write followed by a read of the same key (with no mutation in
    between) must return the written value.

    Example:
        class RedisDriver(CacheDriver):
            async def read(self, key):
                return await self.client.get(key)
            # ... implement other methods
    """

    def __init__(self):
        """Initialize the driver with a logger."""
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    async def read(self, key: str) -> Optional[str]:
        """Read the value stored under key.

        Args:
            key: Cache key

        Returns:
            str: Stored value, or None if the key is absent
        """
        pass

    @abstractmethod
    async def write(self, key: str, value: str, ttl: Optional[float] = None) -> None:
        """Store value under key, replacing any existing value.

        Args:
            key: Cache key
            value: Serialized value
            ttl: Time to live in seconds. Advisory, a driver may ignore it.
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete key. Deleting an absent key is not an error.

        Args:
            key: Cache key
        """
        pass

    @abstractmethod
    async def clear(self, prefix: Optional[str] = None) -> None:
        """Remove entries.

        Args:
            prefix: If given, only keys starting with it are removed.
                    If None, everything is removed.
        """
        pass
