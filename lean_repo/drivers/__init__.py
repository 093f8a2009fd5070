"""lean_repo cache drivers.

Each driver implements the CacheDriver key-value contract.

Available drivers:
    - InMemoryDriver: dict-backed, TTL ignored
    - FileDriver: one JSON envelope file per key, TTL honored

Usage:
    from lean_repo.drivers import get_driver

    driver = get_driver("file", config="./cache")
"""

from .base import CacheDriver, DriverError


def get_driver(name: str = "memory", **kwargs) -> CacheDriver:
    """Create a driver by name.

    Args:
        name: Driver name ("memory" or "file")
        **kwargs: Passed to the driver constructor

    Returns:
        CacheDriver: Driver instance

    Raises:
        NotImplementedError: If the driver name is unknown
    """
    target = name.lower()

    if target == "memory":
        from .memory import InMemoryDriver
        return InMemoryDriver(**kwargs)
    elif target == "file":
        from .file import FileDriver
        return FileDriver(**kwargs)
    else:
        raise NotImplementedError(
            f"Driver '{name}' is not supported. "
            f"Supported drivers: memory, file"
        )


__all__ = [
    "CacheDriver",
    "DriverError",
    "get_driver",
]
