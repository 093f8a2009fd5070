"""lean_repo - stale-while-revalidate data synchronization for Python.

A small library that sits between a local key-value cache and a remote
data source. Each request yields a short async sequence of Resource
snapshots going from "no data" to "cached data" to "fresh data" (or an
error), so a UI can show something immediately and refresh it later.

Key Features:
    - Four cache strategies (stale-while-revalidate, cache-first, network-only, cache-only)
    - Pluggable storage through the async CacheDriver contract
    - In-memory and JSON-file drivers included
    - Store faults are contained, fetch faults arrive as data
    - Structured per-call stats in the logs

Quick Start:
    from lean_repo import SyncEngine, InMemoryDriver, CacheStrategy

    engine = SyncEngine(InMemoryDriver())

    async for resource in engine.synchronize(
        key="user_1",
        fetch=api.get_user,
        deserialize=User.from_dict,
        serialize=User.to_dict,
        strategy=CacheStrategy.STALE_WHILE_REVALIDATE,
    ):
        if resource.is_loading:
            show_spinner()
        elif resource.is_error:
            show_error(resource.error)
        else:
            render(resource.data)

Classes:
    SyncEngine: Runs the strategy for one key and emits Resources
    Resource: Immutable {data, error, source} snapshot
    CacheStrategy: Enum of the four strategies
    SourceType: Enum for data provenance (NONE, CACHE, NETWORK)
    CacheDriver: Abstract async key-value store contract
    InMemoryDriver, FileDriver: Bundled drivers

See Also:
    - examples/ for usage patterns
"""

__version__ = "1.0.0"
__license__ = "MIT"

from typing import Optional

# Core configuration classes
from .config import (
    CacheStrategy,
    SourceType,
    EngineConfig,
    FileDriverConfig,
)

from .resource import Resource

# Drivers
from .drivers import get_driver
from .drivers.base import CacheDriver, DriverError
from .drivers.memory import InMemoryDriver
from .drivers.file import FileDriver

# Sync components
from .sync.engine import SyncEngine, SyncStats
from .sync.state import SyncPhase

from .utils.logging import get_logger

# Public API
__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Main classes
    "SyncEngine",
    "SyncStats",
    "Resource",
    "EngineConfig",
    "FileDriverConfig",
    # Enums
    "CacheStrategy",
    "SourceType",
    "SyncPhase",
    # Drivers
    "CacheDriver",
    "DriverError",
    "InMemoryDriver",
    "FileDriver",
    "get_driver",
    "create_engine",
]


def create_engine(
    driver: str = "memory",
    engine_config: Optional[EngineConfig] = None,
    configure_logging: bool = False,
    **driver_kwargs,
) -> SyncEngine:
    """Convenience function to create a configured SyncEngine.

    Args:
        driver: Driver name ("memory" or "file")
        engine_config: Engine configuration. Defaults to EngineConfig().
        configure_logging: Attach handlers to the lean_repo logger using
                           the engine config's log_level, json_logs and log_file
        **driver_kwargs: Passed to the driver constructor

    Returns:
        Configured SyncEngine instance

    Example:
        engine = create_engine("file", config="./cache")
    """
    config = engine_config or EngineConfig()

    if configure_logging:
        get_logger(
            "lean_repo",
            level=config.log_level,
            json_output=config.json_logs,
            log_file=config.log_file,
        )

    return SyncEngine(get_driver(driver, **driver_kwargs), config=config)
