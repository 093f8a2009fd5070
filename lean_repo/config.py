"""Configuration dataclasses and enums for lean_repo."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union
from enum import Enum


class CacheStrategy(Enum):
    """Policy deciding whether and in what order cache and network are consulted."""
    STALE_WHILE_REVALIDATE = "stale_while_revalidate"  # Cache now, network after
    CACHE_FIRST = "cache_first"      # Network only when the cache is empty
    NETWORK_ONLY = "network_only"    # Skip the cache read entirely
    CACHE_ONLY = "cache_only"        # Never hit the network


class SourceType(Enum):
    """Provenance of the data carried by a Resource."""
    NONE = "none"          # Loading, or error
    CACHE = "cache"        # Came from the local store
    NETWORK = "network"    # Came from fetch


def coerce_strategy(strategy: Union[CacheStrategy, str]) -> CacheStrategy:
    """Accept a CacheStrategy or its string value.

    Raises:
        ValueError: If the string names no strategy
    """
    if isinstance(strategy, CacheStrategy):
        return strategy
    return CacheStrategy(str(strategy).lower())


@dataclass
class EngineConfig:
    """Configuration for a SyncEngine.

    Attributes:
        default_strategy: Strategy used when synchronize() gets none
        default_ttl: TTL hint in seconds passed to driver writes
        log_level: Level for the lean_repo logger (create_engine only)
        json_logs: Emit JSON lines instead of text (create_engine only)
        log_file: Optional log file path (create_engine only)
    """
    default_strategy: CacheStrategy = CacheStrategy.STALE_WHILE_REVALIDATE
    default_ttl: Optional[float] = None
    log_level: str = "INFO"
    json_logs: bool = False
    log_file: Optional[Path] = None

    def __post_init__(self):
        """Coerce strings into enums and paths."""
        self.default_strategy = coerce_strategy(self.default_strategy)
        if isinstance(self.log_file, str):
            self.log_file = Path(self.log_file)


@dataclass
class FileDriverConfig:
    """Configuration for the file-backed cache driver.

    Attributes:
        root: Directory holding one envelope file per key
        default_ttl: TTL in seconds applied when write() gets no ttl
        suffix: File extension for envelope files
        hash_algorithm: Algorithm naming entry files ("sha256", "md5", "blake2b")
    """
    root: Path
    default_ttl: Optional[float] = None
    suffix: str = ".json"
    hash_algorithm: str = "sha256"

    def __post_init__(self):
        """Ensure root is a Path object."""
        if isinstance(self.root, str):
            self.root = Path(self.root)
