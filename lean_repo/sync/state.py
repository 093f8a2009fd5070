"""Phase state machine for a single synchronize() call.

The strategy decides which edges exist:

    STALE_WHILE_REVALIDATE  NOT_STARTED -> CACHE -> NETWORK -> TERMINATED
    CACHE_FIRST             NOT_STARTED -> CACHE -> (hit) TERMINATED
                                                 -> (miss) NETWORK -> TERMINATED
    NETWORK_ONLY            NOT_STARTED -> NETWORK -> TERMINATED
    CACHE_ONLY              NOT_STARTED -> CACHE -> TERMINATED

Each of CACHE and NETWORK is visited at most once, so every run ends.
"""

from enum import Enum

from lean_repo.config import CacheStrategy


class SyncPhase(Enum):
    """Where a synchronize() call is in its lifecycle."""
    NOT_STARTED = "not_started"
    CACHE = "cache"
    NETWORK = "network"
    TERMINATED = "terminated"


def next_phase(
    phase: SyncPhase,
    strategy: CacheStrategy,
    cache_hit: bool = False,
) -> SyncPhase:
    """Compute the phase that follows phase under strategy.

    Args:
        phase: Current phase
        strategy: Strategy of the running call
        cache_hit: Whether the cache phase produced data. Only consulted
                   when leaving CACHE.

    Returns:
        The next phase

    Raises:
        ValueError: If phase is TERMINATED
    """
    if phase is SyncPhase.NOT_STARTED:
        if strategy is CacheStrategy.NETWORK_ONLY:
            return SyncPhase.NETWORK
        return SyncPhase.CACHE

    if phase is SyncPhase.CACHE:
        if strategy is CacheStrategy.CACHE_ONLY:
            return SyncPhase.TERMINATED
        if strategy is CacheStrategy.CACHE_FIRST and cache_hit:
            return SyncPhase.TERMINATED
        return SyncPhase.NETWORK

    if phase is SyncPhase.NETWORK:
        return SyncPhase.TERMINATED

    raise ValueError(f"No transition out of {phase.name}")
