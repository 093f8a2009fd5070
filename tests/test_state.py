"""Tests for lean_repo.sync.state module.

Drives the phase state machine directly, without any I/O, so each
strategy's path can be checked in isolation.
"""

import pytest

from lean_repo.config import CacheStrategy
from lean_repo.sync.state import SyncPhase, next_phase


def walk(strategy, cache_hit=False):
    """Follow transitions from NOT_STARTED until TERMINATED."""
    phase = SyncPhase.NOT_STARTED
    path = []
    while phase is not SyncPhase.TERMINATED:
        phase = next_phase(phase, strategy, cache_hit)
        path.append(phase)
    return path


class TestTransitions:
    """Single-step transitions."""

    @pytest.mark.parametrize("strategy", [
        CacheStrategy.STALE_WHILE_REVALIDATE,
        CacheStrategy.CACHE_FIRST,
        CacheStrategy.CACHE_ONLY,
    ])
    def test_start_goes_to_cache(self, strategy):
        assert next_phase(SyncPhase.NOT_STARTED, strategy) is SyncPhase.CACHE

    def test_network_only_skips_cache(self):
        assert next_phase(SyncPhase.NOT_STARTED, CacheStrategy.NETWORK_ONLY) is SyncPhase.NETWORK

    def test_network_always_terminates(self):
        for strategy in CacheStrategy:
            assert next_phase(SyncPhase.NETWORK, strategy) is SyncPhase.TERMINATED

    def test_terminated_has_no_successor(self):
        with pytest.raises(ValueError):
            next_phase(SyncPhase.TERMINATED, CacheStrategy.STALE_WHILE_REVALIDATE)


class TestStrategyPaths:
    """Whole paths per strategy and cache outcome."""

    @pytest.mark.parametrize("cache_hit", [True, False])
    def test_stale_while_revalidate(self, cache_hit):
        assert walk(CacheStrategy.STALE_WHILE_REVALIDATE, cache_hit) == [
            SyncPhase.CACHE, SyncPhase.NETWORK, SyncPhase.TERMINATED,
        ]

    def test_cache_first_hit(self):
        assert walk(CacheStrategy.CACHE_FIRST, cache_hit=True) == [
            SyncPhase.CACHE, SyncPhase.TERMINATED,
        ]

    def test_cache_first_miss(self):
        assert walk(CacheStrategy.CACHE_FIRST, cache_hit=False) == [
            SyncPhase.CACHE, SyncPhase.NETWORK, SyncPhase.TERMINATED,
        ]

    @pytest.mark.parametrize("cache_hit", [True, False])
    def test_cache_only(self, cache_hit):
        assert walk(CacheStrategy.CACHE_ONLY, cache_hit) == [
            SyncPhase.CACHE, SyncPhase.TERMINATED,
        ]

    def test_network_only(self):
        assert walk(CacheStrategy.NETWORK_ONLY) == [SyncPhase.NETWORK, SyncPhase.TERMINATED]
