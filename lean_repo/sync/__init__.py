"""Synchronization module for lean_repo.

Philosophy: SHOW WHAT YOU HAVE, THEN WHAT IS TRUE.

This module provides:
- SyncEngine: Strategy-driven cache/network synchronization
- SyncPhase, next_phase: The per-call phase state machine

Read order: cache first (fast), network second (fresh).
Write order: fetched data is persisted before it is emitted (best effort).
"""

from lean_repo.sync.engine import SyncEngine, SyncStats
from lean_repo.sync.state import SyncPhase, next_phase

__all__ = [
    "SyncEngine",
    "SyncStats",
    "SyncPhase",
    "next_phase",
]
