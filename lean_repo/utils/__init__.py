"""Utility modules for lean_repo.

This package provides:
- hashing: Filesystem-safe key digests
- logging: Configured logging with JSON/text output support
"""

from lean_repo.utils.hashing import hash_key
from lean_repo.utils.logging import get_logger, configure_root_logger

__all__ = [
    "hash_key",
    "get_logger",
    "configure_root_logger",
]
