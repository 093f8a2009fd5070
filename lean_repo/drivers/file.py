"""File-backed cache driver.

Stores one JSON envelope per key under a root directory:

    {"key": "user_1", "value": "...", "written_at": 1700000000.0, "expires_at": null}

The file name is the hash of the key, so arbitrary key strings are safe.
The original key is kept inside the envelope for prefix clears.

Writes go to a temporary file that is then renamed over the target, so a
reader sees either the previous value or the new one, never a torn file.
Expired entries read as absent. They stay on disk until the next write or
clear for their key replaces them, so a read never deletes a concurrent write.
"""

import asyncio
import json
import os
import time
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..config import FileDriverConfig
from ..utils.hashing import hash_key
from .base import CacheDriver, DriverError


class FileDriver(CacheDriver):
    """Driver persisting entries as JSON files. Honors TTL.

    Blocking file I/O runs in a worker thread so the event loop is never
    stalled by a slow disk.

    Attributes:
        config: FileDriverConfig with root directory and default TTL
        root: Directory holding the envelope files
    """

    def __init__(self, config: Union[FileDriverConfig, str, Path]):
        """Initialize the driver, creating the root directory if needed.

        Args:
            config: FileDriverConfig, or a root directory path
        """
        super().__init__()
        if not isinstance(config, FileDriverConfig):
            config = FileDriverConfig(root=Path(config))
        self.config = config
        self.root = config.root
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        """Envelope file location for key."""
        return self.root / f"{hash_key(key, self.config.hash_algorithm)}{self.config.suffix}"

    async def read(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read_sync, key)

    async def write(self, key: str, value: str, ttl: Optional[float] = None) -> None:
        await asyncio.to_thread(self._write_sync, key, value, ttl)

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._unlink, self.path_for(key))

    async def clear(self, prefix: Optional[str] = None) -> None:
        await asyncio.to_thread(self._clear_sync, prefix)

    def _read_sync(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        envelope = self._load_envelope(path)
        if envelope is None:
            return None

        expires_at = envelope.get("expires_at")
        if expires_at is not None and expires_at <= time.time():
            self.logger.debug(f"Entry expired: {key}")
            return None

        return envelope["value"]

    def _write_sync(self, key: str, value: str, ttl: Optional[float]) -> None:
        if ttl is None:
            ttl = self.config.default_ttl

        now = time.time()
        envelope = {
            "key": key,
            "value": value,
            "written_at": now,
            "expires_at": now + ttl if ttl is not None else None,
        }

        path = self.path_for(key)
        tmp_path = path.with_name(f"{path.name}.{uuid.uuid4().hex}.tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(envelope, f)
            os.replace(tmp_path, path)
        except OSError as e:
            self._unlink(tmp_path)
            raise DriverError(f"Failed to write {key}: {e}") from e

        self.logger.debug(f"Stored {key} -> {path.name}")

    def _clear_sync(self, prefix: Optional[str]) -> None:
        removed = 0
        for path in self._entry_files():
            if prefix is not None:
                try:
                    envelope = self._load_envelope(path)
                except DriverError as e:
                    self.logger.warning(f"Skipping unreadable entry {path.name}: {e}")
                    continue
                if envelope is None:
                    continue
                stored_key = envelope.get("key")
                if not isinstance(stored_key, str) or not stored_key.startswith(prefix):
                    continue
            self._unlink(path)
            removed += 1

        self.logger.debug(f"Cleared {removed} entries (prefix={prefix!r})")

    def _entry_files(self) -> List[Path]:
        if not self.root.exists():
            return []
        return [p for p in self.root.glob(f"*{self.config.suffix}") if p.is_file()]

    def _load_envelope(self, path: Path) -> Optional[Dict[str, Any]]:
        """Load an envelope file. None if missing, DriverError if unreadable."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                envelope = json.load(f)
        except FileNotFoundError:
            return None
        except (json.JSONDecodeError, OSError) as e:
            raise DriverError(f"Failed to read {path.name}: {e}") from e

        if not isinstance(envelope, dict) or "value" not in envelope:
            raise DriverError(f"Malformed entry file: {path.name}")
        return envelope

    def _unlink(self, path: Path) -> None:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise DriverError(f"Failed to delete {path.name}: {e}") from e
