"""Shared pytest fixtures for lean_repo tests.

Provides drivers, engines, a small serializable model and scripted
fetch/driver helpers for exercising the sync engine without a network.
"""

import json
from dataclasses import dataclass

import pytest

from lean_repo.config import EngineConfig, FileDriverConfig
from lean_repo.drivers.base import DriverError
from lean_repo.drivers.file import FileDriver
from lean_repo.drivers.memory import InMemoryDriver
from lean_repo.sync.engine import SyncEngine


@dataclass(frozen=True)
class User:
    """Minimal model with a dict round-trip."""
    id: str
    name: str

    @classmethod
    def from_dict(cls, data):
        return cls(id=data["id"], name=data["name"])

    def to_dict(self):
        return {"id": self.id, "name": self.name}


class CountingFetch:
    """Async fetch stand-in that returns a value (or raises) and counts calls."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result


class FaultyDriver(InMemoryDriver):
    """In-memory driver whose reads and/or writes can be made to fail."""

    def __init__(self, fail_read=False, fail_write=False):
        super().__init__()
        self.fail_read = fail_read
        self.fail_write = fail_write
        self.reads = 0
        self.writes = 0

    async def read(self, key):
        self.reads += 1
        if self.fail_read:
            raise DriverError("disk on fire")
        return await super().read(key)

    async def write(self, key, value, ttl=None):
        self.writes += 1
        if self.fail_write:
            raise DriverError("disk full")
        await super().write(key, value, ttl=ttl)


def encode(user: User) -> str:
    """Stored form of a user, as the engine would write it."""
    return json.dumps(user.to_dict())


async def collect(aiter):
    return [item async for item in aiter]


@pytest.fixture
def driver():
    return InMemoryDriver()


@pytest.fixture
def engine(driver):
    return SyncEngine(driver)


@pytest.fixture
def file_driver(tmp_path):
    return FileDriver(FileDriverConfig(root=tmp_path / "cache"))


@pytest.fixture
def old_user():
    return User("1", "Old Name")


@pytest.fixture
def fresh_user():
    return User("1", "Fresh Name")


@pytest.fixture
def sample_engine_config():
    return EngineConfig(default_ttl=60.0, log_level="DEBUG")


@pytest.fixture
def sync_user(engine):
    """Run synchronize() for User values and collect the emissions."""

    async def run(key, fetch, strategy=None, target=None, **kwargs):
        target = target or engine
        return await collect(target.synchronize(
            key=key,
            fetch=fetch,
            deserialize=User.from_dict,
            serialize=User.to_dict,
            strategy=strategy,
            **kwargs,
        ))

    return run
