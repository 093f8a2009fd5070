#!/usr/bin/env python3
"""Basic usage example for lean_repo.

This example demonstrates:
1. Creating a SyncEngine over an in-memory driver
2. A first load with a cold cache (loading -> network)
3. A second load with a warm cache (cache -> network)

Run this example:
    python basic_usage.py
"""

import asyncio
from dataclasses import dataclass

from lean_repo import CacheStrategy, InMemoryDriver, Resource, SyncEngine


@dataclass
class User:
    id: str
    name: str
    status: str

    @classmethod
    def from_dict(cls, data):
        return cls(id=data["id"], name=data["name"], status=data["status"])

    def to_dict(self):
        return {"id": self.id, "name": self.name, "status": self.status}

    def __str__(self):
        return f"{self.name} ({self.status})"


class MockApiClient:
    """Pretend remote API that answers slowly with changing data."""

    def __init__(self):
        self.call_count = 0

    async def get_user(self, user_id: str) -> User:
        await asyncio.sleep(0.5)
        self.call_count += 1
        return User(id=user_id, name=f"User {user_id}", status=f"Online (update #{self.call_count})")


def describe(resource: Resource) -> str:
    if resource.is_loading:
        return "Loading..."
    if resource.is_error:
        return f"Error: {resource.error}"
    return f"[{resource.source.name}] {resource.data}"


async def fetch_and_print(engine: SyncEngine, api: MockApiClient, key: str) -> None:
    async for resource in engine.synchronize(
        key=key,
        fetch=lambda: api.get_user("123"),
        deserialize=User.from_dict,
        serialize=User.to_dict,
        strategy=CacheStrategy.STALE_WHILE_REVALIDATE,
    ):
        print(f"    {describe(resource)}")


async def main():
    engine = SyncEngine(InMemoryDriver())
    api = MockApiClient()

    print("=" * 60)
    print("lean_repo - Basic Usage Example")
    print("=" * 60)

    print("\n[1] First load (cold cache)")
    print("    Expect: loading -> network data")
    await fetch_and_print(engine, api, "user_123")

    print("\n[2] Second load (stale-while-revalidate)")
    print("    Expect: cached data (immediate) -> network data (delayed)")
    await fetch_and_print(engine, api, "user_123")


if __name__ == "__main__":
    asyncio.run(main())
