#!/usr/bin/env python3
"""Cache strategy comparison for lean_repo.

Runs every CacheStrategy against a warm cache and a cold cache and prints
what each one emits, and whether the network was called. A third pass
shows a failing network behind a warm cache.

Run this example:
    python strategies_example.py
"""

import asyncio
import json

from lean_repo import CacheStrategy, InMemoryDriver, SyncEngine


class Counter:
    def __init__(self, value=None, error=None):
        self.value = value
        self.error = error
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        await asyncio.sleep(0.05)
        if self.error:
            raise self.error
        return self.value


def label(resource):
    if resource.is_loading:
        return "loading"
    if resource.is_error:
        return f"error({resource.error})"
    return f"{resource.source.value}:{resource.data['balance']}"


async def run(strategy, warm, fetch):
    driver = InMemoryDriver()
    if warm:
        await driver.write("wallet", json.dumps({"balance": 10}))

    engine = SyncEngine(driver)
    emitted = [
        label(r) async for r in engine.synchronize(
            "wallet", fetch, deserialize=dict, serialize=dict, strategy=strategy,
        )
    ]
    return emitted


async def main():
    for warm in (True, False):
        print(f"\n--- {'warm' if warm else 'cold'} cache ---")
        for strategy in CacheStrategy:
            fetch = Counter(value={"balance": 42})
            emitted = await run(strategy, warm, fetch)
            print(f"  {strategy.value:<24} fetch calls={fetch.calls}  {emitted}")

    print("\n--- warm cache, network down ---")
    for strategy in CacheStrategy:
        fetch = Counter(error=ConnectionError("offline"))
        emitted = await run(strategy, True, fetch)
        print(f"  {strategy.value:<24} {emitted}")


if __name__ == "__main__":
    asyncio.run(main())
