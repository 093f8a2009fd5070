#!/usr/bin/env python3
"""File-backed cache example for lean_repo.

This example demonstrates:
1. Persisting fetched data with FileDriver so it survives a restart
2. TTL expiry turning a warm cache cold again
3. JSON log output carrying per-call sync stats

Run this example:
    python file_cache_example.py
"""

import asyncio
import tempfile
from pathlib import Path

from lean_repo import CacheStrategy, EngineConfig, FileDriverConfig, create_engine


async def fetch_forecast():
    await asyncio.sleep(0.1)
    return {"city": "Haifa", "temp_c": 24}


async def show(engine, strategy=CacheStrategy.CACHE_FIRST):
    async for resource in engine.synchronize(
        "forecast:haifa",
        fetch_forecast,
        deserialize=dict,
        serialize=dict,
        strategy=strategy,
    ):
        state = "loading" if resource.is_loading else resource.source.value
        print(f"    {state:<8} {resource.data}")


async def main():
    with tempfile.TemporaryDirectory() as temp_dir:
        root = Path(temp_dir) / "cache"
        config = EngineConfig(json_logs=True, log_level="INFO")

        print("\n[1] First process: cold cache, fetch and persist")
        engine = create_engine(
            "file",
            engine_config=config,
            configure_logging=True,
            config=FileDriverConfig(root=root, default_ttl=1.0),
        )
        await show(engine)

        print("\n[2] 'Restarted' process: same directory, served from disk")
        engine = create_engine("file", engine_config=config, config=FileDriverConfig(root=root, default_ttl=1.0))
        await show(engine)

        print("\n[3] After the 1s TTL: entry expired, fetched again")
        await asyncio.sleep(1.2)
        await show(engine)

        print(f"\nEntry files: {[p.name for p in root.iterdir()]}")


if __name__ == "__main__":
    asyncio.run(main())
