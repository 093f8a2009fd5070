"""Example scripts for lean_repo.

Available examples:

basic_usage.py
    Cold load, then warm stale-while-revalidate load.
    Start here to understand the emission sequence.

strategies_example.py
    Every CacheStrategy against warm, cold and offline scenarios.

file_cache_example.py
    FileDriver persistence across engine instances, TTL expiry,
    and JSON logs with per-call sync stats.

Run any example:
    python examples/basic_usage.py
    python examples/strategies_example.py
    python examples/file_cache_example.py
"""
