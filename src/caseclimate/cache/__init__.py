"""Lookup caching.

- kv_store: SQLite-backed persistent key-value cache
- fetcher: Cache-aside fetcher returning Success/Failure results
"""

from caseclimate.cache.kv_store import SQLiteKeyValueCache
from caseclimate.cache.fetcher import CachedFetcher, has_error_marker

__all__ = [
    "SQLiteKeyValueCache",
    "CachedFetcher",
    "has_error_marker",
]
