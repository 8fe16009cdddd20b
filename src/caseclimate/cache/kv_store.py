"""SQLite-backed persistent key-value cache.

Stores raw successful lookup documents (geocoding, country metadata,
historical weather) keyed by their request key. Entries outlive the process
so a re-run never repeats a lookup that already succeeded.
"""

import json
import sqlite3
import logging
import threading
from pathlib import Path
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from caseclimate.contracts.failure import CacheUnavailable

logger = logging.getLogger(__name__)


class SQLiteKeyValueCache:
    """Persistent key -> JSON document store.

    **Semantics:**

    - ``get(key)`` returns the stored document or None when the key is absent
    - ``set(key, value)`` upserts the JSON-encoded document
    - No implicit expiry. The cached domain (historical weather, country
      capitals, city coordinates) does not change after the fact.

    **Database Schema:**

    SQLite table `lookup_cache`:

    - key: Request key (primary key, credential-free request URI)
    - value: JSON-encoded response body
    - created_at / updated_at: ISO timestamps

    **Failure Mode:**

    Any sqlite3 error is raised as ``CacheUnavailable`` so callers can tell
    "store unreachable" from "key absent". A stored value that is not valid
    JSON is logged and reported as absent.

    **Thread Safety:**

    All methods are serialized via an internal lock, which gives per-key
    get/set atomicity. There are no cross-key transactions.

    Example usage::

        with SQLiteKeyValueCache("output/cache/lookup_cache.db") as cache:
            doc = cache.get(key)
            if doc is None:
                doc = fetch_remote()
                cache.set(key, doc)
    """

    def __init__(self, db_path: Path | str):
        """Initialize cache.

        Parameters
        ----------
        db_path : Path or str
            Path to SQLite database file. Created if it doesn't exist.

        Raises
        ------
        CacheUnavailable
            If the database cannot be opened or its schema created.
        """
        self.db_path = Path(db_path)
        self._conn = None
        self._lock = threading.Lock()

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._init_database()
        except (OSError, sqlite3.Error) as e:
            raise CacheUnavailable(f"Cannot open cache {self.db_path}: {e}") from e
        logger.info("Lookup cache initialized: %s", self.db_path)

    def _get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
        return self._conn

    def _init_database(self):
        """Create database schema if it doesn't exist."""
        conn = self._get_connection()

        with self._lock:
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("""
                CREATE TABLE IF NOT EXISTS lookup_cache (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    created_at TEXT DEFAULT CURRENT_TIMESTAMP,
                    updated_at TEXT DEFAULT CURRENT_TIMESTAMP
                )
            """)
            conn.commit()

    def get(self, key: str) -> Optional[Any]:
        """Return the cached document for ``key``, or None if absent.

        Raises
        ------
        CacheUnavailable
            If the store cannot be queried.
        """
        try:
            with self._lock:
                cursor = self._get_connection().execute(
                    "SELECT value FROM lookup_cache WHERE key = ?", (key,)
                )
                row = cursor.fetchone()
        except sqlite3.Error as e:
            raise CacheUnavailable(f"Cache read failed for {key}: {e}") from e

        if row is None:
            return None

        try:
            return json.loads(row[0])
        except json.JSONDecodeError:
            logger.warning("Corrupt cache entry, ignoring: %s", key)
            return None

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key`` (upsert).

        Raises
        ------
        CacheUnavailable
            If the store cannot be written.
        TypeError
            If ``value`` is not JSON-serialisable.
        """
        payload = json.dumps(value)
        now = datetime.now(timezone.utc).isoformat()
        try:
            with self._lock:
                conn = self._get_connection()
                conn.execute("""
                    INSERT INTO lookup_cache (key, value, created_at, updated_at)
                    VALUES (?, ?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                """, (key, payload, now, now))
                conn.commit()
        except sqlite3.Error as e:
            raise CacheUnavailable(f"Cache write failed for {key}: {e}") from e

        logger.debug("Cached: %s", key)

    def contains(self, key: str) -> bool:
        return self.get(key) is not None

    def count(self, prefix: Optional[str] = None) -> int:
        """Number of entries, optionally restricted to keys starting with ``prefix``."""
        query = "SELECT COUNT(*) FROM lookup_cache"
        params = ()
        if prefix:
            query += " WHERE key LIKE ? ESCAPE '\\'"
            escaped = prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            params = (escaped + "%",)
        try:
            with self._lock:
                return self._get_connection().execute(query, params).fetchone()[0]
        except sqlite3.Error as e:
            raise CacheUnavailable(f"Cache count failed: {e}") from e

    def get_statistics(self) -> Dict:
        """Summary of cache contents.

        Returns
        -------
        dict
            - `entries`: Total cached documents
            - `oldest` / `newest`: creation timestamps (ISO) or None
        """
        try:
            with self._lock:
                row = self._get_connection().execute("""
                    SELECT COUNT(*), MIN(created_at), MAX(created_at) FROM lookup_cache
                """).fetchone()
        except sqlite3.Error as e:
            raise CacheUnavailable(f"Cache statistics failed: {e}") from e
        return {"entries": row[0], "oldest": row[1], "newest": row[2]}

    def close(self):
        """Close database connection. Safe to call multiple times."""
        if self._conn:
            self._conn.close()
            self._conn = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
