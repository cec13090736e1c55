"""
litvn.storage
-------------
Persistent, versioned, expiring cache on a local SQLite file.

Each row holds an orjson envelope:

    {"version": "1.0.1", "expires": <epoch ms>, "created": <epoch ms>, "data": ...}

An entry that cannot be decoded, has expired, or was written by another
cache version is purged and reported as a miss. Nothing here ever makes a
lookup fail: the in-memory result is always recomputable.

Location search order:
  1) LITVN_CACHE_DIR
  2) $XDG_CACHE_HOME/litvn
  3) ~/.cache/litvn
"""

from __future__ import annotations

import logging
import os
import sqlite3
import threading
import time
from contextlib import closing
from pathlib import Path
from typing import Any, Dict, Optional

import orjson

from .core.errors import CacheError

logger = logging.getLogger(__name__)

CACHE_DIR_ENV = "LITVN_CACHE_DIR"
CACHE_FILENAME = "cache.db"
DEFAULT_VERSION = "1.0.1"
DEFAULT_TTL_HOURS = 24


def default_cache_dir() -> Path:
    p = os.environ.get(CACHE_DIR_ENV, "").strip()
    if p:
        return Path(p).expanduser()
    xdg = os.environ.get("XDG_CACHE_HOME", "").strip()
    base = Path(xdg).expanduser() if xdg else (Path.home() / ".cache")
    return base / "litvn"


def _now_ms() -> int:
    return int(time.time() * 1000)


class PersistentCache:
    """Key -> JSON-able value store shared across processes."""

    def __init__(
        self,
        path: Optional[Path] = None,
        *,
        version: str = DEFAULT_VERSION,
        ttl_hours: float = DEFAULT_TTL_HOURS,
    ):
        self.path = Path(path) if path is not None else default_cache_dir() / CACHE_FILENAME
        self.version = version
        self.ttl_ms = int(ttl_hours * 3600 * 1000)
        self._ready = False
        self._ready_lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    # ---------------------------------------------------------
    # Connection management
    # ---------------------------------------------------------

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.path)
        conn.execute("PRAGMA synchronous=NORMAL;")
        conn.execute("PRAGMA busy_timeout=3000;")
        return conn

    def _ensure_db(self, force: bool = False) -> None:
        with self._ready_lock:
            if self._ready and not force and self.path.exists():
                return
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with closing(self._connect()) as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS cache_entries
                    (
                        key        TEXT PRIMARY KEY,
                        value      TEXT    NOT NULL,
                        expires_at INTEGER NOT NULL
                    )
                    """
                )
                conn.commit()
            self._ready = True

    def _run(self, sql: str, params: tuple = (), *, fetch: bool = False):
        """Execute one statement, retrying once after an OperationalError."""
        for attempt in range(2):
            try:
                self._ensure_db(force=attempt == 1)
                with closing(self._connect()) as conn:
                    cur = conn.execute(sql, params)
                    if fetch:
                        return cur.fetchone()
                    conn.commit()
                    return max(cur.rowcount or 0, 0)
            except (sqlite3.OperationalError, OSError) as e:
                self._ready = False
                if attempt == 0:
                    time.sleep(0.1)
                    continue
                raise CacheError(f"cache database {self.path} unavailable: {e}") from e
        return None

    # ---------------------------------------------------------
    # Public API
    # ---------------------------------------------------------

    def get(self, key: str) -> Optional[Any]:
        row = self._run("SELECT value FROM cache_entries WHERE key = ?", (key,), fetch=True)
        if row is None:
            self.misses += 1
            return None
        try:
            envelope = orjson.loads(row[0])
            version = envelope["version"]
            expires = int(envelope["expires"])
            data = envelope["data"]
        except (orjson.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning("corrupt cache entry %r purged: %s", key, e)
            return self._purge(key)
        if version != self.version:
            logger.warning("cache entry %r has version %s (want %s); purged", key, version, self.version)
            return self._purge(key)
        if expires <= _now_ms():
            logger.warning("cache entry %r expired; purged", key)
            return self._purge(key)
        self.hits += 1
        return data

    def _purge(self, key: str) -> None:
        self.delete(key)
        self.misses += 1
        return None

    def set(self, key: str, value: Any) -> None:
        now = _now_ms()
        envelope = {"version": self.version, "expires": now + self.ttl_ms, "created": now, "data": value}
        raw = orjson.dumps(envelope).decode("utf-8")
        self._run(
            """
            INSERT INTO cache_entries (key, value, expires_at)
            VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET value      = excluded.value,
                                           expires_at = excluded.expires_at
            """,
            (key, raw, (now + self.ttl_ms) // 1000),
        )

    def delete(self, key: str) -> int:
        return self._run("DELETE FROM cache_entries WHERE key = ?", (key,))

    def prune_expired(self) -> int:
        removed = self._run("DELETE FROM cache_entries WHERE expires_at <= ?", (_now_ms() // 1000,))
        if removed:
            logger.info("pruned %d expired cache entries", removed)
        return removed

    def clear(self) -> None:
        self._run("DELETE FROM cache_entries")

    def stats(self) -> Dict[str, Any]:
        row = self._run("SELECT COUNT(*) FROM cache_entries", fetch=True)
        return {
            "path": str(self.path),
            "version": self.version,
            "size": row[0] if row else 0,
            "hits": self.hits,
            "misses": self.misses,
        }
