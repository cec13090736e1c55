# tests/test_persistent_cache.py

import sqlite3
import time
from datetime import date

import orjson
import pytest

from litvn import CalendarSpec
from litvn.core.errors import CacheError
from litvn.engines.factory import build_calendar
from litvn.storage import CACHE_DIR_ENV, CACHE_FILENAME, PersistentCache, default_cache_dir


@pytest.fixture
def store(tmp_path):
    return PersistentCache(tmp_path / "cache.db", version="t1", ttl_hours=1)


def _write_raw(path, key, value):
    conn = sqlite3.connect(path)
    try:
        conn.execute(
            "INSERT OR REPLACE INTO cache_entries (key, value, expires_at) VALUES (?, ?, ?)",
            (key, value, int(time.time()) + 3600),
        )
        conn.commit()
    finally:
        conn.close()


def test_set_get_round_trip(store):
    store.set("k", {"a": [1, 2, 3]})
    assert store.get("k") == {"a": [1, 2, 3]}
    st = store.stats()
    assert st["size"] == 1
    assert st["hits"] == 1


def test_missing_key_is_a_miss(store):
    assert store.get("absent") is None
    assert store.stats()["misses"] == 1


def test_corrupt_entry_is_purged(store):
    store.set("k", 1)
    _write_raw(store.path, "k", "{not json")
    assert store.get("k") is None
    assert store.stats()["size"] == 0


def test_envelope_without_data_is_purged(store):
    store.set("k", 1)
    _write_raw(store.path, "k", orjson.dumps({"version": "t1"}).decode())
    assert store.get("k") is None
    assert store.stats()["size"] == 0


def test_version_mismatch_is_a_miss(tmp_path):
    old = PersistentCache(tmp_path / "cache.db", version="old")
    old.set("k", 1)
    new = PersistentCache(tmp_path / "cache.db", version="new")
    assert new.get("k") is None
    assert new.stats()["size"] == 0


def test_expired_entry_is_a_miss(tmp_path):
    store = PersistentCache(tmp_path / "cache.db", ttl_hours=0)
    store.set("k", 1)
    assert store.get("k") is None
    assert store.prune_expired() == 0


def test_clear_and_delete(store):
    store.set("a", 1)
    store.set("b", 2)
    assert store.delete("a") == 1
    store.clear()
    assert store.stats()["size"] == 0


def test_unusable_location_raises_cache_error(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    store = PersistentCache(blocker / "cache.db")
    with pytest.raises(CacheError):
        store.get("k")


def test_default_dir_env(monkeypatch, tmp_path):
    monkeypatch.setenv(CACHE_DIR_ENV, str(tmp_path))
    assert default_cache_dir() == tmp_path
    monkeypatch.delenv(CACHE_DIR_ENV)
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg"))
    assert default_cache_dir() == tmp_path / "xdg" / "litvn"


def test_calendar_reuses_stored_anchors(monkeypatch, tmp_path):
    monkeypatch.setenv(CACHE_DIR_ENV, str(tmp_path))
    spec = CalendarSpec("persist", persistent_cache=True, cache_version="t")

    first = build_calendar(spec)
    f = first.get_liturgical_data(2026)
    assert (tmp_path / CACHE_FILENAME).exists()

    second = build_calendar(spec)
    assert second.get_liturgical_data(2026) == f
    assert second.cache_stats()["persistent"]["hits"] == 1
    assert second.day_info(date(2026, 2, 20)).is_transferred_ash_wednesday


class _BrokenPurgeStore(PersistentCache):
    """Returns an unreadable feast set and fails when asked to delete it."""

    def get(self, key):
        return {"year": 2026}

    def delete(self, key):
        raise CacheError("database is locked")


def test_failed_purge_of_unreadable_anchors_is_not_raised(tmp_path):
    cal = build_calendar(CalendarSpec("plain"))
    cal.store = _BrokenPurgeStore(tmp_path / "cache.db")
    f = cal.get_liturgical_data(2026)
    assert f.easter == date(2026, 4, 5)
