# tests/test_cache.py

from datetime import date

import pytest

from litvn import CalendarSpec, make_calendar
from litvn.core.cache import BoundedCache, NullCache


def test_bounded_cache_evicts_least_recently_used():
    c = BoundedCache(2)
    c.set("a", 1)
    c.set("b", 2)
    assert c.get("a") == 1  # "b" is now the oldest
    c.set("c", 3)
    assert "b" not in c
    assert "a" in c and "c" in c
    st = c.stats()
    assert st["evictions"] == 1
    assert st["size"] == 2


def test_bounded_cache_counts_hits_and_misses():
    c = BoundedCache(4)
    assert c.get("x") is None
    c.set("x", 1)
    c.get("x")
    st = c.stats()
    assert (st["hits"], st["misses"]) == (1, 1)


def test_bounded_cache_rejects_zero_capacity():
    with pytest.raises(ValueError):
        BoundedCache(0)


def test_null_cache_stores_nothing():
    c = NullCache()
    c.set("a", 1)
    assert c.get("a") is None
    assert len(c) == 0


def test_set_displayed_year_clears_only_day_cache():
    cal = make_calendar(CalendarSpec("test-cache"))
    cal.day_info(date(2026, 3, 1))
    assert cal.cache_stats()["days"]["size"] == 1
    assert cal.cache_stats()["years"]["size"] >= 1

    cal.set_displayed_year(2026)
    assert cal.cache_stats()["days"]["size"] == 0
    assert cal.cache_stats()["years"]["size"] >= 1

    cal.day_info(date(2026, 3, 1))
    cal.set_displayed_year(2026)  # same year: nothing cleared
    assert cal.cache_stats()["days"]["size"] == 1


def test_clear_cache_empties_everything():
    cal = make_calendar(CalendarSpec("test-clear"))
    cal.day_info(date(2026, 3, 1))
    cal.clear_cache()
    st = cal.cache_stats()
    assert st["days"]["size"] == 0
    assert st["years"]["size"] == 0
    assert st["lunar"]["size"] == 0


def test_day_cache_capacity_from_spec():
    cal = make_calendar(CalendarSpec("test-small", day_cache_size=3))
    for k in range(1, 6):
        cal.day_info(date(2026, 3, k))
    assert cal.cache_stats()["days"]["size"] == 3
    assert cal.cache_stats()["days"]["evictions"] == 2


def test_spec_tweak():
    spec = CalendarSpec.like("vietnam").tweak(name="vietnam-nocache", day_cache_size=1)
    assert spec.tz_offset == 7
    assert spec.day_cache_size == 1
    with pytest.raises(KeyError):
        CalendarSpec.like("missing")
