# tests/test_tet.py

from datetime import date

from litvn.core.enums import Color, RankCode
from litvn.engines import tet
from litvn.engines.feasts import compute_year
from litvn.lunar import LunarConverter

LUNAR = LunarConverter()
F2026 = compute_year(2026, LUNAR)


def test_tet_events_2026():
    ev = tet.tet_event(date(2026, 2, 17), LUNAR)
    assert ev.lunar_day == 1
    assert ev.color is Color.RED
    assert ev.lunar.day == 1 and ev.lunar.month == 1
    assert tet.tet_event(date(2026, 2, 19), LUNAR).lunar_day == 3
    assert tet.tet_event(date(2026, 2, 20), LUNAR) is None


def test_new_year_eve():
    ev = tet.tet_event(date(2026, 2, 16), LUNAR)
    assert ev.is_eve
    assert ev.rank_code is RankCode.KINH
    assert ev.reading_code is None


def test_reading_codes():
    assert tet.tet_reading_code(date(2026, 2, 18), LUNAR) == "70002"
    assert tet.tet_reading_code(date(2026, 2, 16), LUNAR) is None


def test_conflict_in_ordinary_time_keeps_event_rank():
    ev = tet.tet_event(date(2026, 2, 17), LUNAR)
    res = tet.resolve_tet_conflict(ev, date(2026, 2, 17), F2026)
    assert res.celebrate
    assert res.rank == 3


def test_conflict_in_lent_is_demoted():
    ev = tet.tet_event(date(2026, 2, 18), LUNAR)
    res = tet.resolve_tet_conflict(ev, date(2026, 2, 18), F2026)
    assert res.celebrate
    assert res.rank == 6
    assert res.note == tet.NOTE_LENT


def test_conflict_on_ordinary_sunday():
    f = compute_year(2024, LUNAR)
    ev = tet.tet_event(date(2024, 2, 11), LUNAR)
    res = tet.resolve_tet_conflict(ev, date(2024, 2, 11), f)
    assert res.celebrate
    assert res.note == tet.NOTE_ORDINARY_SUNDAY


def test_holy_week_is_never_replaced():
    ev = tet.TET_CELEBRATIONS[1]
    res = tet.resolve_tet_conflict(ev, date(2026, 4, 1), F2026)
    assert not res.celebrate
    assert res.note == tet.NOTE_HOLY_WEEK
