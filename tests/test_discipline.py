# tests/test_discipline.py

from datetime import date

import pytest

from litvn.core.enums import DisciplineType as T
from litvn.engines import discipline as disc
from litvn.engines.feasts import compute_year
from litvn.lunar import LunarConverter

F2026 = compute_year(2026, LunarConverter())


def types(d):
    return [x.type for x in disc.liturgical_discipline(d, F2026)]


@pytest.mark.parametrize(
    "d, expected",
    [
        (date(2026, 2, 18), []),                          # Ash Wednesday moved away
        (date(2026, 2, 20), [T.FAST, T.ABSTINENCE]),      # celebrated Ash Wednesday, a Friday
        (date(2026, 3, 6), [T.ABSTINENCE]),               # Friday of Lent
        (date(2026, 4, 3), [T.FAST, T.ABSTINENCE, T.SPECIAL]),
        (date(2026, 4, 5), [T.OBLIGATION, T.SPECIAL]),
        (date(2026, 5, 14), [T.OBLIGATION]),              # Ascension
        (date(2026, 8, 15), [T.OBLIGATION]),
        (date(2026, 8, 14), []),
    ],
)
def test_discipline(d, expected):
    assert types(d) == expected


def test_notes():
    ash = disc.liturgical_discipline(date(2026, 2, 20), F2026)
    assert all(x.note == disc.NOTE_ASH for x in ash)
    fri = disc.liturgical_discipline(date(2026, 3, 6), F2026)
    assert fri[0].note == disc.NOTE_LENT_FRIDAY


def test_holy_days():
    assert disc.is_holy_day(date(2026, 12, 25), F2026)
    assert disc.is_holy_day(date(2026, 11, 1), F2026)
    assert not disc.is_holy_day(date(2026, 12, 8), F2026)
