# tests/test_time.py

from datetime import date

import pytest

from litvn.core import time as t


@pytest.mark.parametrize(
    "ymd, jdn",
    [
        ((2000, 1, 1), 2451545),
        ((1582, 10, 15), 2299161),
        ((1582, 10, 4), 2299160),  # last Julian day
        ((1900, 1, 1), 2415021),
    ],
)
def test_jdn_known_values(ymd, jdn):
    assert t.jdn_from_ymd(*ymd) == jdn
    assert t.ymd_from_jdn(jdn) == ymd


def test_jdn_inverts_over_a_long_span():
    for jdn in range(2415021, 2488070, 97):
        assert t.jdn_from_ymd(*t.ymd_from_jdn(jdn)) == jdn


def test_dow_sunday_is_zero():
    assert t.dow(date(2026, 4, 5)) == 0  # Easter Sunday
    assert t.dow(date(2026, 4, 4)) == 6
    assert t.is_sunday(date(2026, 4, 5))


def test_sunday_helpers():
    d = date(2026, 2, 18)  # Wednesday
    assert t.sunday_on_or_before(d) == date(2026, 2, 15)
    assert t.sunday_on_or_after(d) == date(2026, 2, 22)
    assert t.sunday_on_or_after(date(2026, 2, 22)) == date(2026, 2, 22)
    assert t.weeks_between(date(2026, 2, 15), date(2026, 3, 1)) == 2


@pytest.mark.parametrize("n, roman", [(1, "I"), (4, "IV"), (9, "IX"), (14, "XIV"), (34, "XXXIV")])
def test_to_roman(n, roman):
    assert t.to_roman(n) == roman
