from __future__ import annotations
from datetime import date, timedelta
from typing import Tuple

# First JDN of the Gregorian reform (1582-10-15); earlier days use the Julian calendar.
GREGORIAN_REFORM_JDN = 2299161

ROMAN_NUMERALS = (
    (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"),
    (100, "C"), (90, "XC"), (50, "L"), (40, "XL"),
    (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
)


def jdn_from_ymd(y: int, m: int, d: int) -> int:
    """Julian Day Number of a civil date, Julian calendar before the 1582 reform."""
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    jdn = d + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045
    if jdn < GREGORIAN_REFORM_JDN:
        jdn = d + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - 32083
    return jdn

def ymd_from_jdn(jdn: int) -> Tuple[int, int, int]:
    """Inverse of jdn_from_ymd (Fliegel-Van Flandern with the Julian branch)."""
    if jdn >= GREGORIAN_REFORM_JDN:
        a = jdn + 32044
        b = (4 * a + 3) // 146097
        c = a - (146097 * b) // 4
    else:
        b = 0
        c = jdn + 32082
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return year, month, day

def to_jdn(d: date) -> int:
    """Convert a civil date to Julian Day Number (JDN)."""
    return jdn_from_ymd(d.year, d.month, d.day)

def from_jdn(jdn: int) -> date:
    """Gregorian date for a JDN. Only meaningful from the 1582 reform onward."""
    y, m, d = ymd_from_jdn(jdn)
    return date(y, m, d)

# ---------------------------------------------------------------------------
# Day arithmetic (weekday convention: Sunday = 0 .. Saturday = 6)
# ---------------------------------------------------------------------------

def add_days(d: date, n: int) -> date:
    return d + timedelta(days=n)

def dow(d: date) -> int:
    """Weekday with Sunday = 0, the convention used in day codes."""
    return (d.weekday() + 1) % 7

def is_sunday(d: date) -> bool:
    return d.weekday() == 6

def sunday_on_or_before(d: date) -> date:
    return d - timedelta(days=dow(d))

def sunday_on_or_after(d: date) -> date:
    return d + timedelta(days=(7 - dow(d)) % 7)

def weeks_between(start: date, end: date) -> int:
    """Whole weeks from start to end (floor division, may be negative)."""
    return (end - start).days // 7

def in_range(d: date, start: date, end: date) -> bool:
    """Inclusive range check."""
    return start <= d <= end

def to_roman(num: int) -> str:
    out = []
    for value, letters in ROMAN_NUMERALS:
        q, num = divmod(num, value)
        out.append(letters * q)
    return "".join(out)
