"""
litvn.lunar
-----------
Vietnamese lunisolar calendar (Ho Ngoc Duc's algorithm).

New moons come from a truncated trigonometric series for the k-th lunation
since 1900-01-01; months are numbered from the month containing the winter
solstice (month 11). A lunar year that spans 13 new moons gets a leap month:
the first lunation whose sun-longitude sector does not change.

All results are integers at civil-day resolution for a fixed time-zone offset
(hours east of UTC, +7 for Vietnam). The same algorithm with +8 gives the
Chinese calendar, which is how the famous 1985 discrepancy is reproduced.
"""

from __future__ import annotations

import logging
import math
from datetime import date, timedelta
from typing import Optional, Tuple

from .core.cache import BoundedCache, CacheProtocol
from .core.errors import InvalidLunarDateError
from .core.time import jdn_from_ymd, ymd_from_jdn
from .core.types import LunarDate, lunar_month_name

logger = logging.getLogger(__name__)

VIETNAM_TZ = 7
SYNODIC_MONTH = 29.530588853
# JD of the first new moon of 1900 (k = 0).
NEW_MOON_EPOCH = 2415021.076998695
# Upper bound on lunations scanned when looking for the leap month.
LEAP_SEARCH_BOUND = 14

_DR = math.pi / 180.0


# ---------------------------------------------------------------------------
# Astronomical primitives
# ---------------------------------------------------------------------------

def new_moon_jd(k: int) -> float:
    """Julian date of the k-th new moon since 1900-01-01 (TT, fractional)."""
    t = k / 1236.85
    t2 = t * t
    t3 = t2 * t
    jd1 = 2415020.75933 + 29.53058868 * k + 0.0001178 * t2 - 0.000000155 * t3
    jd1 = jd1 + 0.00033 * math.sin((166.56 + 132.87 * t - 0.009173 * t2) * _DR)
    m = 359.2242 + 29.10535608 * k - 0.0000333 * t2 - 0.00000347 * t3
    mpr = 306.0253 + 385.81691806 * k + 0.0107306 * t2 + 0.00001236 * t3
    f = 21.2964 + 390.67050646 * k - 0.0016528 * t2 - 0.00000239 * t3
    c1 = (0.1734 - 0.000393 * t) * math.sin(m * _DR) + 0.0021 * math.sin(2 * _DR * m)
    c1 = c1 - 0.4068 * math.sin(mpr * _DR) + 0.0161 * math.sin(_DR * 2 * mpr)
    c1 = c1 - 0.0004 * math.sin(_DR * 3 * mpr)
    c1 = c1 + 0.0104 * math.sin(_DR * 2 * f) - 0.0051 * math.sin(_DR * (m + mpr))
    c1 = c1 - 0.0074 * math.sin(_DR * (m - mpr)) + 0.0004 * math.sin(_DR * (2 * f + m))
    c1 = c1 - 0.0004 * math.sin(_DR * (2 * f - m)) - 0.0006 * math.sin(_DR * (2 * f + mpr))
    c1 = c1 + 0.0010 * math.sin(_DR * (2 * f - mpr)) + 0.0005 * math.sin(_DR * (2 * mpr + m))
    if t < -11:
        deltat = 0.001 + 0.000839 * t + 0.0002261 * t2 - 0.00000845 * t3 - 0.000000081 * t * t3
    else:
        deltat = -0.000278 + 0.000265 * t + 0.000262 * t2
    return jd1 + c1 - deltat

def new_moon_day(k: int, tz: float = VIETNAM_TZ) -> int:
    """Local civil JDN on which the k-th new moon falls."""
    return math.floor(new_moon_jd(k) + 0.5 + tz / 24.0)

def sun_longitude_sector(jdn: int, tz: float = VIETNAM_TZ) -> int:
    """Sector 0..11 (30-degree steps) of the sun's true longitude at local midnight."""
    t = (jdn - 2451545.5 - tz / 24.0) / 36525.0
    t2 = t * t
    m = 357.52910 + 35999.05030 * t - 0.0001559 * t2 - 0.00000048 * t * t2
    l0 = 280.46645 + 36000.76983 * t + 0.0003032 * t2
    dl = (1.914600 - 0.004817 * t - 0.000014 * t2) * math.sin(_DR * m)
    dl = dl + (0.019993 - 0.000101 * t) * math.sin(_DR * 2 * m) + 0.00029 * math.sin(_DR * 3 * m)
    lon = (l0 + dl) * _DR
    lon = lon - math.pi * 2 * math.floor(lon / (math.pi * 2))
    return math.floor(lon / math.pi * 6)

def lunar_month_11(year: int, tz: float = VIETNAM_TZ) -> int:
    """JDN of the start of lunar month 11 (the month containing the winter solstice)."""
    off = jdn_from_ymd(year, 12, 31) - 2415021
    k = math.floor(off / SYNODIC_MONTH)
    nm = new_moon_day(k, tz)
    if sun_longitude_sector(nm, tz) >= 9:
        nm = new_moon_day(k - 1, tz)
    return nm

def leap_month_offset(a11: int, tz: float = VIETNAM_TZ) -> Optional[int]:
    """
    Offset (in lunations after month 11) of the leap month, or None.

    None means no sector repeat was found within LEAP_SEARCH_BOUND lunations;
    callers then treat the year as having no leap month.
    """
    k = math.floor((a11 - NEW_MOON_EPOCH) / SYNODIC_MONTH + 0.5)
    i = 1
    arc = sun_longitude_sector(new_moon_day(k + i, tz), tz)
    while True:
        last = arc
        i += 1
        arc = sun_longitude_sector(new_moon_day(k + i, tz), tz)
        if arc == last:
            return i - 1
        if i >= LEAP_SEARCH_BOUND:
            logger.warning("no leap month found within %d lunations after JDN %d", LEAP_SEARCH_BOUND, a11)
            return None


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------

def solar_to_lunar(day: int, month: int, year: int, tz_offset: float = VIETNAM_TZ) -> LunarDate:
    """Gregorian (Julian before 1582-10-15) date to Vietnamese lunar date."""
    day_number = jdn_from_ymd(year, month, day)
    k = math.floor((day_number - NEW_MOON_EPOCH) / SYNODIC_MONTH)
    month_start = new_moon_day(k + 1, tz_offset)
    if month_start > day_number:
        month_start = new_moon_day(k, tz_offset)

    a11 = lunar_month_11(year, tz_offset)
    b11 = a11
    if a11 >= month_start:
        lunar_year = year
        a11 = lunar_month_11(year - 1, tz_offset)
    else:
        lunar_year = year + 1
        b11 = lunar_month_11(year + 1, tz_offset)

    lunar_day = day_number - month_start + 1
    diff = math.floor((month_start - a11) / 29)
    leap = False
    lunar_month = diff + 11
    if b11 - a11 > 365:
        leap_diff = leap_month_offset(a11, tz_offset)
        if leap_diff is not None and diff >= leap_diff:
            lunar_month = diff + 10
            leap = diff == leap_diff
    if lunar_month > 12:
        lunar_month -= 12
    if lunar_month >= 11 and diff < 4:
        lunar_year -= 1
    return LunarDate(day=lunar_day, month=lunar_month, year=lunar_year, leap=leap, jdn=day_number)

def lunar_to_solar(day: int, month: int, year: int, leap: bool = False, tz_offset: float = VIETNAM_TZ) -> date:
    """Inverse of solar_to_lunar. Raises InvalidLunarDateError for a non-existent leap month."""
    if month < 11:
        a11 = lunar_month_11(year - 1, tz_offset)
        b11 = lunar_month_11(year, tz_offset)
    else:
        a11 = lunar_month_11(year, tz_offset)
        b11 = lunar_month_11(year + 1, tz_offset)
    k = math.floor(0.5 + (a11 - NEW_MOON_EPOCH) / SYNODIC_MONTH)
    off = month - 11
    if off < 0:
        off += 12

    leap_off = leap_month_offset(a11, tz_offset) if b11 - a11 > 365 else None
    if leap_off is not None:
        leap_month = leap_off - 2
        if leap_month <= 0:
            leap_month += 12
        if leap and month != leap_month:
            raise InvalidLunarDateError(f"month {month} of lunar year {year} is not a leap month")
        if leap or off >= leap_off:
            off += 1
    elif leap:
        raise InvalidLunarDateError(f"lunar year {year} has no leap month")

    month_start = new_moon_day(k + off, tz_offset)
    y, m, d = ymd_from_jdn(month_start + day - 1)
    return date(y, m, d)

def leap_month_of(year: int, tz_offset: float = VIETNAM_TZ) -> Optional[Tuple[int, int]]:
    """
    Leap month in the solstice-to-solstice span ending in `year`, as (lunar_year, month).

    Returns None when that span has 12 lunations.
    """
    a11 = lunar_month_11(year - 1, tz_offset)
    b11 = lunar_month_11(year, tz_offset)
    if b11 - a11 <= 365:
        return None
    leap_off = leap_month_offset(a11, tz_offset)
    if leap_off is None:
        return None
    month = leap_off - 2
    if month <= 0:
        month += 12
    return (year - 1 if month >= 11 else year), month


# ---------------------------------------------------------------------------
# Cached converter
# ---------------------------------------------------------------------------

class LunarConverter:
    """Per-date cached lunar lookups for one time-zone offset."""

    def __init__(self, tz_offset: float = VIETNAM_TZ, cache: Optional[CacheProtocol] = None):
        self.tz_offset = tz_offset
        self.cache: CacheProtocol = cache if cache is not None else BoundedCache(4096, name="lunar")

    def lunar_date(self, d: date) -> LunarDate:
        key = (d.year, d.month, d.day)
        hit = self.cache.get(key)
        if hit is not None:
            return hit
        out = solar_to_lunar(d.day, d.month, d.year, self.tz_offset)
        self.cache.set(key, out)
        return out

    def is_tet_day(self, d: date) -> int:
        """1, 2 or 3 for the first three days of lunar month 1, else 0."""
        ld = self.lunar_date(d)
        if ld.month == 1 and not ld.leap and 1 <= ld.day <= 3:
            return ld.day
        return 0

    def is_new_year_eve(self, d: date) -> bool:
        ld = self.lunar_date(d)
        if ld.month != 12 or ld.leap:
            return False
        nxt = self.lunar_date(d + timedelta(days=1))
        return nxt.month == 1 and nxt.day == 1 and not nxt.leap

    def is_first_day_of_lunar_month(self, d: date) -> bool:
        return self.lunar_date(d).day == 1

    @staticmethod
    def lunar_month_name(month: int, leap: bool = False) -> str:
        return lunar_month_name(month, leap)

    def lunar_to_solar(self, day: int, month: int, year: int, leap: bool = False) -> date:
        return lunar_to_solar(day, month, year, leap, self.tz_offset)

    def tet_date(self, year: int) -> date:
        """Gregorian date of lunar 1/1 of `year`."""
        return self.lunar_to_solar(1, 1, year)

    def leap_month(self, year: int) -> Optional[Tuple[int, int]]:
        return leap_month_of(year, self.tz_offset)
