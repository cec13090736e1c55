"""
litvn.engines.daycode
---------------------
Day codes are the keys external reading tables are indexed by.

Regular days get `S WW D` (season digit, two-digit week, weekday with
Sunday = 0). A fixed set of days carries reserved literals instead: the
Epiphany block (6000..6006), Baptism (5010), Ascension (4080), the Pentecost
vigil (4089), the feasts after Pentecost (5410..5441), the Ash Wednesday
block (3004..3007), Christmastide and the last Advent weekdays (2DDMM), and
Tết (70001..70003).

The classifier is an ordered table of (name, predicate, producer) rules;
the first rule whose predicate holds produces the code.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional, Tuple

from ..core.enums import Season, SpecialDayType
from ..core.time import add_days, dow, sunday_on_or_after, sunday_on_or_before, to_roman, weeks_between
from ..core.types import MovableFeastSet, VigilInfo
from .interfaces import LunarSource

DAYS_FULL_VI = ("Chúa Nhật", "Thứ Hai", "Thứ Ba", "Thứ Tư", "Thứ Năm", "Thứ Sáu", "Thứ Bảy")

WEEK_SEASON_NAMES = {
    Season.ADVENT: "Mùa Vọng",
    Season.CHRISTMAS: "Mùa Giáng Sinh",
    Season.LENT: "Mùa Chay",
    Season.EASTER: "Mùa Phục Sinh",
    Season.ORDINARY: "Thường Niên",
}

# Week labels of the days that carry a reserved code.
FIXED_CODE_LABELS = {
    "4080": "Lễ Chúa Lên Trời",
    "4089": "Vọng Hiện Xuống",
    "5410": "Lễ Hiện Xuống",
    "5420": "Lễ Chúa Ba Ngôi",
    "5430": "Lễ Mình Máu Thánh Chúa",
    "5440": "Lễ Thánh Tâm Chúa Giêsu",
    "5441": "Trái Tim Vô Nhiễm Mẹ",
}


def _ddmm(d: date) -> str:
    return f"{d.day:02d}{d.month:02d}"

def _swwd(season: int, week: int, d: date) -> str:
    return f"{season}{week:02d}{dow(d)}"


# ---------------------------------------------------------------------------
# Seasons and special periods
# ---------------------------------------------------------------------------

def season_of(d: date, f: MovableFeastSet) -> Season:
    """Liturgical season of `d`; Christmastide runs through the Baptism of the Lord."""
    if f.advent_start <= d < f.christmas:
        return Season.ADVENT
    if d >= f.christmas or d <= f.baptism_lord:
        return Season.CHRISTMAS
    if f.ash_wednesday <= d < f.easter:
        return Season.LENT
    if f.easter <= d <= f.pentecost:
        return Season.EASTER
    return Season.ORDINARY

def special_day_type(d: date, f: MovableFeastSet) -> SpecialDayType:
    if f.holy_thursday <= d <= f.easter:
        return SpecialDayType.TRIDUUM
    if f.palm_sunday <= d < f.holy_thursday:
        return SpecialDayType.HOLY_WEEK
    if f.ash_wednesday <= d < f.palm_sunday:
        return SpecialDayType.LENT
    if f.easter < d <= add_days(f.easter, 7):
        return SpecialDayType.EASTER_OCTAVE
    if f.advent_start <= d <= date(f.year, 12, 24):
        return SpecialDayType.ADVENT
    if (d.month == 12 and d.day >= 25) or (d.month == 1 and d.day == 1):
        return SpecialDayType.CHRISTMAS_OCTAVE
    return SpecialDayType.ORDINARY

def is_late_advent_weekday(d: date, f: MovableFeastSet) -> bool:
    """Dec 17-24 outside Sundays."""
    return f.advent_start <= d < f.christmas and d.month == 12 and 17 <= d.day <= 24 and dow(d) != 0

def season_week(d: date, f: MovableFeastSet) -> Tuple[Season, int]:
    """Season digit and week number of the regular S WW D code for `d`."""
    sun = sunday_on_or_before(d)
    if f.advent_start <= d < f.christmas:
        return Season.ADVENT, weeks_between(sunday_on_or_before(f.advent_start), sun) + 1
    if d >= f.christmas or d < f.baptism_lord:
        return Season.CHRISTMAS, 0
    if f.ash_wednesday <= d < f.easter:
        first_sunday = add_days(f.ash_wednesday, 4)
        if d < first_sunday:
            return Season.LENT, 0
        return Season.LENT, weeks_between(first_sunday, sun) + 1
    if f.easter <= d <= f.pentecost:
        return Season.EASTER, weeks_between(f.easter, sun) + 1
    if d > f.pentecost:
        return Season.ORDINARY, 34 - round((sunday_on_or_before(f.christ_king) - sun).days / 7)
    return Season.ORDINARY, weeks_between(sunday_on_or_before(f.baptism_lord), sun) + 1


# ---------------------------------------------------------------------------
# Rule table
# ---------------------------------------------------------------------------

Predicate = Callable[[date, MovableFeastSet, Optional[LunarSource]], bool]
Producer = Callable[[date, MovableFeastSet, Optional[LunarSource]], str]


@dataclass(frozen=True)
class DayCodeRule:
    name: str
    applies: Predicate
    code: Producer


def _fixed(attr: str, code: str) -> DayCodeRule:
    return DayCodeRule(attr, lambda d, f, _l: d == getattr(f, attr), lambda d, f, _l: code)

def _is_tet(d: date, f: MovableFeastSet, lunar: Optional[LunarSource]) -> bool:
    return lunar is not None and lunar.is_tet_day(d) > 0

def _tet_code(d: date, f: MovableFeastSet, lunar: Optional[LunarSource]) -> str:
    return f"7000{lunar.is_tet_day(d)}"

def _after_epiphany(d: date, f: MovableFeastSet, _l) -> bool:
    return f.epiphany < d < f.baptism_lord and 1 <= (d - f.epiphany).days <= 6

def _in_ash_block(d: date, f: MovableFeastSet, _l) -> bool:
    if f.ash_wednesday_transferred:
        return d == f.ash_wednesday_celebration or f.ash_wednesday < d <= add_days(f.ash_wednesday, 3)
    return f.ash_wednesday <= d <= add_days(f.ash_wednesday, 3)

def _ash_code(d: date, f: MovableFeastSet, _l) -> str:
    if f.ash_wednesday_transferred and d == f.ash_wednesday_celebration:
        return "3004"
    return f"300{4 + (d - f.ash_wednesday).days}"

def _in_advent(d: date, f: MovableFeastSet, _l) -> bool:
    return f.advent_start <= d < f.christmas

def _advent_code(d: date, f: MovableFeastSet, _l) -> str:
    if is_late_advent_weekday(d, f):
        return f"2{_ddmm(d)}"
    _season, week = season_week(d, f)
    return _swwd(Season.ADVENT, week, d)

def _in_christmastide(d: date, f: MovableFeastSet, _l) -> bool:
    return d >= f.christmas or d < f.baptism_lord

def _regular_code(d: date, f: MovableFeastSet, _l) -> str:
    season, week = season_week(d, f)
    return _swwd(season, week, d)


DAY_CODE_RULES: Tuple[DayCodeRule, ...] = (
    DayCodeRule("tet", _is_tet, _tet_code),
    _fixed("epiphany", "6000"),
    _fixed("baptism_lord", "5010"),
    DayCodeRule("after_epiphany", _after_epiphany, lambda d, f, _l: f"600{(d - f.epiphany).days}"),
    _fixed("ascension", "4080"),
    DayCodeRule("pentecost_vigil", lambda d, f, _l: d == add_days(f.pentecost, -1), lambda d, f, _l: "4089"),
    _fixed("pentecost", "5410"),
    _fixed("trinity", "5420"),
    _fixed("corpus_christi", "5430"),
    _fixed("sacred_heart", "5440"),
    _fixed("immaculate_heart", "5441"),
    DayCodeRule("ash_wednesday", _in_ash_block, _ash_code),
    DayCodeRule("advent", _in_advent, _advent_code),
    DayCodeRule("christmastide", _in_christmastide, lambda d, f, _l: f"2{_ddmm(d)}"),
    DayCodeRule("lent", lambda d, f, _l: f.ash_wednesday <= d < f.easter, _regular_code),
    DayCodeRule("easter", lambda d, f, _l: f.easter <= d <= f.pentecost, _regular_code),
    DayCodeRule("ordinary", lambda d, f, _l: True, _regular_code),
)


def classify(
    d: date,
    f: MovableFeastSet,
    lunar: Optional[LunarSource] = None,
    *,
    rules: Tuple[DayCodeRule, ...] = DAY_CODE_RULES,
) -> Tuple[str, str]:
    """(rule name, code) of the first matching rule."""
    for rule in rules:
        if rule.applies(d, f, lunar):
            return rule.name, rule.code(d, f, lunar)
    raise RuntimeError("unreachable: the ordinary rule always applies")

def day_code(d: date, f: MovableFeastSet, lunar: Optional[LunarSource] = None) -> str:
    return classify(d, f, lunar)[1]

def temporal_day_code(d: date, f: MovableFeastSet) -> str:
    """Day code without the Tết rule."""
    return classify(d, f, None)[1]

def sanctoral_day_code(d: date) -> str:
    return f"7{_ddmm(d)}"

def special_feast_code(d: date) -> str:
    """Code of the optional-saint readings for a date."""
    return f"8{_ddmm(d)}"


# ---------------------------------------------------------------------------
# Cycles and labels
# ---------------------------------------------------------------------------

def sunday_cycle(d: date, f: MovableFeastSet) -> str:
    year = d.year + 1 if d >= f.advent_start else d.year
    return {1: "A", 2: "B", 0: "C"}[year % 3]

def weekday_cycle(year: int) -> str:
    return "1" if year % 2 else "2"

def sunday_number_of_year(d: date) -> int:
    """1-based count of Sundays in the civil year up to `d`; 0 before the first one."""
    first = sunday_on_or_after(date(d.year, 1, 1))
    if d < first:
        return 0
    return weeks_between(first, d) + 1

def week_label(d: date, f: MovableFeastSet) -> str:
    if d.month == 12 and 17 <= d.day <= 24:
        return "Tuần Chuẩn Bị Giáng Sinh"
    if (d.month == 12 and d.day >= 25) or (d.month == 1 and d.day == 1):
        return "Tuần Bát Nhật Giáng Sinh"
    if d == f.epiphany:
        return "Lễ Hiển Linh"
    if d == f.baptism_lord:
        return "Lễ Chúa Giêsu Chịu Phép Rửa"
    if f.epiphany < d < f.baptism_lord:
        return "sau lễ Hiển Linh"

    code = temporal_day_code(d, f)
    if code in FIXED_CODE_LABELS:
        return FIXED_CODE_LABELS[code]

    season, week = season_week(d, f)
    if season is Season.CHRISTMAS:
        return "Mùa Giáng Sinh"
    if season is Season.LENT and week == 0:
        return "Sau Lễ Tro"
    if season is Season.LENT and week == 6:
        return "Tuần Thánh"
    if season is Season.EASTER and week == 1:
        return "Tuần Bát Nhật Phục Sinh"
    return f"Tuần {to_roman(week)} {WEEK_SEASON_NAMES[season]}"


# ---------------------------------------------------------------------------
# Vigils
# ---------------------------------------------------------------------------

def vigil_info(d: date, f: MovableFeastSet) -> Optional[VigilInfo]:
    """Vigil Mass attached to a principal feast, reported on the feast day itself."""
    if d.month == 12 and d.day == 25:
        return VigilInfo("22412", "22512", "Lễ Vọng Giáng Sinh", add_days(d, -1), d)
    if d == f.pentecost:
        return VigilInfo("4089", "5410", "Vọng Hiện Xuống", add_days(d, -1), d)
    if d == f.easter:
        return VigilInfo("4076", "4001", "Canh Thức Vượt Qua (Lễ Vọng Phục Sinh)", add_days(d, -1), d)
    if d.month == 11 and d.day == 1:
        return VigilInfo("73110", "70111", "Lễ Vọng Các Thánh", add_days(d, -1), d)
    return None
