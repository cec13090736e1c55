"""
litvn.engines.precedence
------------------------
Conflict resolution between the temporal celebration of a day and the
sanctoral candidates that fall on it.

Every candidate is a Celebration ranked on the 13-level table of liturgical
days (1 = highest). Ties are broken by category (Lord, Mary, saints, other),
then by grade, then by a Vietnamese collation of the name, so the result
never depends on input order.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, Tuple, Union

from ..core.enums import Category, Color, Grade, Precedence, RankCode, Season, SpecialDayType
from ..core.time import add_days, dow, to_roman, weeks_between
from ..core.types import Celebration, Commemoration, FixedSaint, MovableFeastSet, Resolution
from .daycode import DAYS_FULL_VI, is_late_advent_weekday, season_of, special_day_type, week_label


# ---------------------------------------------------------------------------
# Temporal feasts with their own names
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TemporalFeast:
    key: str
    name: str
    rank_code: RankCode
    rank: Precedence
    color: Color = Color.WHITE
    category: Category = Category.LORD
    # The day keeps its temporal celebration; saints are listed but not weighed.
    force_temporal: bool = False


# Keyed by MovableFeastSet attribute; order matters when two anchors coincide.
TEMPORAL_FEASTS: Tuple[Tuple[str, TemporalFeast], ...] = (
    ("pentecost", TemporalFeast("PENTECOST", "CHÚA THÁNH THẦN HIỆN XUỐNG", RankCode.TRONG,
                                Precedence.HIGH_LORD_SUNDAY_SEASON, Color.RED)),
    ("ascension", TemporalFeast("ASCENSION", "CHÚA GIÊSU LÊN TRỜI", RankCode.TRONG,
                                Precedence.HIGH_LORD_SUNDAY_SEASON)),
    ("christmas", TemporalFeast("CHRISTMAS", "CHÚA GIÁNG SINH", RankCode.TRONG,
                                Precedence.HIGH_LORD_SUNDAY_SEASON)),
    ("trinity", TemporalFeast("TRINITY", "CHÚA BA NGÔI", RankCode.TRONG, Precedence.SOLEMNITY)),
    ("corpus_christi", TemporalFeast("CORPUS_CHRISTI", "MÌNH VÀ MÁU THÁNH CHÚA KITÔ", RankCode.TRONG,
                                     Precedence.SOLEMNITY)),
    ("sacred_heart", TemporalFeast("SACRED_HEART", "THÁNH TÂM CHÚA GIÊSU", RankCode.TRONG, Precedence.SOLEMNITY)),
    ("immaculate_heart", TemporalFeast("IMMACULATE_HEART", "Trái Tim Vô Nhiễm Mẹ Maria", RankCode.NHO,
                                       Precedence.MEM_OBL, category=Category.MARY)),
    ("christ_king", TemporalFeast("CHRIST_KING", "ĐỨC GIÊSU KITÔ VUA VŨ TRỤ", RankCode.TRONG, Precedence.SOLEMNITY)),
    ("vietnamese_martyrs", TemporalFeast("VN_MARTYRS", "CÁC THÁNH TỬ ĐẠO VIỆT NAM", RankCode.TRONG,
                                         Precedence.SOLEMNITY, Color.RED, Category.SAINT)),
    ("rosary_sunday", TemporalFeast("ROSARY", "ĐỨC MẸ MÂN CÔI (Kính Trọng Thể)", RankCode.TRONG,
                                    Precedence.SOLEMNITY, category=Category.MARY)),
    ("mission_sunday", TemporalFeast("MISSION", "Khánh Nhật Truyền Giáo", RankCode.CHUA_NHAT,
                                     Precedence.SUNDAY_ORD_OR_CHRISTMAS, Color.GREEN)),
    ("annunciation", TemporalFeast("ANNUNCIATION", "LỄ TRUYỀN TIN", RankCode.TRONG, Precedence.SOLEMNITY)),
    ("st_joseph", TemporalFeast("ST_JOSEPH", "THÁNH GIUSE BẠN TRĂM NĂM ĐỨC MARIA", RankCode.TRONG,
                                Precedence.SOLEMNITY, category=Category.SAINT)),
    ("imm_conception", TemporalFeast("IMM_CONCEPTION", "ĐỨC MẸ VÔ NHIỄM NGUYÊN TỘI", RankCode.TRONG,
                                     Precedence.SOLEMNITY, category=Category.MARY)),
)

MARY_MOTHER_OF_GOD = TemporalFeast("MARY_MOTHER_OF_GOD", "ĐỨC MARIA MẸ THIÊN CHÚA", RankCode.TRONG,
                                   Precedence.SOLEMNITY, category=Category.MARY)

ASH_WEDNESDAY = TemporalFeast("ASH_WEDNESDAY", "Lễ Tro", RankCode.TRONG,
                              Precedence.HIGH_LORD_SUNDAY_SEASON, Color.PURPLE)
ASH_WEDNESDAY_CELEBRATED = TemporalFeast("ASH_WEDNESDAY", "LỄ TRO (Cử hành)", RankCode.TRONG,
                                         Precedence.HIGH_LORD_SUNDAY_SEASON, Color.PURPLE)
LENT_BEGINS = TemporalFeast("LENT_BEGINS", "Bắt Đầu Mùa Chay (Lễ Tro dời)", RankCode.NGAY_THUONG,
                            Precedence.LENT_WEEKDAY, Color.PURPLE, Category.OTHER, force_temporal=True)

# Monday after an Epiphany kept on Jan 7 or 8.
BAPTISM_WEEKDAY = TemporalFeast("BAPTISM", "CHÚA GIÊSU CHỊU PHÉP RỬA", RankCode.KINH, Precedence.FEAST_LORD)

TRIDUUM_DAYS = {
    -3: ("Thứ Năm Tuần Thánh (Tiệc Ly)", Color.WHITE),
    -2: ("Thứ Sáu Tuần Thánh (Tưởng niệm Cuộc Thương Khó)", Color.RED),
    -1: ("Thứ Bảy Tuần Thánh (Canh thức Vượt Qua)", Color.WHITE),
    0: ("Đại Lễ Phục Sinh", Color.WHITE),
}

# Keys of temporal celebrations that only fill an otherwise empty day.
PLACEHOLDER_KEYS = frozenset({"BASE_WEEKDAY", "BASE_SUN_OT", "BASE_SUN_XMAS", "BASE_WEEKDAY_AFTER_EPIPHANY"})


def temporal_feast(d: date, f: MovableFeastSet) -> Optional[TemporalFeast]:
    """Named temporal feast falling on `d`, if any."""
    if f.ash_wednesday_transferred:
        if d == f.ash_wednesday:
            return LENT_BEGINS
        if d == f.ash_wednesday_celebration:
            return ASH_WEDNESDAY_CELEBRATED
    elif d == f.ash_wednesday:
        return ASH_WEDNESDAY
    if d.month == 1 and d.day == 1:
        return MARY_MOTHER_OF_GOD
    for attr, feast in TEMPORAL_FEASTS:
        if getattr(f, attr) == d:
            return feast
    return None


# ---------------------------------------------------------------------------
# Candidates
# ---------------------------------------------------------------------------

def _celebration(feast: TemporalFeast, special: Optional[str] = None) -> Celebration:
    return Celebration(
        key=feast.key,
        name=feast.name,
        category=feast.category,
        grade=Grade.from_rank_code(feast.rank_code),
        rank=feast.rank,
        color=feast.color,
        rank_code=feast.rank_code,
        special=special or feast.name,
    )

def _sunday(key: str, name: str, rank: Precedence, color: Color,
            rank_code: RankCode = RankCode.CHUA_NHAT, special: Optional[str] = None) -> Celebration:
    return Celebration(
        key=key,
        name=name,
        category=Category.LORD,
        grade=Grade.from_rank_code(rank_code),
        rank=rank,
        color=color,
        rank_code=rank_code,
        special=special or name,
    )

def _clamp(n: int, lo: int, hi: int) -> int:
    return min(max(n, lo), hi)


def sunday_celebration(d: date, f: MovableFeastSet) -> Celebration:
    season = season_of(d, f)
    if season is Season.ADVENT:
        week = _clamp(1 + weeks_between(f.advent_start, d), 1, 4)
        return _sunday("BASE_SUN_ADVENT", f"Chúa Nhật {to_roman(week)} Mùa Vọng",
                       Precedence.HIGH_LORD_SUNDAY_SEASON, Color.PURPLE)
    if season is Season.LENT:
        if d == f.palm_sunday:
            return _sunday("BASE_SUN_PALM", "Chúa Nhật Lễ Lá",
                           Precedence.HIGH_LORD_SUNDAY_SEASON, Color.RED)
        week = _clamp(1 + weeks_between(add_days(f.ash_wednesday, 4), d), 1, 5)
        return _sunday("BASE_SUN_LENT", f"Chúa Nhật {to_roman(week)} Mùa Chay",
                       Precedence.HIGH_LORD_SUNDAY_SEASON, Color.PURPLE)
    if season is Season.EASTER:
        week = _clamp(1 + weeks_between(f.easter, d), 1, 7)
        return _sunday("BASE_SUN_EASTER", f"Chúa Nhật {to_roman(week)} Mùa Phục Sinh",
                       Precedence.HIGH_LORD_SUNDAY_SEASON, Color.WHITE)
    if season is Season.CHRISTMAS:
        if d == f.epiphany:
            return _sunday("BASE_SUN_EPIPHANY", "CHÚA NHẬT LỄ HIỂN LINH",
                           Precedence.HIGH_LORD_SUNDAY_SEASON, Color.WHITE, RankCode.TRONG)
        if d == f.baptism_lord:
            return _sunday("BASE_SUN_BAPTISM", "CHÚA GIÊSU CHỊU PHÉP RỬA",
                           Precedence.FEAST_LORD, Color.WHITE, RankCode.KINH)
        return _sunday("BASE_SUN_XMAS", "Chúa Nhật Mùa Giáng Sinh",
                       Precedence.SUNDAY_ORD_OR_CHRISTMAS, Color.WHITE)
    label = week_label(d, f)
    return _sunday("BASE_SUN_OT", f"Chúa Nhật Mùa Thường Niên ({label})",
                   Precedence.SUNDAY_ORD_OR_CHRISTMAS, Color.GREEN, special=label)


def weekday_rank(d: date, f: MovableFeastSet) -> Precedence:
    kind = special_day_type(d, f)
    if kind in (SpecialDayType.HOLY_WEEK, SpecialDayType.EASTER_OCTAVE):
        return Precedence.HIGH_LORD_SUNDAY_SEASON
    season = season_of(d, f)
    if season is Season.ADVENT:
        if is_late_advent_weekday(d, f):
            return Precedence.ADVENT_17_24_WEEKDAY
        return Precedence.ADVENT_1_16_WEEKDAY
    if season is Season.CHRISTMAS:
        return Precedence.CHRISTMAS_WEEKDAY
    if season is Season.LENT:
        return Precedence.LENT_WEEKDAY
    return Precedence.OT_WEEKDAY


def base_celebration(d: date, f: MovableFeastSet) -> Celebration:
    """Temporal candidate for `d`: the named temporal feast, the Sunday, or the weekday."""
    offset = (d - f.easter).days
    if offset in TRIDUUM_DAYS:
        name, color = TRIDUUM_DAYS[offset]
        return Celebration(
            key="BASE_TRIDUUM",
            name=name,
            category=Category.LORD,
            grade=Grade.SOLEMNITY if offset == 0 else Grade.WEEKDAY,
            rank=Precedence.TRIDUUM,
            color=color,
            rank_code=RankCode.TRONG,
            special=name,
        )

    feast = temporal_feast(d, f)
    if feast is not None:
        return _celebration(feast)

    if dow(d) == 0:
        return sunday_celebration(d, f)

    if d == f.baptism_lord:
        return _celebration(BAPTISM_WEEKDAY)

    if f.epiphany < d < f.baptism_lord:
        name = f"{DAYS_FULL_VI[dow(d)]} sau lễ Hiển Linh"
        return Celebration(
            key="BASE_WEEKDAY_AFTER_EPIPHANY",
            name=name,
            category=Category.OTHER,
            grade=Grade.WEEKDAY,
            rank=Precedence.CHRISTMAS_WEEKDAY,
            color=Color.WHITE,
            rank_code=RankCode.NGAY_THUONG,
            special=name,
        )

    season = season_of(d, f)
    label = week_label(d, f)
    return Celebration(
        key="BASE_WEEKDAY",
        name=f"Ngày thường {season.display_name}" + (f" - {label}" if label else ""),
        category=Category.OTHER,
        grade=Grade.WEEKDAY,
        rank=weekday_rank(d, f),
        color=season.color,
        rank_code=RankCode.NGAY_THUONG,
        special=None,
    )


_SANCTORAL_RANK = {
    RankCode.TRONG: Precedence.SOLEMNITY,
    RankCode.KINH: Precedence.FEAST,
    RankCode.NHO: Precedence.MEM_OBL,
    RankCode.NHOKB: Precedence.MEM_OPT,
}


def sanctoral_celebration(saint: FixedSaint, key: str = "SANCTORAL") -> Celebration:
    """Candidate for a fixed saint; its rank follows its own grade only."""
    rank = _SANCTORAL_RANK.get(saint.rank, Precedence.MEM_OPT)
    if saint.rank is RankCode.KINH and saint.category is Category.LORD:
        rank = Precedence.FEAST_LORD
    return Celebration(
        key=key,
        name=saint.name,
        category=saint.category,
        grade=Grade.from_rank_code(saint.rank),
        rank=rank,
        color=saint.color,
        rank_code=saint.rank,
        special=saint.name,
        saints=(saint,),
    )


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def collation_key(text: str) -> Tuple[str, str]:
    """Vietnamese-aware sort key: base letters first, diacritics as tiebreak."""
    stripped = "".join(
        ch for ch in unicodedata.normalize("NFD", text) if not unicodedata.combining(ch)
    )
    stripped = stripped.replace("đ", "d").replace("Đ", "D")
    return stripped.casefold(), text

def sort_key(c: Celebration) -> tuple:
    return (int(c.rank), c.category.weight, -c.grade.weight, collation_key(c.name), c.key)


Candidates = Union[None, Celebration, Sequence[Celebration]]

def _as_list(x: Candidates) -> List[Celebration]:
    if x is None:
        return []
    if isinstance(x, Celebration):
        return [x]
    return list(x)


def _is_sunday_winner(c: Celebration) -> bool:
    return c.rank_code is RankCode.CHUA_NHAT or c.key.startswith("BASE_SUN")

def _commemorated(loser: Celebration, winner: Celebration) -> bool:
    if loser.grade is Grade.MEMORIAL:
        return not _is_sunday_winner(winner)
    return loser.grade is Grade.SOLEMNITY and winner.rank <= Precedence.HIGH_LORD_SUNDAY_SEASON


def resolve(temporal: Candidates, sanctoral: Candidates = None) -> Resolution:
    """
    Pick the winning celebration among the temporal and sanctoral candidates.

    Raises ValueError when there is nothing to resolve.
    """
    candidates = _as_list(temporal) + _as_list(sanctoral)
    if not candidates:
        raise ValueError("resolve() needs at least one candidate")
    ordered = sorted(candidates, key=sort_key)
    winner = ordered[0]
    commemorations = tuple(
        Commemoration(name=c.name, rank_code=c.rank_code, grade=c.grade, rank=int(c.rank))
        for c in ordered[1:]
        if _commemorated(c, winner)
    )
    reason = (
        f"Winner: {winner.key} (rank {int(winner.rank)}, "
        f"category {winner.category.value}, grade {winner.grade.value})"
    )
    return Resolution(winner=winner, commemorations=commemorations, reason=reason)
