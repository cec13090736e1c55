from __future__ import annotations
from dataclasses import dataclass, fields, replace
from datetime import date
from typing import Any, Dict, Optional, Tuple

from .enums import Category, Color, DisciplineType, Grade, Precedence, RankCode, Season

LUNAR_MONTH_NAMES = ("Giêng", "Hai", "Ba", "Tư", "Năm", "Sáu", "Bảy", "Tám", "Chín", "Mười", "M.Một", "Chạp")
CAN = ("Giáp", "Ất", "Bính", "Đinh", "Mậu", "Kỷ", "Canh", "Tân", "Nhâm", "Quý")
CHI = ("Tý", "Sửu", "Dần", "Mão", "Thìn", "Tỵ", "Ngọ", "Mùi", "Thân", "Dậu", "Tuất", "Hợi")


def lunar_month_name(month: int, leap: bool = False) -> str:
    return ("Nhuận " if leap else "") + LUNAR_MONTH_NAMES[month - 1]

def can_chi_year(year: int) -> str:
    return f"{CAN[(year + 6) % 10]} {CHI[(year + 8) % 12]}"


@dataclass(frozen=True)
class LunarDate:
    day: int
    month: int
    year: int
    leap: bool
    jdn: int

    @property
    def month_name(self) -> str:
        return lunar_month_name(self.month, self.leap)

    @property
    def label(self) -> str:
        """Short day/month form, e.g. '3/2N' for day 3 of leap month 2."""
        return f"{self.day}/{self.month}{'N' if self.leap else ''}"

    @property
    def can_chi_year(self) -> str:
        return can_chi_year(self.year)


@dataclass(frozen=True)
class MovableFeastSet:
    """Year-level anchors of the temporal cycle."""
    year: int
    easter: date
    ash_wednesday: date
    ash_wednesday_celebration: date
    ash_wednesday_transferred: bool
    ash_wednesday_transfer_note: Optional[str]
    palm_sunday: date
    good_friday: date
    ascension: date
    pentecost: date
    trinity: date
    corpus_christi: date
    sacred_heart: date
    immaculate_heart: date
    advent_start: date
    christ_king: date
    christmas: date
    epiphany: date
    baptism_lord: date
    vietnamese_martyrs: date
    mission_sunday: date
    rosary_sunday: date
    annunciation: date
    st_joseph: date
    imm_conception: date

    @property
    def holy_thursday(self) -> date:
        return date.fromordinal(self.good_friday.toordinal() - 1)

    @property
    def holy_saturday(self) -> date:
        return date.fromordinal(self.easter.toordinal() - 1)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            v = getattr(self, f.name)
            out[f.name] = v.isoformat() if isinstance(v, date) else v
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MovableFeastSet":
        kwargs: Dict[str, Any] = {}
        for f in fields(cls):
            v = data[f.name]
            if f.name not in ("year", "ash_wednesday_transferred", "ash_wednesday_transfer_note"):
                v = date.fromisoformat(v)
            kwargs[f.name] = v
        return cls(**kwargs)


@dataclass(frozen=True)
class FixedSaint:
    name: str
    rank: RankCode
    color: Color = Color.WHITE
    category: Category = Category.SAINT


@dataclass(frozen=True)
class TransferredFeast:
    saint: FixedSaint
    original_date: date
    landing_date: date


@dataclass(frozen=True)
class Celebration:
    """One candidate for the celebration of a day."""
    key: str
    name: str
    category: Category
    grade: Grade
    rank: Precedence
    color: Color
    rank_code: RankCode
    special: Optional[str] = None
    saints: Tuple[FixedSaint, ...] = ()

    @property
    def is_sunday_placeholder(self) -> bool:
        return self.key in ("BASE_SUN_OT", "BASE_SUN_XMAS")


@dataclass(frozen=True)
class Commemoration:
    name: str
    rank_code: RankCode
    grade: Grade
    rank: int


@dataclass(frozen=True)
class Resolution:
    winner: Celebration
    commemorations: Tuple[Commemoration, ...] = ()
    reason: str = ""


@dataclass(frozen=True)
class TetEvent:
    lunar_day: int  # 0 = New Year's Eve
    name: str
    full_name: str
    rank: int
    rank_code: RankCode
    color: Color
    category: Category
    reading_code: Optional[str]
    note: str
    lunar: Optional[LunarDate] = None

    @property
    def is_eve(self) -> bool:
        return self.lunar_day == 0

    def at(self, lunar: LunarDate) -> "TetEvent":
        return replace(self, lunar=lunar)


@dataclass(frozen=True)
class TetResolution:
    celebrate: bool
    note: str
    rank: int


@dataclass(frozen=True)
class VigilInfo:
    vigil_code: str
    main_code: str
    name: str
    date: date
    main_date: date


@dataclass(frozen=True)
class Discipline:
    type: DisciplineType
    label: str
    note: str = ""


@dataclass(frozen=True)
class DayInfo:
    date: date
    season: Season
    season_name: str
    color: Color
    special: Optional[str]
    rank_code: RankCode
    rank: int
    day_code: str
    temporal_code: str
    week_label: str
    sunday_cycle: str
    weekday_cycle: str
    lunar: LunarDate
    saints: Tuple[FixedSaint, ...] = ()
    commemorations: Tuple[Commemoration, ...] = ()
    winner_key: Optional[str] = None
    precedence_reason: Optional[str] = None
    transferred: bool = False
    original_date: Optional[date] = None
    ash_wednesday_note: Optional[str] = None
    is_transferred_ash_wednesday: bool = False
    is_tet: bool = False
    tet_note: Optional[str] = None
    tet_lunar: Optional[LunarDate] = None
    tet_event: Optional[TetEvent] = None
    attributes: Optional[Dict[str, Any]] = None

    @property
    def rank_name(self) -> str:
        return self.rank_code.display_name
