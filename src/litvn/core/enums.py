"""
litvn.core.enums
----------------
Closed vocabularies shared by every engine.
"""

from __future__ import annotations

from enum import Enum, IntEnum


class RankCode(str, Enum):
    """Display rank of a celebration, as printed in Vietnamese ordos."""
    TRONG = "TRONG"
    KINH = "KINH"
    NHO = "NHO"
    NHOKB = "NHOKB"
    CHUA_NHAT = "CHUA_NHAT"
    NGAY_THUONG = "NGAY_THUONG"

    @property
    def display_name(self) -> str:
        return _RANK_DISPLAY.get(self, "")


_RANK_DISPLAY = {
    RankCode.TRONG: "LỄ TRỌNG",
    RankCode.KINH: "LỄ KÍNH",
    RankCode.NHO: "LỄ NHỚ",
    RankCode.NHOKB: "LỄ NHỚ (TD)",
    RankCode.CHUA_NHAT: "Chúa Nhật",
}

# Ranks a fixed sanctoral entry can carry.
FIXED_RANKS = (RankCode.TRONG, RankCode.KINH, RankCode.NHO, RankCode.NHOKB)


class Color(str, Enum):
    WHITE = "white"
    RED = "red"
    PURPLE = "purple"
    GREEN = "green"
    ROSE = "rose"


class Category(str, Enum):
    LORD = "LORD"
    MARY = "MARY"
    SAINT = "SAINT"
    OTHER = "OTHER"

    @property
    def weight(self) -> int:
        return _CATEGORY_WEIGHT[self]


_CATEGORY_WEIGHT = {Category.LORD: 0, Category.MARY: 1, Category.SAINT: 2, Category.OTHER: 3}


class Grade(str, Enum):
    SOLEMNITY = "TRỌNG"
    FEAST = "KÍNH"
    MEMORIAL = "NHỚ"
    WEEKDAY = "NGÀY THƯỜNG"

    @property
    def weight(self) -> int:
        return _GRADE_WEIGHT[self]

    @classmethod
    def from_rank_code(cls, code: RankCode) -> "Grade":
        if code in (RankCode.TRONG, RankCode.CHUA_NHAT):
            return cls.SOLEMNITY
        if code is RankCode.KINH:
            return cls.FEAST
        if code in (RankCode.NHO, RankCode.NHOKB):
            return cls.MEMORIAL
        return cls.WEEKDAY


_GRADE_WEIGHT = {Grade.SOLEMNITY: 4, Grade.FEAST: 3, Grade.MEMORIAL: 2, Grade.WEEKDAY: 1}


class Precedence(IntEnum):
    """Table of liturgical days, 1 = highest."""
    TRIDUUM = 1
    HIGH_LORD_SUNDAY_SEASON = 2
    SOLEMNITY = 3
    FEAST_LORD = 4
    SUNDAY_ORD_OR_CHRISTMAS = 5
    FEAST = 6
    MEM_OBL = 7
    MEM_OPT = 8
    ADVENT_17_24_WEEKDAY = 9
    ADVENT_1_16_WEEKDAY = 10
    CHRISTMAS_WEEKDAY = 11
    LENT_WEEKDAY = 12
    OT_WEEKDAY = 13


class Season(IntEnum):
    """Season digit used as the first character of a day code."""
    ADVENT = 1
    CHRISTMAS = 2
    LENT = 3
    EASTER = 4
    ORDINARY = 5

    @property
    def display_name(self) -> str:
        return SEASON_NAMES[self]

    @property
    def color(self) -> Color:
        if self in (Season.ADVENT, Season.LENT):
            return Color.PURPLE
        if self in (Season.CHRISTMAS, Season.EASTER):
            return Color.WHITE
        return Color.GREEN


SEASON_NAMES = {
    Season.ADVENT: "Mùa Vọng",
    Season.CHRISTMAS: "Mùa Giáng Sinh",
    Season.LENT: "Mùa Chay",
    Season.EASTER: "Mùa Phục Sinh",
    Season.ORDINARY: "Mùa Thường Niên",
}

TRIDUUM_SEASON_NAME = "Tam Nhật Vượt Qua"


class SpecialDayType(str, Enum):
    TRIDUUM = "TRIDUUM"
    HOLY_WEEK = "HOLY_WEEK"
    LENT = "LENT"
    EASTER_OCTAVE = "EASTER_OCTAVE"
    ADVENT = "ADVENT"
    CHRISTMAS_OCTAVE = "CHRISTMAS_OCTAVE"
    ORDINARY = "ORDINARY"


class DisciplineType(str, Enum):
    FAST = "fast"
    ABSTINENCE = "abstinence"
    OBLIGATION = "obligation"
    SPECIAL = "special"
