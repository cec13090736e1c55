"""
litvn.engines.discipline
------------------------
Fasting, abstinence and Mass obligation for a date, following the
Vietnamese norms (fast 18-59, abstinence from 14).
"""

from __future__ import annotations

from datetime import date
from typing import List, Tuple

from ..core.enums import DisciplineType
from ..core.time import add_days, dow
from ..core.types import Discipline, MovableFeastSet

FAST_LABEL = "Ăn chay"
ABSTINENCE_LABEL = "Kiêng thịt"
OBLIGATION_LABEL = "Lễ buộc"
TRIDUUM_LABEL = "Tam Nhật Vượt Qua"

NOTE_ASH = "Ngày Lễ Tro: Buộc ăn chay và kiêng thịt (người từ 18-59 tuổi)"
NOTE_GOOD_FRIDAY = "Thứ Sáu Tuần Thánh: Buộc ăn chay và kiêng thịt"
NOTE_LENT_FRIDAY = "Thứ Sáu Mùa Chay: Buộc kiêng thịt (người từ 14 tuổi trở lên)"

# Fixed holy days of obligation in Vietnam (month, day); Easter and Ascension are movable.
HOLY_DAYS_VN = ((1, 1), (8, 15), (11, 1), (12, 25))


def is_holy_day(d: date, f: MovableFeastSet) -> bool:
    return (d.month, d.day) in HOLY_DAYS_VN or d == f.easter or d == f.ascension


def liturgical_discipline(d: date, f: MovableFeastSet) -> Tuple[Discipline, ...]:
    out: List[Discipline] = []

    if d == f.ash_wednesday_celebration:
        out.append(Discipline(DisciplineType.FAST, FAST_LABEL, NOTE_ASH))
        out.append(Discipline(DisciplineType.ABSTINENCE, ABSTINENCE_LABEL, NOTE_ASH))
    if d == f.good_friday:
        out.append(Discipline(DisciplineType.FAST, FAST_LABEL, NOTE_GOOD_FRIDAY))
        out.append(Discipline(DisciplineType.ABSTINENCE, ABSTINENCE_LABEL, NOTE_GOOD_FRIDAY))

    if dow(d) == 5 and f.ash_wednesday <= d < f.easter:
        if not any(x.type is DisciplineType.ABSTINENCE for x in out):
            out.append(Discipline(DisciplineType.ABSTINENCE, ABSTINENCE_LABEL, NOTE_LENT_FRIDAY))

    if dow(d) == 0 or is_holy_day(d, f):
        out.append(Discipline(DisciplineType.OBLIGATION, OBLIGATION_LABEL))

    if add_days(f.easter, -3) <= d <= f.easter:
        out.append(Discipline(DisciplineType.SPECIAL, TRIDUUM_LABEL))

    return tuple(out)
