"""
litvn.engines.feasts
--------------------
Year-level anchors of the temporal cycle: Easter and everything hung on it,
the Advent/Christmas block, and the handful of solemnities that move when
they collide with Sundays, Holy Week or the Easter Octave.

The Ash Wednesday / Tết rule (HĐGMVN): when Ash Wednesday is lunar 1/1..1/3,
the rite and the day of fast move to Mùng 4 Tết; Lent still begins on the
computed Ash Wednesday.
"""

from __future__ import annotations

from datetime import date
from functools import lru_cache
from typing import Optional

from dateutil.easter import EASTER_WESTERN, easter

from ..core.time import add_days, dow, sunday_on_or_after, sunday_on_or_before
from ..core.types import MovableFeastSet
from .interfaces import LunarSource


@lru_cache(maxsize=512)
def easter_date(year: int) -> date:
    """Gregorian Easter Sunday."""
    return easter(year, EASTER_WESTERN)


def fourth_sunday_of_advent(year: int) -> date:
    christmas = date(year, 12, 25)
    back = dow(christmas) or 7
    return add_days(christmas, -back)


def epiphany_date(year: int) -> date:
    """First Sunday of January; Jan 8 when Jan 1 is itself a Sunday."""
    first = sunday_on_or_after(date(year, 1, 1))
    if first.day == 1:
        return date(year, 1, 8)
    return first


def baptism_of_the_lord(epiphany: date) -> date:
    if epiphany.day >= 7:
        return add_days(epiphany, 1)
    return add_days(epiphany, 7)


def ash_wednesday_transfer(ash: date, lunar: Optional[LunarSource]) -> tuple[date, bool, Optional[str]]:
    """(celebration date, transferred?, note) for the Ash Wednesday / Tết collision."""
    if lunar is None:
        return ash, False, None
    ld = lunar.lunar_date(ash)
    if ld.month == 1 and not ld.leap and 1 <= ld.day <= 3:
        celebration = add_days(ash, 4 - ld.day)
        note = (
            f"Theo HĐGMVN: Lễ Tro ({ash.day}/{ash.month}) trùng Mùng {ld.day} Tết, "
            f"việc cử hành và ăn chay kiêng thịt được dời sang Mùng 4 Tết "
            f"({celebration.day}/{celebration.month}). "
            f"Mùa Chay vẫn bắt đầu từ {ash.day}/{ash.month}."
        )
        return celebration, True, note
    return ash, False, None


def compute_year(year: int, lunar: Optional[LunarSource] = None) -> MovableFeastSet:
    """
    Build the MovableFeastSet for `year`.

    `lunar` is only consulted for the Ash Wednesday / Tết rule; pass None to
    disable it.
    """
    easter = easter_date(year)
    ash = add_days(easter, -46)
    palm = add_days(easter, -7)
    good_friday = add_days(easter, -2)
    pentecost = add_days(easter, 49)
    trinity = add_days(pentecost, 7)
    corpus = add_days(trinity, 7)
    sacred_heart = add_days(corpus, 5)

    advent4 = fourth_sunday_of_advent(year)
    advent_start = add_days(advent4, -21)
    christ_king = add_days(advent_start, -7)

    epiphany = epiphany_date(year)
    oct31 = date(year, 10, 31)

    # Annunciation: out of Holy Week and the Easter Octave, off Sundays
    annunciation = date(year, 3, 25)
    if palm <= annunciation <= add_days(easter, 7):
        annunciation = add_days(easter, 8)
    elif dow(annunciation) == 0:
        annunciation = add_days(annunciation, 1)

    # St Joseph: anticipated before Palm Sunday, off Sundays
    st_joseph = date(year, 3, 19)
    if palm <= st_joseph < easter:
        st_joseph = add_days(palm, -1)
    elif dow(st_joseph) == 0:
        st_joseph = add_days(st_joseph, 1)

    imm_conception = date(year, 12, 8)
    if dow(imm_conception) == 0:
        imm_conception = add_days(imm_conception, 1)

    celebration, transferred, note = ash_wednesday_transfer(ash, lunar)

    return MovableFeastSet(
        year=year,
        easter=easter,
        ash_wednesday=ash,
        ash_wednesday_celebration=celebration,
        ash_wednesday_transferred=transferred,
        ash_wednesday_transfer_note=note,
        palm_sunday=palm,
        good_friday=good_friday,
        ascension=add_days(easter, 39),
        pentecost=pentecost,
        trinity=trinity,
        corpus_christi=corpus,
        sacred_heart=sacred_heart,
        immaculate_heart=add_days(sacred_heart, 1),
        advent_start=advent_start,
        christ_king=christ_king,
        christmas=date(year, 12, 25),
        epiphany=epiphany,
        baptism_lord=baptism_of_the_lord(epiphany),
        vietnamese_martyrs=add_days(christ_king, -7),
        mission_sunday=add_days(sunday_on_or_before(oct31), -7),
        rosary_sunday=sunday_on_or_after(date(year, 10, 1)),
        annunciation=annunciation,
        st_joseph=st_joseph,
        imm_conception=imm_conception,
    )
