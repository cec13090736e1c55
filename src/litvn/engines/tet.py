"""
litvn.engines.tet
-----------------
Vietnamese lunar New Year overlay.

Tết (lunar 1/1..1/3) and Giao Thừa (the eve) carry their own Masses by
permission of the Vietnamese Bishops' Conference. The overlay runs after
precedence: it replaces the resolved celebration only when the Tết event
outranks it or the day has nothing named to celebrate.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Dict, Optional

from ..core.enums import Category, Color, Grade, RankCode, Season, SpecialDayType
from ..core.time import dow
from ..core.types import Commemoration, DayInfo, MovableFeastSet, TetEvent, TetResolution
from .daycode import season_of, special_day_type
from .interfaces import LunarSource
from .precedence import LENT_BEGINS, PLACEHOLDER_KEYS

logger = logging.getLogger(__name__)


TET_CELEBRATIONS: Dict[int, TetEvent] = {
    1: TetEvent(
        lunar_day=1,
        name="MÙNG MỘT TẾT - Tân Niên",
        full_name="Thánh Lễ Tân Niên - Cầu Bình An Cho Năm Mới",
        rank=3,
        rank_code=RankCode.TRONG,
        color=Color.RED,
        category=Category.LORD,
        reading_code="70001",
        note="Theo phép HĐGMVN: Thánh lễ Tân Niên cầu bình an.",
    ),
    2: TetEvent(
        lunar_day=2,
        name="MÙNG HAI TẾT - Kính Nhớ Tổ Tiên",
        full_name="Thánh Lễ Kính Nhớ Tổ Tiên và Ông Bà Cha Mẹ",
        rank=3,
        rank_code=RankCode.TRONG,
        color=Color.WHITE,
        category=Category.OTHER,
        reading_code="70002",
        note="Theo phép HĐGMVN: Thánh lễ kính nhớ Tổ Tiên.",
    ),
    3: TetEvent(
        lunar_day=3,
        name="MÙNG BA TẾT - Thánh Hóa Công Việc",
        full_name="Thánh Lễ Thánh Hóa Công Ăn Việc Làm",
        rank=3,
        rank_code=RankCode.TRONG,
        color=Color.WHITE,
        category=Category.OTHER,
        reading_code="70003",
        note="Theo phép HĐGMVN: Thánh lễ thánh hóa công việc.",
    ),
    0: TetEvent(
        lunar_day=0,
        name="ĐÊM GIAO THỪA",
        full_name="Thánh Lễ Đêm Giao Thừa - Tạ Ơn Cuối Năm",
        rank=6,
        rank_code=RankCode.KINH,
        color=Color.WHITE,
        category=Category.OTHER,
        reading_code=None,
        note="Theo phép HĐGMVN: Thánh lễ Giao thừa tạ ơn cuối năm.",
    ),
}

NOTE_HOLY_WEEK = "Tết rơi vào Tuần Thánh/Tam Nhật: giữ phụng vụ mùa; có thể thêm ý nguyện Tết."
NOTE_LENT = "Tết rơi vào Mùa Chay: theo phép HĐGMVN, có thể cử hành Thánh lễ Tết."
NOTE_ORDINARY_SUNDAY = "Theo phép HĐGMVN: khi Tết trùng Chúa Nhật Thường Niên, có thể cử hành Thánh lễ Tết."


def tet_event(d: date, lunar: LunarSource) -> Optional[TetEvent]:
    """Tết event of `d` (Mùng 1-3 or the eve), stamped with its lunar date."""
    n = lunar.is_tet_day(d)
    if n > 0:
        return TET_CELEBRATIONS[n].at(lunar.lunar_date(d))
    if lunar.is_new_year_eve(d):
        return TET_CELEBRATIONS[0].at(lunar.lunar_date(d))
    return None

def tet_reading_code(d: date, lunar: LunarSource) -> Optional[str]:
    n = lunar.is_tet_day(d)
    if n > 0:
        return TET_CELEBRATIONS[n].reading_code
    return None


def resolve_tet_conflict(event: TetEvent, d: date, f: MovableFeastSet) -> TetResolution:
    kind = special_day_type(d, f)
    if kind in (SpecialDayType.TRIDUUM, SpecialDayType.HOLY_WEEK):
        return TetResolution(celebrate=False, note=NOTE_HOLY_WEEK, rank=13)
    season = season_of(d, f)
    if season is Season.ORDINARY and dow(d) == 0:
        return TetResolution(celebrate=True, note=NOTE_ORDINARY_SUNDAY, rank=3)
    if season is Season.LENT:
        return TetResolution(celebrate=True, note=NOTE_LENT, rank=6)
    return TetResolution(celebrate=True, note=event.note, rank=event.rank)


def _is_placeholder(info: DayInfo) -> bool:
    # Any Sunday still ranked as a Sunday yields to a celebrated Tết day.
    if info.rank_code is RankCode.CHUA_NHAT:
        return True
    return info.winner_key in PLACEHOLDER_KEYS or info.winner_key == LENT_BEGINS.key


def apply_tet(info: DayInfo, d: date, f: MovableFeastSet, lunar: LunarSource) -> DayInfo:
    """Return `info` with the Tết overlay applied (unchanged if `d` is not a Tết day)."""
    event = tet_event(d, lunar)
    if event is None:
        return info
    res = resolve_tet_conflict(event, d, f)
    if not res.celebrate:
        return replace(info, tet_note=res.note, tet_event=event)

    if res.rank > info.rank and not _is_placeholder(info):
        logger.debug("%s: %s keeps precedence over %s", d, info.special, event.name)
        return replace(info, tet_note=res.note, tet_event=event)

    commemorations = info.commemorations
    if info.special and info.special != event.name:
        commemorations = commemorations + (
            Commemoration(
                name=info.special,
                rank_code=info.rank_code,
                grade=Grade.from_rank_code(info.rank_code),
                rank=info.rank,
            ),
        )
    return replace(
        info,
        special=event.name,
        rank_code=event.rank_code,
        rank=res.rank,
        color=event.color,
        commemorations=commemorations,
        winner_key="TET",
        is_tet=True,
        tet_note=res.note,
        tet_lunar=event.lunar,
        tet_event=event,
    )
