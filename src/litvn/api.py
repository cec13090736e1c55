from __future__ import annotations

import calendar as _pycal
from dataclasses import replace
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .core.engine import CalendarEngine, CalendarRegistry
from .core.types import DayInfo, Discipline, LunarDate, MovableFeastSet, VigilInfo
from .attributes.registry import compute_attributes
from .attributes import standard as _standard  # noqa: F401  (registers the standard attributes)
from .engines.daycode import sanctoral_day_code, special_feast_code
from .engines.factory import make_calendar as _make_calendar
from .engines.specs import CalendarSpec

_registry: Optional[CalendarRegistry] = None

def set_registry(reg: CalendarRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> CalendarRegistry:
    if _registry is None:
        raise RuntimeError("Calendar registry not initialized")
    return _registry

def list_calendars() -> List[str]:
    return _reg().list()

def calendar_info(calendar: str) -> Dict[str, Any]:
    return _reg().get(calendar).info()

def get_liturgical_data(year: int, *, calendar: str = "vietnam") -> MovableFeastSet:
    return _reg().get(calendar).get_liturgical_data(year)

def get_day_info(
    d: date,
    feasts: Optional[MovableFeastSet] = None,
    attributes: Sequence[str] = (),
    *,
    calendar: str = "vietnam",
) -> DayInfo:
    info = _reg().get(calendar).day_info(d, feasts)
    if attributes:
        attrs = compute_attributes(info, attributes)
        info = replace(info, attributes=attrs)
    return info

def get_liturgical_day_code(d: date, feasts: Optional[MovableFeastSet] = None, *, calendar: str = "vietnam") -> str:
    return _reg().get(calendar).day_code(d, feasts)

def get_sanctoral_day_code(d: date) -> str:
    return sanctoral_day_code(d)

def get_special_feast_code(d: date) -> str:
    return special_feast_code(d)

def get_vigil_info(d: date, feasts: Optional[MovableFeastSet] = None, *, calendar: str = "vietnam") -> Optional[VigilInfo]:
    return _reg().get(calendar).vigil(d, feasts)

def get_lunar_date(d: date, *, calendar: str = "vietnam") -> LunarDate:
    return _reg().get(calendar).lunar_date(d)

def get_liturgical_discipline(d: date, *, calendar: str = "vietnam") -> Tuple[Discipline, ...]:
    return _reg().get(calendar).discipline(d)

def explain(d: date, *, calendar: str = "vietnam") -> Dict[str, Any]:
    return _reg().get(calendar).explain(d)

def set_displayed_year(year: int, *, calendar: str = "vietnam") -> None:
    _reg().get(calendar).set_displayed_year(year)

def clear_cache(*, calendar: str = "vietnam") -> None:
    _reg().get(calendar).clear_cache()

def cache_stats(*, calendar: str = "vietnam") -> Dict[str, Dict[str, Any]]:
    return _reg().get(calendar).cache_stats()

def get_calendar(name: str) -> CalendarEngine:
    return _reg().get(name)

def make_calendar(spec: CalendarSpec) -> CalendarEngine:
    return _make_calendar(spec)

def register_calendar(name: str, calendar: CalendarEngine, *, overwrite: bool = False) -> None:
    _reg().register(name, calendar, overwrite=overwrite)

# ============================================================
# Month-level helpers
# ============================================================

def month_days(year: int, month: int, *, calendar: str = "vietnam", attributes: Sequence[str] = ()) -> List[DayInfo]:
    """DayInfo for every civil day of a Gregorian month."""
    eng = _reg().get(calendar)
    eng.set_displayed_year(year)
    n = _pycal.monthrange(year, month)[1]
    return [get_day_info(date(year, month, k), attributes=attributes, calendar=calendar) for k in range(1, n + 1)]
