from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Protocol, Tuple

from .errors import CalendarNotFoundError
from .types import DayInfo, Discipline, LunarDate, MovableFeastSet, VigilInfo

class CalendarEngine(Protocol):
    def info(self) -> Dict[str, Any]: ...
    def get_liturgical_data(self, year: int) -> MovableFeastSet: ...
    def day_info(self, d: date, feasts: Optional[MovableFeastSet] = None) -> DayInfo: ...
    def day_code(self, d: date, feasts: Optional[MovableFeastSet] = None) -> str: ...
    def vigil(self, d: date, feasts: Optional[MovableFeastSet] = None) -> Optional[VigilInfo]: ...
    def discipline(self, d: date) -> Tuple[Discipline, ...]: ...
    def lunar_date(self, d: date) -> LunarDate: ...
    def explain(self, d: date) -> Dict[str, Any]: ...
    def set_displayed_year(self, year: int) -> None: ...
    def clear_cache(self) -> None: ...
    def cache_stats(self) -> Dict[str, Dict[str, Any]]: ...

@dataclass
class CalendarRegistry:
    _calendars: Dict[str, CalendarEngine]

    def get(self, name: str) -> CalendarEngine:
        if name not in self._calendars:
            raise CalendarNotFoundError(f"Unknown calendar '{name}'. Available: {sorted(self._calendars)}")
        return self._calendars[name]

    def list(self) -> List[str]:
        return sorted(self._calendars.keys())

    def register(self, name: str, calendar: CalendarEngine, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._calendars):
            raise KeyError(f"Calendar '{name}' already exists. Use overwrite=True to replace.")
        self._calendars[name] = calendar
