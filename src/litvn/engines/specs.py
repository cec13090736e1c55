from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict

from ..lunar import VIETNAM_TZ
from ..storage import DEFAULT_TTL_HOURS, DEFAULT_VERSION


@dataclass(frozen=True)
class CalendarSpec:
    """Pure-data description of a liturgical calendar; see factory.make_calendar."""
    name: str
    tz_offset: float = VIETNAM_TZ
    # Ash Wednesday / Tết transfer and the Tết overlay
    tet_rules: bool = True
    day_cache_size: int = 500
    year_cache_size: int = 64
    lunar_cache_size: int = 4096
    persistent_cache: bool = False
    cache_version: str = DEFAULT_VERSION
    cache_ttl_hours: float = DEFAULT_TTL_HOURS

    @staticmethod
    def like(name: str) -> "CalendarSpec":
        if name not in ALL_SPECS:
            raise KeyError(f"Unknown base spec '{name}'. Available: {sorted(ALL_SPECS)}")
        return ALL_SPECS[name]

    def tweak(self, **kwargs) -> "CalendarSpec":
        return replace(self, **kwargs)


# ============================================================
# STANDARD CALENDARS
# ============================================================

VIETNAM = CalendarSpec(name="vietnam")

# Same rules without the lunar New Year layer (Roman general calendar dates).
ROMAN = VIETNAM.tweak(name="roman", tet_rules=False)

# Chinese-meridian lunar dates (UTC+8); useful for comparing Tết across calendars.
VIETNAM_CN_MERIDIAN = VIETNAM.tweak(name="vietnam-utc8", tz_offset=8)


ALL_SPECS: Dict[str, CalendarSpec] = {
    s.name: s for s in (VIETNAM, ROMAN, VIETNAM_CN_MERIDIAN)
}
