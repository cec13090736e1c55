"""
litvn.engines.factory
---------------------
Transforms pure data specifications into live LiturgicalCalendar objects.
"""

from __future__ import annotations

from typing import Optional

from ..core.cache import BoundedCache
from ..lunar import LunarConverter
from ..storage import PersistentCache
from .calendar import LiturgicalCalendar
from .sanctoral import SanctoralTable
from .specs import CalendarSpec


def build_calendar(spec: CalendarSpec, *, sanctoral: Optional[SanctoralTable] = None) -> LiturgicalCalendar:
    """Transforms a CalendarSpec into a live LiturgicalCalendar."""
    # 1. Lunar layer
    lunar = LunarConverter(spec.tz_offset, BoundedCache(spec.lunar_cache_size, name="lunar"))

    # 2. Sanctoral layer
    if sanctoral is None:
        sanctoral = SanctoralTable.default()

    # 3. Optional persistent store for year-level anchors
    store = None
    if spec.persistent_cache:
        store = PersistentCache(version=spec.cache_version, ttl_hours=spec.cache_ttl_hours)

    # 4. Orchestrate
    return LiturgicalCalendar(
        name=spec.name,
        lunar=lunar,
        sanctoral=sanctoral,
        tet_rules=spec.tet_rules,
        year_cache=BoundedCache(spec.year_cache_size, name="years"),
        day_cache=BoundedCache(spec.day_cache_size, name="days"),
        store=store,
    )

def make_calendar(spec: CalendarSpec) -> LiturgicalCalendar:
    """The universal entry point."""
    return build_calendar(spec)
