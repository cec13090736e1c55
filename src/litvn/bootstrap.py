from __future__ import annotations
from litvn.core.engine import CalendarRegistry
from litvn.engines.specs import ALL_SPECS
from litvn.engines.factory import build_calendar
from litvn.engines.sanctoral import SanctoralTable

def build_registry() -> CalendarRegistry:
    # One sanctoral table shared by every standard calendar.
    sanctoral = SanctoralTable.default()
    calendars = {}
    for name, spec in ALL_SPECS.items():
        calendars[name] = build_calendar(spec, sanctoral=sanctoral)
    return CalendarRegistry(calendars)
