"""litvn public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    get_liturgical_data,
    get_day_info,
    get_liturgical_day_code,
    get_sanctoral_day_code,
    get_special_feast_code,
    get_vigil_info,
    get_lunar_date,
    get_liturgical_discipline,
    explain,
    set_displayed_year,
    clear_cache,
    cache_stats,
    list_calendars,
    calendar_info,
    get_calendar,
    make_calendar,
    register_calendar,
    month_days,
)
from .core.types import DayInfo, LunarDate, MovableFeastSet
from .engines.specs import CalendarSpec

__all__ = [
    "get_liturgical_data",
    "get_day_info",
    "get_liturgical_day_code",
    "get_sanctoral_day_code",
    "get_special_feast_code",
    "get_vigil_info",
    "get_lunar_date",
    "get_liturgical_discipline",
    "explain",
    "set_displayed_year",
    "clear_cache",
    "cache_stats",
    "list_calendars",
    "calendar_info",
    "get_calendar",
    "make_calendar",
    "register_calendar",
    "month_days",
    "DayInfo",
    "LunarDate",
    "MovableFeastSet",
    "CalendarSpec",
]
