from __future__ import annotations
from typing import Any, Dict

from ..core.time import dow, to_jdn
from ..engines.daycode import sunday_number_of_year
from .registry import register_attribute

def weekday(info) -> Dict[str, Any]:
    # Day-code convention: 0=Sun..6=Sat.
    return {"weekday": dow(info.date)}

def julian_day(info) -> Dict[str, Any]:
    return {"jdn": to_jdn(info.date)}

def can_chi(info) -> Dict[str, Any]:
    return {"can_chi_year": info.lunar.can_chi_year}

def lunar_label(info) -> Dict[str, Any]:
    lunar = info.lunar
    return {
        "lunar_label": lunar.label,
        "lunar_month_name": lunar.month_name,
        "lunar_first_day": lunar.day == 1,
    }

def sunday_number(info) -> Dict[str, Any]:
    return {"sunday_number": sunday_number_of_year(info.date)}

def code_parts(info) -> Dict[str, Any]:
    # Only regular S WW D codes split into parts; reserved literals do not.
    code = info.temporal_code
    if (
        len(code) == 4
        and code.isdigit()
        and int(code[0]) == int(info.season)
        and int(code[1:3]) <= 34
        and int(code[3]) == dow(info.date)
    ):
        return {"code_season": int(code[0]), "code_week": int(code[1:3]), "code_weekday": int(code[3])}
    return {"code_season": None, "code_week": None, "code_weekday": None}

register_attribute("weekday", weekday, description="0=Sunday .. 6=Saturday")
register_attribute("jdn", julian_day, description="Julian day number")
register_attribute("can_chi", can_chi, description="sexagenary name of the lunar year")
register_attribute("lunar", lunar_label, description="lunar label, month name, first-of-month flag")
register_attribute("sunday_number", sunday_number, description="Sundays elapsed in the civil year")
register_attribute("code_parts", code_parts, description="season, week and weekday digits of a regular code")
