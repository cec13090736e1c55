"""
litvn.readings
--------------
Lookup into the lectionary tables by day code.

The texts themselves are external data; each table is an optional JSON file
in one directory:

    sunday.json        {code: {"A": ..., "B": ..., "C": ...}}
    seasonal.json      {code: ...}
    ordinary_y1.json   {code: ...}   weekday cycle 1
    ordinary_y2.json   {code: ...}   weekday cycle 2
    special.json       {code: ...}   proper readings of saints and Tết
    option_saint.json  {code: ...}   optional memorials (8DDMM)
    readings_data.json [{"code": ..., "year": "A"|"B"|"C"|"1"|"2"|"0", ...}]

A table that is absent is treated as empty; a code that is absent gives None.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import orjson

from .core.errors import ReadingTableError
from .core.time import dow
from .core.types import DayInfo, VigilInfo
from .engines.daycode import sanctoral_day_code, special_feast_code

logger = logging.getLogger(__name__)

# Pentecost vigil borrows the Saturday of Easter week 7.
PENTECOST_VIGIL_CODE = "4089"
PENTECOST_VIGIL_FALLBACK = "4076"

TABLE_FILES = {
    "sunday": "sunday.json",
    "seasonal": "seasonal.json",
    "ordinary_y1": "ordinary_y1.json",
    "ordinary_y2": "ordinary_y2.json",
    "special": "special.json",
    "option_saint": "option_saint.json",
    "readings_data": "readings_data.json",
}


@dataclass(frozen=True)
class ReadingMatch:
    source: str
    data: Any


@dataclass(frozen=True)
class ReadingEntry:
    type: str  # seasonal | sanctoral | special | tet | vigil
    data: Any
    vigil: Optional[VigilInfo] = None


def _load_json(path: Path) -> Any:
    try:
        return orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as e:
        raise ReadingTableError(f"{path}: {e}") from e


@dataclass(frozen=True)
class ReadingTables:
    sunday: Mapping[str, Any] = field(default_factory=dict)
    seasonal: Mapping[str, Any] = field(default_factory=dict)
    ordinary_y1: Mapping[str, Any] = field(default_factory=dict)
    ordinary_y2: Mapping[str, Any] = field(default_factory=dict)
    special: Mapping[str, Any] = field(default_factory=dict)
    option_saint: Mapping[str, Any] = field(default_factory=dict)
    readings_data: Sequence[Mapping[str, Any]] = ()

    @classmethod
    def from_directory(cls, path: Union[str, Path]) -> "ReadingTables":
        root = Path(path)
        kw: Dict[str, Any] = {}
        for attr, fname in TABLE_FILES.items():
            p = root / fname
            if not p.is_file():
                logger.debug("reading table %s not found in %s", fname, root)
                continue
            data = _load_json(p)
            if attr == "readings_data":
                if not isinstance(data, list):
                    raise ReadingTableError(f"{p}: expected a list")
                data = tuple(data)
            elif not isinstance(data, dict):
                raise ReadingTableError(f"{p}: expected an object")
            kw[attr] = data
        logger.info("reading tables loaded from %s: %s", root, ", ".join(sorted(kw)) or "none")
        return cls(**kw)

    # ---------------------------------------------------------
    # Single-code lookup
    # ---------------------------------------------------------

    def _data_row(self, code: str, years: Optional[Tuple[str, ...]]) -> Optional[Mapping[str, Any]]:
        for row in self.readings_data:
            if str(row.get("code")) != code:
                continue
            if years is None or row.get("year") in years:
                return row
        return None

    def find_reading(self, code: str, year: Optional[str] = None) -> Optional[ReadingMatch]:
        """First table holding `code`; `year` narrows Sunday cycles and metadata rows."""
        hit = self.sunday.get(code)
        if hit:
            if year and isinstance(hit, Mapping) and hit.get(year):
                return ReadingMatch("SUNDAY", hit[year])
            return ReadingMatch("SUNDAY", hit)
        for source, table in (
            ("SEASONAL", self.seasonal),
            ("ORDINARY_Y1", self.ordinary_y1),
            ("ORDINARY_Y2", self.ordinary_y2),
            ("SPECIAL", self.special),
            ("OPTION_SAINT", self.option_saint),
        ):
            hit = table.get(code)
            if hit:
                return ReadingMatch(source, hit)
        row = self._data_row(code, (year, "0") if year else None)
        if row is not None:
            return ReadingMatch("READINGS_DATA", row)
        return None

    # ---------------------------------------------------------
    # Everything read on one day
    # ---------------------------------------------------------

    def _vigil_reading(self, code: str, cycle: str) -> Optional[Any]:
        if self.seasonal.get(code):
            return self.seasonal[code]
        if self.special.get(code):
            return self.special[code]
        if self.sunday.get(code):
            hit = self.sunday[code]
            return (hit.get(cycle) if isinstance(hit, Mapping) else None) or hit
        row = self._data_row(code, (cycle, "0"))
        if row is not None:
            return row
        if code == PENTECOST_VIGIL_CODE:
            return self.seasonal.get(PENTECOST_VIGIL_FALLBACK)
        return None

    def full_readings(
        self,
        code: str,
        sanctoral_code: Optional[str],
        special_code: Optional[str],
        day_of_week: int,
        cycle: str,
        weekday_cycle: str,
        tet_code: Optional[str] = None,
        vigil: Optional[VigilInfo] = None,
    ) -> Tuple[ReadingEntry, ...]:
        out: List[ReadingEntry] = []

        if day_of_week == 0:
            hit = self.sunday.get(code)
            if isinstance(hit, Mapping) and hit.get(cycle):
                out.append(ReadingEntry("seasonal", hit[cycle]))
        else:
            if code[:1] == "5":
                daily = (self.ordinary_y1 if weekday_cycle == "1" else self.ordinary_y2).get(code)
            else:
                daily = self.seasonal.get(code)
                if not daily and code == PENTECOST_VIGIL_CODE:
                    daily = self.seasonal.get(PENTECOST_VIGIL_FALLBACK)
            if daily:
                out.append(ReadingEntry("seasonal", daily))

        if sanctoral_code:
            hit = self.special.get(sanctoral_code) or self.seasonal.get(sanctoral_code)
            if hit:
                out.append(ReadingEntry("sanctoral", hit))

        if special_code:
            hit = self.option_saint.get(special_code) or self.special.get(special_code)
            if hit:
                out.append(ReadingEntry("special", hit))

        if tet_code:
            hit = self.special.get(tet_code) or self._data_row(tet_code, ("0",))
            if hit:
                out.append(ReadingEntry("tet", hit))

        if vigil is not None and vigil.vigil_code:
            hit = self._vigil_reading(vigil.vigil_code, cycle)
            if hit:
                out.append(ReadingEntry("vigil", hit, vigil))

        return tuple(out)

    def for_day(self, info: DayInfo, vigil: Optional[VigilInfo] = None) -> Tuple[ReadingEntry, ...]:
        """full_readings() driven by a resolved DayInfo."""
        d = info.date
        tet_code = info.tet_event.reading_code if info.tet_event is not None else None
        return self.full_readings(
            info.day_code,
            sanctoral_day_code(d),
            special_feast_code(d),
            dow(d),
            info.sunday_cycle,
            info.weekday_cycle,
            tet_code=tet_code,
            vigil=vigil,
        )
