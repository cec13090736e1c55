"""
litvn.engines.sanctoral
-----------------------
Fixed (month-day keyed) sanctoral calendar, the transfer rules for
solemnities displaced by privileged days, and the suppression rules for
lesser feasts in privileged seasons.

Table records keep the ordo's own encoding:
  date      "DD/MM" (or "DD-MM")
  feast     display name
  type      S = solemnity, F = feast, M = obligatory memorial, anything else = optional memorial
  chasuble  Đ = red, T = purple, X = green, H = rose, anything else = white
  category  optional LORD / MARY / SAINT / OTHER; inferred from the name when absent
"""

from __future__ import annotations

import importlib.resources
import logging
import os
from datetime import date
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

import orjson

from ..core.enums import Category, Color, RankCode, SpecialDayType
from ..core.errors import SaintsTableError
from ..core.time import add_days, dow
from ..core.types import FixedSaint, MovableFeastSet, TransferredFeast
from .daycode import is_late_advent_weekday, special_day_type

logger = logging.getLogger(__name__)

SAINTS_ENV = "LITVN_SAINTS_TABLE"

# Palm Sunday to the Monday after the Easter Octave is the longest displacement.
TRANSFER_SEARCH_DAYS = 15

_RANK_BY_TYPE = {"S": RankCode.TRONG, "F": RankCode.KINH, "M": RankCode.NHO}
_COLOR_BY_CHASUBLE = {"Đ": Color.RED, "T": Color.PURPLE, "X": Color.GREEN, "H": Color.ROSE}

_MARY_MARKERS = ("Đức Mẹ", "Đức Maria", "MẸ", "MARIA")
_LORD_MARKERS = ("Chúa", "CHÚA", "Kitô", "KITÔ", "Thánh Thể", "Thánh Giá", "HIỆN XUỐNG", "PHỤC SINH")

FeastsFor = Callable[[int], MovableFeastSet]


def infer_category(name: str) -> Category:
    if any(m in name for m in _MARY_MARKERS):
        return Category.MARY
    if any(m in name for m in _LORD_MARKERS):
        return Category.LORD
    if "Thánh" in name or "THÁNH" in name:
        return Category.SAINT
    return Category.OTHER


def parse_record(item: Mapping[str, Any]) -> tuple[str, FixedSaint]:
    """(month-day key, saint) for one table record."""
    try:
        raw = str(item["date"])
        sep = "/" if "/" in raw else "-"
        day_s, month_s = raw.split(sep)[:2]
        day, month = int(day_s), int(month_s)
        name = str(item["feast"])
    except (KeyError, ValueError) as e:
        raise SaintsTableError(f"bad sanctoral record {item!r}") from e
    if not (1 <= month <= 12 and 1 <= day <= 31):
        raise SaintsTableError(f"bad sanctoral date {raw!r}")

    rank = _RANK_BY_TYPE.get(item.get("type", ""), RankCode.NHOKB)
    color = _COLOR_BY_CHASUBLE.get(item.get("chasuble", ""), Color.WHITE)
    cat = item.get("category")
    try:
        category = Category(cat) if cat else infer_category(name)
    except ValueError as e:
        raise SaintsTableError(f"bad category {cat!r} for {name!r}") from e
    return f"{month}-{day}", FixedSaint(name=name, rank=rank, color=color, category=category)


def _decode(raw: bytes, source: Any) -> list:
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise SaintsTableError(f"{source}: {e}") from e
    if not isinstance(data, list):
        raise SaintsTableError(f"{source}: expected a list of records")
    return data


def _read_records(path: Path) -> list:
    return _decode(path.read_bytes(), path)


@lru_cache(maxsize=1)
def load_default_records() -> tuple:
    """
    Load the sanctoral records.

    Search order:
      1) LITVN_SAINTS_TABLE environment variable (path to JSON)
      2) packaged data (litvn/data/saints.json)
    """
    p = os.environ.get(SAINTS_ENV, "").strip()
    if p:
        path = Path(p).expanduser()
        if path.is_file():
            return tuple(_read_records(path))
        logger.warning("%s=%s does not exist; using the packaged table", SAINTS_ENV, path)

    res = importlib.resources.files("litvn").joinpath("data/saints.json")
    if not res.is_file():
        logger.warning("packaged saints table not found; sanctoral calendar is empty")
        return ()
    return tuple(_decode(res.read_bytes(), "litvn/data/saints.json"))


class SanctoralTable:
    """Immutable month-day -> FixedSaint mapping plus the transfer rules."""

    def __init__(self, entries: Mapping[str, FixedSaint]):
        self._entries = MappingProxyType(dict(entries))

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "SanctoralTable":
        entries: Dict[str, FixedSaint] = {}
        for item in records:
            key, saint = parse_record(item)
            entries[key] = saint
        return cls(entries)

    @classmethod
    def default(cls) -> "SanctoralTable":
        table = cls.from_records(load_default_records())
        logger.info("sanctoral table loaded: %d entries", len(table))
        return table

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> Mapping[str, FixedSaint]:
        return self._entries

    def lookup_fixed(self, month: int, day: int) -> Optional[FixedSaint]:
        return self._entries.get(f"{month}-{day}")

    # ---------------------------------------------------------
    # Transfers
    # ---------------------------------------------------------

    def transfer_date_for(self, original: date, f: MovableFeastSet) -> Optional[date]:
        """Where a solemnity falling on `original` is moved, or None if it stays."""
        kind = special_day_type(original, f)
        if kind in (SpecialDayType.HOLY_WEEK, SpecialDayType.TRIDUUM, SpecialDayType.EASTER_OCTAVE):
            return add_days(f.easter, 8)
        if kind is SpecialDayType.CHRISTMAS_OCTAVE:
            return date(original.year + 1 if original.month == 12 else original.year, 1, 2)
        if dow(original) == 0:
            return add_days(original, 1)
        return None

    def should_transfer(self, saint: FixedSaint, original: date, f: MovableFeastSet) -> Optional[date]:
        if saint.rank is not RankCode.TRONG:
            return None
        return self.transfer_date_for(original, f)

    def transferred_feast_landing_on(self, d: date, feasts_for: FeastsFor) -> Optional[TransferredFeast]:
        """The earliest-dated solemnity transferred onto `d`, if any."""
        for back in range(TRANSFER_SEARCH_DAYS, 0, -1):
            original = add_days(d, -back)
            saint = self.lookup_fixed(original.month, original.day)
            if saint is None or saint.rank is not RankCode.TRONG:
                continue
            if self.transfer_date_for(original, feasts_for(original.year)) == d:
                return TransferredFeast(saint=saint, original_date=original, landing_date=d)
        return None

    # ---------------------------------------------------------
    # Suppression
    # ---------------------------------------------------------

    def is_suppressed(self, saint: FixedSaint, d: date, f: MovableFeastSet) -> bool:
        if saint.rank is RankCode.TRONG:
            return False
        kind = special_day_type(d, f)
        if kind in (SpecialDayType.HOLY_WEEK, SpecialDayType.TRIDUUM, SpecialDayType.EASTER_OCTAVE):
            return True
        if saint.rank is RankCode.KINH:
            return False
        if is_late_advent_weekday(d, f):
            return True
        if kind is SpecialDayType.LENT and dow(d) != 0:
            return True
        return kind is SpecialDayType.CHRISTMAS_OCTAVE
