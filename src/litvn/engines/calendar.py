"""
litvn.engines.calendar
----------------------
The Orchestrator. Binds the lunar converter, the movable-feast calculator,
the sanctoral table, the precedence engine and the Tết overlay into one
DayInfo per civil date.

Per-year anchors, per-date lunar dates and per-date DayInfo records live in
bounded caches handed in by the factory. An optional persistent store keeps
the year anchors across processes.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from ..core.cache import BoundedCache, CacheProtocol
from ..core.enums import RankCode, TRIDUUM_SEASON_NAME
from ..core.errors import CacheError
from ..core.time import dow
from ..core.types import (
    Celebration,
    DayInfo,
    Discipline,
    FixedSaint,
    LunarDate,
    MovableFeastSet,
    TransferredFeast,
    VigilInfo,
)
from ..storage import PersistentCache
from .daycode import (
    classify,
    season_of,
    sunday_cycle,
    temporal_day_code,
    vigil_info,
    week_label,
    weekday_cycle,
)
from .discipline import liturgical_discipline
from .feasts import compute_year
from .interfaces import LunarSource, SanctoralSource
from .precedence import base_celebration, resolve, sanctoral_celebration, temporal_feast
from .tet import apply_tet

logger = logging.getLogger(__name__)

TRANSFERRED_KEY = "TRANSFERRED"


class LiturgicalCalendar:
    """
    Resolves civil dates to DayInfo records for one calendar configuration.
    """
    def __init__(
        self,
        name: str,
        lunar: LunarSource,
        sanctoral: SanctoralSource,
        *,
        tet_rules: bool = True,
        year_cache: Optional[CacheProtocol] = None,
        day_cache: Optional[CacheProtocol] = None,
        store: Optional[PersistentCache] = None,
    ):
        self.name = name
        self.lunar = lunar
        self.sanctoral = sanctoral
        self.tet_rules = tet_rules
        self.year_cache: CacheProtocol = year_cache if year_cache is not None else BoundedCache(64, name="years")
        self.day_cache: CacheProtocol = day_cache if day_cache is not None else BoundedCache(500, name="days")
        self.store = store
        self.displayed_year: Optional[int] = None

    def info(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "tz_offset": getattr(self.lunar, "tz_offset", None),
            "tet_rules": self.tet_rules,
            "persistent_cache": self.store is not None,
        }

    # ---------------------------------------------------------
    # Year level
    # ---------------------------------------------------------

    def _store_key(self, year: int) -> str:
        return f"{self.name}:feasts:{year}"

    def _load_stored(self, year: int) -> Optional[MovableFeastSet]:
        if self.store is None:
            return None
        try:
            data = self.store.get(self._store_key(year))
        except CacheError as e:
            logger.warning("persistent cache unavailable: %s", e)
            return None
        if data is None:
            return None
        try:
            return MovableFeastSet.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("stored feasts for %d unreadable (%s); recomputing", year, e)
            try:
                self.store.delete(self._store_key(year))
            except CacheError as ce:
                logger.warning("persistent cache unavailable: %s", ce)
            return None

    def _save_stored(self, f: MovableFeastSet) -> None:
        if self.store is None:
            return
        try:
            self.store.set(self._store_key(f.year), f.to_dict())
        except CacheError as e:
            logger.warning("persistent cache unavailable: %s", e)

    def get_liturgical_data(self, year: int) -> MovableFeastSet:
        hit = self.year_cache.get(year)
        if hit is not None:
            return hit
        f = self._load_stored(year)
        if f is None:
            f = compute_year(year, self.lunar if self.tet_rules else None)
            self._save_stored(f)
        self.year_cache.set(year, f)
        return f

    def _feasts(self, d: date, feasts: Optional[MovableFeastSet]) -> MovableFeastSet:
        if feasts is not None:
            return feasts
        return self.get_liturgical_data(d.year)

    # ---------------------------------------------------------
    # Day level
    # ---------------------------------------------------------

    def lunar_date(self, d: date) -> LunarDate:
        return self.lunar.lunar_date(d)

    def day_code(self, d: date, feasts: Optional[MovableFeastSet] = None) -> str:
        f = self._feasts(d, feasts)
        return classify(d, f, self.lunar if self.tet_rules else None)[1]

    def vigil(self, d: date, feasts: Optional[MovableFeastSet] = None) -> Optional[VigilInfo]:
        return vigil_info(d, self._feasts(d, feasts))

    def discipline(self, d: date) -> Tuple[Discipline, ...]:
        return liturgical_discipline(d, self.get_liturgical_data(d.year))

    def _listed_saint(self, d: date, f: MovableFeastSet) -> Optional[FixedSaint]:
        """Fixed saint of `d` unless it is moved away or suppressed."""
        saint = self.sanctoral.lookup_fixed(d.month, d.day)
        if saint is None:
            return None
        if self.sanctoral.should_transfer(saint, d, f) is not None:
            return None
        if self.sanctoral.is_suppressed(saint, d, f):
            logger.debug("%s: %s suppressed", d, saint.name)
            return None
        return saint

    def candidates(
        self, d: date, f: MovableFeastSet
    ) -> Tuple[Celebration, List[Celebration], Tuple[FixedSaint, ...], Optional[TransferredFeast]]:
        """(temporal candidate, sanctoral candidates, listed saints, transferred feast)."""
        base = base_celebration(d, f)
        saint = self._listed_saint(d, f)
        moved = self.sanctoral.transferred_feast_landing_on(d, self.get_liturgical_data)

        saints: Tuple[FixedSaint, ...] = ()
        sanctoral: List[Celebration] = []
        feast = temporal_feast(d, f)
        forced = feast is not None and feast.force_temporal
        if moved is not None:
            saints += (moved.saint,)
            if not forced:
                sanctoral.append(sanctoral_celebration(moved.saint, key=TRANSFERRED_KEY))
        if saint is not None:
            saints += (saint,)
            after_epiphany = base.key == "BASE_WEEKDAY_AFTER_EPIPHANY" and saint.rank is RankCode.NHOKB
            if not forced and not after_epiphany:
                sanctoral.append(sanctoral_celebration(saint))
        return base, sanctoral, saints, moved

    def day_info(self, d: date, feasts: Optional[MovableFeastSet] = None) -> DayInfo:
        key = (d.year, d.month, d.day)
        if feasts is None:
            hit = self.day_cache.get(key)
            if hit is not None:
                return hit

        f = self._feasts(d, feasts)
        lunar = self.lunar.lunar_date(d)
        base, sanctoral, saints, moved = self.candidates(d, f)
        res = resolve(base, sanctoral)
        winner = res.winner

        rank_code = winner.rank_code
        if dow(d) == 0 and rank_code is not RankCode.TRONG:
            rank_code = RankCode.CHUA_NHAT

        season = season_of(d, f)
        season_name = season.display_name
        if f.holy_thursday <= d < f.easter:
            season_name = TRIDUUM_SEASON_NAME

        ash_day = f.ash_wednesday_transferred and d in (f.ash_wednesday, f.ash_wednesday_celebration)
        won_transfer = moved is not None and winner.key == TRANSFERRED_KEY

        info = DayInfo(
            date=d,
            season=season,
            season_name=season_name,
            color=winner.color,
            special=winner.special,
            rank_code=rank_code,
            rank=int(winner.rank),
            day_code=classify(d, f, self.lunar if self.tet_rules else None)[1],
            temporal_code=temporal_day_code(d, f),
            week_label=week_label(d, f),
            sunday_cycle=sunday_cycle(d, f),
            weekday_cycle=weekday_cycle(d.year),
            lunar=lunar,
            saints=saints,
            commemorations=res.commemorations,
            winner_key=winner.key,
            precedence_reason=res.reason if sanctoral else None,
            transferred=won_transfer,
            original_date=moved.original_date if won_transfer else None,
            ash_wednesday_note=f.ash_wednesday_transfer_note if ash_day else None,
            is_transferred_ash_wednesday=f.ash_wednesday_transferred and d == f.ash_wednesday_celebration,
        )
        if self.tet_rules:
            info = apply_tet(info, d, f, self.lunar)

        if feasts is None:
            self.day_cache.set(key, info)
        return info

    def explain(self, d: date) -> Dict[str, Any]:
        f = self.get_liturgical_data(d.year)
        base, sanctoral, saints, moved = self.candidates(d, f)
        rule, code = classify(d, f, self.lunar if self.tet_rules else None)
        res = resolve(base, sanctoral)
        return {
            "date": d.isoformat(),
            "calendar": self.name,
            "day_code_rule": rule,
            "day_code": code,
            "candidates": [c.key for c in [base, *sanctoral]],
            "saints": [s.name for s in saints],
            "transferred_from": moved.original_date.isoformat() if moved else None,
            "winner": res.winner.key,
            "reason": res.reason,
        }

    # ---------------------------------------------------------
    # Cache control
    # ---------------------------------------------------------

    def set_displayed_year(self, year: int) -> None:
        """Record the year on screen; changing it invalidates only the day cache."""
        if year != self.displayed_year:
            self.day_cache.clear()
            self.displayed_year = year

    def clear_cache(self) -> None:
        self.day_cache.clear()
        self.year_cache.clear()
        lunar_cache = getattr(self.lunar, "cache", None)
        if lunar_cache is not None:
            lunar_cache.clear()
        if self.store is not None:
            try:
                self.store.clear()
            except CacheError as e:
                logger.warning("persistent cache unavailable: %s", e)

    def cache_stats(self) -> Dict[str, Dict[str, Any]]:
        out: Dict[str, Dict[str, Any]] = {
            "days": self.day_cache.stats(),
            "years": self.year_cache.stats(),
        }
        lunar_cache = getattr(self.lunar, "cache", None)
        if lunar_cache is not None:
            out["lunar"] = lunar_cache.stats()
        if self.store is not None:
            out["persistent"] = self.store.stats()
        return out

