"""
litvn.engines.interfaces
------------------------
Boundaries between the lunar converter, the sanctoral table and the
orchestrator.

Engines only rely on these protocols, so tests can pass small fakes (a lunar
source that never reports Tết, a sanctoral table with a single entry) without
touching the real data.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, Optional, Protocol

from ..core.types import FixedSaint, LunarDate, MovableFeastSet, TransferredFeast


class LunarSource(Protocol):
    """Per-date lunar lookups for a fixed time-zone offset."""

    def lunar_date(self, d: date) -> LunarDate:
        ...

    def is_tet_day(self, d: date) -> int:
        """1, 2 or 3 on the first days of lunar month 1, else 0."""
        ...

    def is_new_year_eve(self, d: date) -> bool:
        ...


class SanctoralSource(Protocol):
    """Fixed sanctoral calendar with its transfer and suppression rules."""

    def lookup_fixed(self, month: int, day: int) -> Optional[FixedSaint]:
        ...

    def transfer_date_for(self, original: date, f: MovableFeastSet) -> Optional[date]:
        ...

    def should_transfer(self, saint: FixedSaint, original: date, f: MovableFeastSet) -> Optional[date]:
        ...

    def transferred_feast_landing_on(
        self, d: date, feasts_for: Callable[[int], MovableFeastSet]
    ) -> Optional[TransferredFeast]:
        ...

    def is_suppressed(self, saint: FixedSaint, d: date, f: MovableFeastSet) -> bool:
        ...
