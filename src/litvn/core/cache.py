"""
litvn.core.cache
----------------
Bounded in-memory caches. Every engine receives its cache explicitly so tests
can substitute a NullCache and observe pure recomputation.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, Hashable, Optional, Protocol


class CacheProtocol(Protocol):
    def get(self, key: Hashable) -> Optional[Any]: ...
    def set(self, key: Hashable, value: Any) -> None: ...
    def clear(self) -> None: ...
    def stats(self) -> Dict[str, int]: ...


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    evictions: int = 0


class BoundedCache:
    """Least-recently-used mapping with a fixed capacity."""

    def __init__(self, capacity: int = 500, name: str = "cache"):
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self.name = name
        self._data: "OrderedDict[Hashable, Any]" = OrderedDict()
        self._stats = CacheStats()

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._data

    def get(self, key: Hashable) -> Optional[Any]:
        if key not in self._data:
            self._stats.misses += 1
            return None
        self._data.move_to_end(key)
        self._stats.hits += 1
        return self._data[key]

    def set(self, key: Hashable, value: Any) -> None:
        if key in self._data:
            self._data.move_to_end(key)
        self._data[key] = value
        while len(self._data) > self.capacity:
            self._data.popitem(last=False)
            self._stats.evictions += 1

    def clear(self) -> None:
        self._data.clear()

    def stats(self) -> Dict[str, int]:
        return {
            "size": len(self._data),
            "capacity": self.capacity,
            "hits": self._stats.hits,
            "misses": self._stats.misses,
            "evictions": self._stats.evictions,
        }


class NullCache:
    """Cache that never stores anything."""

    name = "null"

    def __len__(self) -> int:
        return 0

    def get(self, key: Hashable) -> Optional[Any]:
        return None

    def set(self, key: Hashable, value: Any) -> None:
        pass

    def clear(self) -> None:
        pass

    def stats(self) -> Dict[str, int]:
        return {"size": 0, "capacity": 0, "hits": 0, "misses": 0, "evictions": 0}
