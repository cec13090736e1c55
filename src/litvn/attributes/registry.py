"""
litvn.attributes.registry
-------------------------
Optional per-day extras. An attribute is a pure function of a resolved
DayInfo returning a small dict that is merged into `DayInfo.attributes`.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Sequence

from ..core.types import DayInfo

AttrFunc = Callable[[DayInfo], Dict[str, Any]]


@dataclass(frozen=True)
class Attribute:
    name: str
    fn: AttrFunc
    description: str = ""


_REGISTRY: Dict[str, Attribute] = {}

def register_attribute(name: str, fn: AttrFunc, *, description: str = "", overwrite: bool = False) -> None:
    if name in _REGISTRY and not overwrite:
        raise ValueError(f"Attribute '{name}' already registered (use overwrite=True)")
    _REGISTRY[name] = Attribute(name, fn, description)

def list_attributes() -> List[str]:
    return sorted(_REGISTRY)

def describe_attributes() -> Dict[str, str]:
    return {name: _REGISTRY[name].description for name in sorted(_REGISTRY)}

def compute_attributes(info: DayInfo, names: Sequence[str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for name in dict.fromkeys(names):
        attr = _REGISTRY.get(name)
        if attr is None:
            raise KeyError(f"Unknown attribute '{name}'. Available: {list_attributes()}")
        out.update(attr.fn(info))
    return out
