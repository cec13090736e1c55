#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import Dict, List, Optional, Tuple

from litvn.core.types import lunar_month_name
from litvn.lunar import leap_month_of


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "litvn[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "litvn[diagnostics]"') from e


def parse_offsets(s: str) -> List[float]:
    out = [float(x) for x in s.split(",") if x.strip()]
    if not (1 <= len(out) <= 3):
        raise SystemExit("--tz must contain 1 to 3 comma-separated offsets")
    return out


def leap_table(start_year: int, end_year: int, offsets: List[float]) -> Dict[float, Dict[int, int]]:
    """{tz: {lunar_year: leap_month}} over the given Gregorian span."""
    out: Dict[float, Dict[int, int]] = {}
    for tz in offsets:
        rows: Dict[int, int] = {}
        for Y in range(start_year, end_year + 1):
            hit = leap_month_of(Y, tz)
            if hit is not None:
                ly, m = hit
                rows[ly] = m
        out[tz] = rows
    return out


def build_points(np, rows: Dict[int, int]) -> Tuple["np.ndarray", "np.ndarray"]:
    years = sorted(rows)
    return np.array(years, dtype=int), np.array([rows[y] for y in years], dtype=int)


def plot(table: Dict[float, Dict[int, int]], out: str, title: str) -> None:
    np = _need_numpy()
    plt = _need_matplotlib()

    markers = ("o", "s", "^")
    fig, ax = plt.subplots(figsize=(9.2, 3.6), constrained_layout=True)
    ax.set_axisbelow(True)
    ax.grid(True, which="major", color="0.88", linewidth=0.7)
    for (tz, rows), mk in zip(table.items(), markers):
        x, y = build_points(np, rows)
        ax.scatter(x, y, s=60, marker=mk, facecolors="none", edgecolors="0.15", linewidths=1.2,
                   label=f"UTC+{tz:g}")
    ax.set_yticks(range(1, 13))
    ax.set_xlabel("Lunar year")
    ax.set_ylabel("Leap month")
    ax.set_title(title)
    ax.legend(loc="center left", bbox_to_anchor=(1.02, 0.5), frameon=False)
    fig.savefig(out, dpi=300)
    print(f"Saved: {out}")


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Leap months of the Vietnamese lunar calendar.")
    p.add_argument("--start-year", type=int, default=1960)
    p.add_argument("--end-year", type=int, default=2030)
    p.add_argument("--tz", default="7,8", help="Comma list of UTC offsets (default: 7,8)")
    p.add_argument("--plot", action="store_true", help="Write a scatter plot instead of only printing")
    p.add_argument("--out", default="leap_months.png")
    p.add_argument("--title", default="Leap months, Vietnam vs China meridian")
    args = p.parse_args(argv)

    offsets = parse_offsets(args.tz)
    table = leap_table(args.start_year, args.end_year, offsets)

    years = sorted({y for rows in table.values() for y in rows})
    print("Year  " + "  ".join(f"UTC+{tz:g}".ljust(12) for tz in offsets))
    for y in years:
        cells = []
        for tz in offsets:
            m = table[tz].get(y)
            cells.append((lunar_month_name(m, True) if m else "-").ljust(12))
        flag = "" if len({table[tz].get(y) for tz in offsets}) == 1 else "  *"
        print(f"{y}  " + "  ".join(cells) + flag)

    if args.plot:
        plot(table, args.out, args.title)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
