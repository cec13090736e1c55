#!/usr/bin/env python3
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Tuple

import argparse

from litvn.engines.feasts import easter_date
from litvn.lunar import lunar_to_solar


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


def days_since_winter_solstice(d: date) -> int:
    """Days since Dec 22 of the previous year, with Dec 22 = 1."""
    ws = date(d.year - 1, 12, 22)
    return (d - ws).days + 1


@dataclass(frozen=True)
class Style:
    label: str
    tz: float
    color: str
    marker: str
    size: float = 16.0
    hollow: bool = False


def build_series(np, tz: float, start_year: int, end_year: int) -> Tuple["np.ndarray", "np.ndarray"]:
    years = np.arange(start_year, end_year + 1, dtype=int)
    y = np.empty_like(years, dtype=float)
    for i, Y in enumerate(years):
        y[i] = float(days_since_winter_solstice(lunar_to_solar(1, 1, int(Y), tz_offset=tz)))
    return years, y


def build_ash_series(np, start_year: int, end_year: int) -> Tuple["np.ndarray", "np.ndarray"]:
    years = np.arange(start_year, end_year + 1, dtype=int)
    y = np.empty_like(years, dtype=float)
    for i, Y in enumerate(years):
        ash = date.fromordinal(easter_date(int(Y)).toordinal() - 46)
        y[i] = float(days_since_winter_solstice(ash))
    return years, y


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Scatter plot of Tết dates against Ash Wednesday.")
    p.add_argument("--start-year", type=int, default=1900)
    p.add_argument("--end-year", type=int, default=2100)
    p.add_argument("--no-ash", action="store_true", help="Do not overlay Ash Wednesday.")
    p.add_argument("--outbase", default="tet_scatter", help="Output base name (writes .png)")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    styles: Dict[str, Style] = {
        "vietnam": Style("Tết (UTC+7)", 7, "tab:red", "o", size=14),
        "china": Style("Chinese New Year (UTC+8)", 8, "0.45", "o", size=40, hollow=True),
    }

    plt.rcParams.update({
        "font.size": 10,
        "axes.labelsize": 11,
        "axes.titlesize": 12,
        "legend.fontsize": 10,
    })

    fig, ax = plt.subplots(figsize=(9.2, 4.8), constrained_layout=True)
    ax.set_axisbelow(True)
    ax.grid(True, which="major", color="0.88", linewidth=0.7)
    ax.set_xlabel("Gregorian year")
    ax.set_ylabel("Days since winter solstice (Dec 22 = 1)")
    ax.set_title("Lunar New Year and Ash Wednesday")

    tet_by_style = {}
    for key, st in styles.items():
        x, y = build_series(np, st.tz, args.start_year, args.end_year)
        tet_by_style[key] = y
        if st.hollow:
            ax.scatter(x, y, s=st.size, marker=st.marker, facecolors="none", edgecolors=st.color,
                       linewidths=1.0, alpha=0.6, label=st.label)
        else:
            ax.scatter(x, y, s=st.size, marker=st.marker, c=st.color, alpha=0.5, label=st.label)

    if not args.no_ash:
        x, ash = build_ash_series(np, args.start_year, args.end_year)
        ax.scatter(x, ash, s=12, marker="_", c="tab:purple", label="Ash Wednesday")
        tet = tet_by_style["vietnam"]
        # Tết days 1..3 covering Ash Wednesday
        clash = (ash >= tet) & (ash <= tet + 2)
        ax.scatter(x[clash], ash[clash], s=60, marker="x", c="k", label="Ash Wednesday moved")
        print(f"Ash Wednesday within Tết in {int(clash.sum())} of {len(x)} years")

    ax.legend(loc="center left", bbox_to_anchor=(1.02, 0.5), frameon=False)

    outbase = args.outbase
    fig.savefig(outbase + ".png", dpi=300)
    print(f"Saved: {outbase}.png")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
