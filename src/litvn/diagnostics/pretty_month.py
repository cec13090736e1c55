from __future__ import annotations

from datetime import date
import argparse

import litvn
from litvn.core.enums import RankCode


RANK_MARK = {
    RankCode.TRONG: "*",
    RankCode.KINH: "+",
    RankCode.NHO: "m",
    RankCode.NHOKB: "o",
    RankCode.CHUA_NHAT: "",
    RankCode.NGAY_THUONG: "",
}


def dow_header() -> str:
    return "CN       T2       T3       T4       T5       T6       T7"


def cell(top: str, bot: str, w: int = 8) -> tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def print_grid(title: str, weeks: list[list[tuple[str, str]]]) -> None:
    print(title)
    print(dow_header())
    print("-" * len(dow_header()))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def month_grid(calendar: str, gy: int, gm: int) -> list:
    days = litvn.month_days(gy, gm, calendar=calendar)

    weeks: list[list[tuple[str, str]]] = []
    wk: list[tuple[str, str]] = []
    pad = (date(gy, gm, 1).weekday() + 1) % 7  # Sunday=0
    for _ in range(pad):
        wk.append(cell("", ""))
    for info in days:
        mark = "T" if info.is_tet else RANK_MARK[info.rank_code]
        top = f"{info.date.day:2d}{mark} {info.day_code}"
        bot = info.lunar.label
        wk.append(cell(top, bot))
        if len(wk) == 7:
            weeks.append(wk)
            wk = []
    if wk:
        while len(wk) < 7:
            wk.append(cell("", ""))
        weeks.append(wk)

    print_grid(f"{calendar}  {gy}-{gm:02d}", weeks)
    return days


def print_listing(days: list) -> None:
    for info in days:
        name = info.special or info.week_label
        extra = f"  [{', '.join(s.name for s in info.saints)}]" if info.saints else ""
        print(f"{info.date.isoformat()}  {info.day_code:>6}  {info.color.value:<6}  {name}{extra}")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a Gregorian month with day codes and lunar dates."
    )
    p.add_argument("year", type=int, nargs="?", default=None)
    p.add_argument("month", type=int, nargs="?", default=None)
    p.add_argument("--calendar", default="vietnam", help="vietnam|roman|vietnam-utc8 (default: vietnam)")
    p.add_argument("--list", action="store_true", help="Also list each day's celebration.")
    args = p.parse_args(argv)

    if args.year is None or args.month is None:
        # Tết 2026 falls in February
        gy, gm = 2026, 2
    else:
        gy, gm = args.year, args.month

    days = month_grid(args.calendar, gy, gm)
    if args.list:
        print_listing(days)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
