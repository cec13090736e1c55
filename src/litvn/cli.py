from __future__ import annotations

import argparse
from datetime import date
import logging
import sys
import re
import importlib
import inspect

import orjson


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_ymd(s: str) -> date:
    if not _DATE_RE.match(s):
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {s!r}")
    y, m, d = map(int, s.split("-"))
    try:
        return date(y, m, d)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"{s}: {e}") from None


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """Run a diagnostics module's main(), passing argv when it takes one."""
    fn = getattr(importlib.import_module(modpath), "main", None)
    if fn is None:
        raise SystemExit(f"{modpath} has no main()")
    rv = fn(argv) if inspect.signature(fn).parameters else fn()
    return int(rv or 0)


def _dump(obj) -> None:
    print(orjson.dumps(obj, option=orjson.OPT_INDENT_2 | orjson.OPT_NON_STR_KEYS).decode("utf-8"))


def _print_day(info) -> None:
    lunar = info.lunar
    print(f"{info.date.isoformat()}  {info.season_name}  [{info.color.value}]")
    print(f"  Âm lịch     : {lunar.label} ({lunar.month_name}) năm {lunar.can_chi_year}")
    print(f"  Cử hành     : {info.special or '-'}  ({info.rank_name or 'Ngày thường'}, bậc {info.rank})")
    print(f"  Tuần        : {info.week_label}")
    print(f"  Mã ngày     : {info.day_code}  (mùa: {info.temporal_code})  năm {info.sunday_cycle}/{info.weekday_cycle}")
    for s in info.saints:
        print(f"  Thánh       : {s.name} ({s.rank.display_name})")
    for c in info.commemorations:
        print(f"  Kính nhớ    : {c.name}")
    if info.transferred and info.original_date is not None:
        print(f"  Dời từ      : {info.original_date.isoformat()}")
    if info.ash_wednesday_note:
        print(f"  Ghi chú     : {info.ash_wednesday_note}")
    if info.tet_note:
        print(f"  Tết         : {info.tet_note}")
    if info.attributes:
        for k, v in info.attributes.items():
            print(f"  {k:<12}: {v}")


def cmd_day(argv: list[str]) -> int:
    import litvn

    p = argparse.ArgumentParser(prog="litvn day", description="Gregorian date -> liturgical day")
    p.add_argument("date", type=_parse_ymd, help="YYYY-MM-DD")
    p.add_argument("--calendar", default="vietnam")
    p.add_argument("--attr", action="append", default=[], help="attribute name (repeatable)")
    p.add_argument("--json", action="store_true", help="print the full record as JSON")
    p.add_argument("--explain", action="store_true", help="show the precedence decision")
    args = p.parse_args(argv)

    d = args.date
    info = litvn.get_day_info(d, attributes=tuple(args.attr), calendar=args.calendar)
    if args.json:
        _dump(info)
    else:
        _print_day(info)
        for disc in litvn.get_liturgical_discipline(d, calendar=args.calendar):
            print(f"  Luật        : {disc.label}" + (f" - {disc.note}" if disc.note else ""))
    if args.explain:
        _dump(litvn.explain(d, calendar=args.calendar))
    return 0


def cmd_year(argv: list[str]) -> int:
    import litvn

    p = argparse.ArgumentParser(prog="litvn year", description="Movable feasts of a year")
    p.add_argument("year", type=int)
    p.add_argument("--calendar", default="vietnam")
    p.add_argument("--json", action="store_true")
    args = p.parse_args(argv)

    f = litvn.get_liturgical_data(args.year, calendar=args.calendar)
    if args.json:
        _dump(f.to_dict())
        return 0
    for k, v in f.to_dict().items():
        if k == "ash_wednesday_transfer_note" and not v:
            continue
        print(f"{k:<28} {v}")
    return 0


def cmd_lunar(argv: list[str]) -> int:
    import litvn

    p = argparse.ArgumentParser(prog="litvn lunar", description="Gregorian date -> Vietnamese lunar date")
    p.add_argument("date", type=_parse_ymd, help="YYYY-MM-DD")
    p.add_argument("--calendar", default="vietnam")
    args = p.parse_args(argv)

    ld = litvn.get_lunar_date(args.date, calendar=args.calendar)
    leap = " (nhuận)" if ld.leap else ""
    print(f"{ld.day}/{ld.month}{leap}/{ld.year}  tháng {ld.month_name}, năm {ld.can_chi_year}  JDN {ld.jdn}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shortcut: `litvn YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        return cmd_day(argv)

    p = argparse.ArgumentParser(prog="litvn", description="Vietnamese Catholic liturgical calendar CLI.")
    p.add_argument("-v", "--verbose", action="store_true", help="enable logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("day", help="Gregorian date -> liturgical day")
    sub.add_parser("year", help="Movable feasts of a year")
    sub.add_parser("lunar", help="Gregorian date -> Vietnamese lunar date")
    sub.add_parser("month", help="Print a month of liturgical days (diagnostics)")

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["tet-ash", "leap-months", "round-trip", "tet-scatter"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.cmd == "day":
        return cmd_day(rest)

    if args.cmd == "year":
        return cmd_year(rest)

    if args.cmd == "lunar":
        return cmd_lunar(rest)

    if args.cmd == "month":
        return _run_module_main("litvn.diagnostics.pretty_month", rest)

    if args.cmd == "diag":
        tool_map = {
            "tet-ash": "litvn.diagnostics.tet_ash_table",
            "leap-months": "litvn.diagnostics.leap_months",
            "round-trip": "litvn.diagnostics.round_trip",
            "tet-scatter": "litvn.diagnostics.tet_scatter",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
