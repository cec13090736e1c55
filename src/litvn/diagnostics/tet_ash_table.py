from __future__ import annotations

from datetime import date
import argparse

import litvn
from litvn.lunar import lunar_to_solar


def mmdd(d: date) -> str:
    return f"{d.month:02d}-{d.day:02d}"


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print Tết, Ash Wednesday and the celebrated Ash Wednesday for a range of years."
    )
    p.add_argument("--from-year", type=int, default=2000)
    p.add_argument("--to-year", type=int, default=2040)
    p.add_argument("--calendar", default="vietnam")
    p.add_argument("--only-transfers", action="store_true", help="Only print years where Ash Wednesday moves.")
    args = p.parse_args(argv)

    Y0, Y1 = args.from_year, args.to_year
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    headers = ["Year", "Tết", "Ash Wed", "Celebrated", "Note"]
    colw = [5, 6, 8, 10, 4]
    line = "  ".join(h.ljust(w) for h, w in zip(headers, colw))
    print(line)
    print("-" * len(line))

    tz = litvn.calendar_info(args.calendar)["tz_offset"]
    moved = 0
    for Y in range(Y0, Y1 + 1):
        f = litvn.get_liturgical_data(Y, calendar=args.calendar)
        tet = lunar_to_solar(1, 1, Y, tz_offset=tz)
        if f.ash_wednesday_transferred:
            moved += 1
        elif args.only_transfers:
            continue
        row = [
            str(Y).ljust(colw[0]),
            mmdd(tet).ljust(colw[1]),
            mmdd(f.ash_wednesday).ljust(colw[2]),
            mmdd(f.ash_wednesday_celebration).ljust(colw[3]),
            "moved" if f.ash_wednesday_transferred else "",
        ]
        print("  ".join(row))

    print(f"\nAsh Wednesday moved in {moved} of {Y1 - Y0 + 1} years.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
