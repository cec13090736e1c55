from __future__ import annotations

import argparse
import logging
import random
from datetime import date, timedelta
from typing import List, Optional

from litvn.core.errors import InvalidLunarDateError
from litvn.lunar import VIETNAM_TZ, lunar_to_solar, solar_to_lunar

logger = logging.getLogger(__name__)


def parse_date(s: str) -> date:
    y, m, d = s.split("-")
    return date(int(y), int(m), int(d))


def random_date(rng: random.Random, start: date, end: date) -> date:
    span = (end - start).days
    return start + timedelta(days=rng.randint(0, span))


def roundtrip_test(N: int, start: date, end: date, seed: int, *, tz: float, max_failures: int) -> int:
    """solar -> lunar -> solar on N random dates; returns the number of failures."""
    rng = random.Random(seed)
    failures = 0

    for _ in range(N):
        d0 = random_date(rng, start, end)
        ld = solar_to_lunar(d0.day, d0.month, d0.year, tz)
        try:
            back = lunar_to_solar(ld.day, ld.month, ld.year, ld.leap, tz)
        except InvalidLunarDateError as e:
            back = None
            logger.debug("%s: %s", d0, e)
        if back != d0:
            failures += 1
            print("\nFAIL")
            print("tz:", tz)
            print("d0:", d0)
            print("lunar:", ld)
            print("back:", back)
            if failures >= max_failures:
                return failures

    return failures


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip test of the lunar converter.")
    p.add_argument("--n", type=int, default=2000)
    p.add_argument("--start", default="1900-01-31")
    p.add_argument("--end", default="2100-12-31")
    p.add_argument("--seed", type=int, default=1)
    p.add_argument("--tz", type=float, default=VIETNAM_TZ)
    p.add_argument("--max-failures", type=int, default=10)
    args = p.parse_args(argv)

    start, end = parse_date(args.start), parse_date(args.end)
    failures = roundtrip_test(args.n, start, end, args.seed, tz=args.tz, max_failures=args.max_failures)
    print(f"tz=+{args.tz:g}  N={args.n}  failures={failures}")
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
