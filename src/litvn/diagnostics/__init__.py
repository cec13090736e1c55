"""Diagnostics package.

- pretty_month, tet_ash_table, round_trip: plain-text checks, no extras needed
- leap_months (with --plot), tet_scatter: need the `diagnostics` extra (numpy, matplotlib)
"""

__all__ = ["pretty_month", "tet_ash_table", "round_trip", "leap_months", "tet_scatter"]
