from __future__ import annotations

import argparse
from bisect import bisect_right
from datetime import date

from starscalendars.core.time import epoch_ms, from_epoch_ms
from starscalendars.engines.calendar import anchor_instant, default_table, format_display


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Print calendar table entries around a civil date.")
    p.add_argument("date", nargs="?", default=None, help="YYYY-MM-DD (default: today)")
    p.add_argument("--span", type=int, default=5, help="entries on each side")
    args = p.parse_args(argv)

    d = date.fromisoformat(args.date) if args.date else date.today()
    table = default_table()
    ms = epoch_ms(anchor_instant(d))

    keys = [e.epoch_ms for e in table.entries]
    i = bisect_right(keys, ms) - 1
    lo = max(0, i - args.span)
    hi = min(len(table), i + args.span + 1)

    print(f"table: {len(table)} entries, {from_epoch_ms(table.first.epoch_ms).isoformat()} .. "
          f"{from_epoch_ms(table.last.epoch_ms).isoformat()}")
    print(f"{'#':>6s}  {'start (UTC)':32s} {'len (h)':>9s}  {'y':>3s} {'d':>4s}  display")
    for k in range(lo, hi):
        e = table.entries[k]
        nxt = table.entries[k + 1].epoch_ms if k + 1 < len(table) else table.horizon_ms
        mark = ">" if k == i else " "
        print(f"{mark}{k:5d}  {from_epoch_ms(e.epoch_ms).isoformat():32s} {(nxt - e.epoch_ms) / 3.6e6:9.4f}  "
              f"{e.year_index:3d} {e.day_index:4d}  {format_display(e.day_index, e.year_index)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
