from __future__ import annotations

import argparse
import importlib
import inspect
import math
import re
import sys
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from starscalendars import config

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_ymd(s: str) -> date:
    y, m, d = map(int, s.split("-"))
    return date(y, m, d)


def _parse_instant(s: Optional[str]) -> datetime:
    """ISO-8601 instant; naive values are read as UTC, a bare date as 00:00 UTC."""
    if s is None:
        return datetime.now(timezone.utc)
    if _DATE_RE.match(s):
        d = _parse_ymd(s)
        return datetime(d.year, d.month, d.day, tzinfo=timezone.utc)
    dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _fmt_state(st) -> str:
    from starscalendars.engines.phase import PHASE_NAMES

    def arrow(flag):
        if flag is None:
            return "n/a"
        return "from perigee" if flag else "from apogee"

    lines = [
        f"Instant       : {st.instant.isoformat()}",
        f"JD (UTC)      : {st.julian_day:.6f}",
        f"Calendar      : {st.calendar.display}",
        f"Earth-Sun     : {st.earth_sun_distance_au:.8f} AU ({arrow(st.earth.direction)})",
        f"True anomaly  : {math.degrees(st.earth.true_anomaly) % 360.0:.4f} deg",
        f"Moon phase    : {PHASE_NAMES[st.phase.bucket]} (age {st.phase.age_days:.3f} d, elongation {st.phase.elongation_deg:.3f} deg)",
        f"Moon          : {arrow(st.moon.direction)}, {st.moon.days_since_extremum} d since extremum",
        f"Zenith        : lat {st.subsolar.latitude:+.4f} deg, lon {st.subsolar.longitude:.4f} deg",
    ]
    return "\n".join(lines)


def cmd_calendar(argv: list[str]) -> int:
    import starscalendars

    p = argparse.ArgumentParser(prog="starscalendars calendar", description="Date or instant -> DD.dd.YY")
    p.add_argument("when", nargs="?", default=None, help="YYYY-MM-DD (read at 20:00 UTC) or ISO instant")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args(argv)

    if args.when is not None and _DATE_RE.match(args.when):
        cd = starscalendars.calendar_date(_parse_ymd(args.when))
    else:
        cd = starscalendars.calendar_date(_parse_instant(args.when))

    if args.verbose:
        print(f"year={cd.year} decad={cd.decad} day_in_decad={cd.day_in_decad} day_index={cd.day_index}")
    print(cd.display)
    return 0


def cmd_zenith(argv: list[str]) -> int:
    import starscalendars
    from starscalendars.engines.subsolar import to_sphere

    p = argparse.ArgumentParser(prog="starscalendars zenith", description="Sub-solar point at an instant")
    p.add_argument("--at", default=None, help="ISO instant (default: now)")
    p.add_argument("--radius", type=float, default=1.0, help="sphere radius for the Cartesian projection")
    args = p.parse_args(argv)

    z = starscalendars.zenith(_parse_instant(args.at))
    v = to_sphere(z.latitude, z.longitude, args.radius)
    print(f"Latitude  = {z.latitude:+.6f} deg ({z.latitude_rad:+.8f} rad)")
    print(f"Longitude = {z.longitude:.6f} deg ({z.longitude_rad:.8f} rad)")
    print(f"GST       = {z.gst_deg:.6f} deg")
    print(f"Sphere    = ({v.x:.6f}, {v.y:.6f}, {v.z:.6f})")
    return 0


def cmd_phase(argv: list[str]) -> int:
    import starscalendars
    from starscalendars.engines.phase import PHASE_NAMES

    p = argparse.ArgumentParser(prog="starscalendars phase", description="Moon phase at an instant")
    p.add_argument("--at", default=None, help="ISO instant (default: now)")
    args = p.parse_args(argv)

    ph = starscalendars.moon_phase(_parse_instant(args.at))
    print(f"{PHASE_NAMES[ph.bucket]} (bucket {ph.bucket}), age {ph.age_days:.3f} d, elongation {ph.elongation_deg:.3f} deg")
    return 0


def cmd_state(argv: list[str]) -> int:
    import starscalendars
    from starscalendars.core.types import Body

    p = argparse.ArgumentParser(prog="starscalendars state", description="One full frame of celestial state")
    p.add_argument("--at", default=None, help="ISO instant (default: now)")
    p.add_argument("--positions", action="store_true", help="also print the 11 buffer positions (AU)")
    args = p.parse_args(argv)

    res = starscalendars.celestial_state(_parse_instant(args.at))
    if not res.ok:
        print(f"error: {res.error}", file=sys.stderr)
        return 1
    print(_fmt_state(res.state))
    if args.positions:
        for body in Body:
            v = res.state.position_of(body)
            print(f"  {body.name.lower():8s} {v.x:+.8f} {v.y:+.8f} {v.z:+.8f}")
    return 0


def cmd_run(argv: list[str]) -> int:
    import starscalendars

    p = argparse.ArgumentParser(prog="starscalendars run", description="Drive N frames at a fixed step")
    p.add_argument("--start", default=None, help="ISO instant (default: now)")
    p.add_argument("--frames", type=int, default=10)
    p.add_argument("--step-hours", type=float, default=24.0)
    args = p.parse_args(argv)

    driver = starscalendars.make_driver()
    t = _parse_instant(args.start)
    step = timedelta(hours=args.step_hours)
    failures = 0
    for _ in range(args.frames):
        res = driver.step(t)
        if res.ok:
            st = res.state
            print(f"{t.isoformat()}  {st.calendar.display}  phase={st.phase.bucket} age={st.phase.age_days:6.3f}  "
                  f"zenith=({st.subsolar.latitude:+7.3f},{st.subsolar.longitude:8.3f})")
        else:
            failures += 1
            print(f"{t.isoformat()}  error: {res.error}", file=sys.stderr)
        t += step
    return 1 if failures else 0


def cmd_solstice(argv: list[str]) -> int:
    import starscalendars

    p = argparse.ArgumentParser(prog="starscalendars solstice", description="Next December solstice")
    p.add_argument("--after", default=None, help="ISO instant (default: now)")
    args = p.parse_args(argv)

    print(starscalendars.next_winter_solstice(_parse_instant(args.after)).isoformat(timespec="seconds"))
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shortcut: `starscalendars YYYY-MM-DD`
    if argv and _DATE_RE.match(argv[0]):
        return cmd_calendar(argv)

    p = argparse.ArgumentParser(prog="starscalendars", description="Celestial state and custom calendar CLI.")
    p.add_argument("--provider", choices=["analytic", "skyfield"], default=None,
                   help=f"ephemeris provider (default: {config.PROVIDER})")
    p.add_argument("--log-level", default=config.LOG_LEVEL, help="DEBUG, INFO, WARNING, ...")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("calendar", help="Date or instant -> DD.dd.YY")
    sub.add_parser("zenith", help="Sub-solar point")
    sub.add_parser("phase", help="Moon phase")
    sub.add_parser("state", help="One full frame of celestial state")
    sub.add_parser("run", help="Drive several frames")
    sub.add_parser("solstice", help="Next winter solstice")

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument("tool", choices=["phase-cycle", "calendar-table"], help="Which diagnostic to run")

    args, rest = p.parse_known_args(argv)

    from starscalendars.logging_config import setup_logging
    setup_logging(args.log_level)

    if args.provider is not None:
        import starscalendars
        from starscalendars.ephemeris import get_provider
        starscalendars.set_provider(get_provider(args.provider))

    if args.cmd == "calendar":
        return cmd_calendar(rest)

    if args.cmd == "zenith":
        return cmd_zenith(rest)

    if args.cmd == "phase":
        return cmd_phase(rest)

    if args.cmd == "state":
        return cmd_state(rest)

    if args.cmd == "run":
        return cmd_run(rest)

    if args.cmd == "solstice":
        return cmd_solstice(rest)

    if args.cmd == "diag":
        tool_map = {
            "phase-cycle": "starscalendars.diagnostics.phase_cycle",
            "calendar-table": "starscalendars.diagnostics.calendar_table",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
