from __future__ import annotations

import argparse
from datetime import datetime, timedelta, timezone
from typing import List, Tuple

from starscalendars import config
from starscalendars.core.time import datetime_utc_to_jd
from starscalendars.core.types import MoonPhase, PhaseState
from starscalendars.engines import phase
from starscalendars.ephemeris import get_provider


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "starscalendars[diagnostics]"') from e


def sample_cycle(provider, start: datetime, *, step_hours: float, days: float) -> List[Tuple[datetime, MoonPhase]]:
    """Classify a run of readings the way the frame driver does, one state for the whole run."""
    out: List[Tuple[datetime, MoonPhase]] = []
    step = timedelta(hours=step_hours)
    n = int(days * 24.0 / step_hours) + 1
    state = None
    t = start
    for _ in range(n):
        e = provider.moon(datetime_utc_to_jd(t)).sun_elongation_deg
        if state is None:
            state = PhaseState.primed(e)
        out.append((t, phase.classify(state, e, t)))
        t += step
    return out


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Moon phase age/bucket across a synodic month.")
    p.add_argument("--start", default=None, help="ISO date/instant, UTC (default: now)")
    p.add_argument("--days", type=float, default=config.SYNODIC_MONTH_DAYS)
    p.add_argument("--step-hours", type=float, default=6.0)
    p.add_argument("--provider", default=config.PROVIDER)
    p.add_argument("--plot", action="store_true", help="plot age and bucket (matplotlib)")
    args = p.parse_args(argv)

    if args.start:
        start = datetime.fromisoformat(args.start)
        if start.tzinfo is None:
            start = start.replace(tzinfo=timezone.utc)
    else:
        start = datetime.now(timezone.utc)

    rows = sample_cycle(get_provider(args.provider), start, step_hours=args.step_hours, days=args.days)

    prev_bucket = None
    print(f"{'UTC':25s} {'elong':>8s} {'age':>7s}  inc  phase")
    for t, ph in rows:
        mark = "*" if ph.bucket != prev_bucket else " "
        print(f"{t.isoformat(timespec='minutes'):25s} {ph.elongation_deg:8.3f} {ph.age_days:7.3f}  "
              f"{'y' if ph.is_increasing else 'n'}  {mark}{phase.PHASE_NAMES[ph.bucket]}")
        prev_bucket = ph.bucket

    if args.plot:
        plt = _need_matplotlib()
        xs = [(t - start).total_seconds() / 86400.0 for t, _ in rows]
        fig, (ax1, ax2) = plt.subplots(2, 1, sharex=True, figsize=(10, 6))
        ax1.plot(xs, [ph.age_days for _, ph in rows], lw=1)
        ax1.set_ylabel("age (days)")
        ax1.grid(True, alpha=0.3)
        ax2.step(xs, [ph.bucket for _, ph in rows], where="post")
        ax2.set_yticks(range(len(phase.PHASE_NAMES)))
        ax2.set_yticklabels(phase.PHASE_NAMES, fontsize=8)
        ax2.set_xlabel(f"days since {start.isoformat(timespec='minutes')}")
        ax2.grid(True, alpha=0.3)
        fig.suptitle("Moon phase classification")
        fig.tight_layout()
        plt.show()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
