# diagnostics/altitude_plot.py
from __future__ import annotations

import argparse
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional, Sequence

from ..api import LunarEventSequence, SolarEventSequence, calculate_lunar_position, calculate_solar_state
from ..core.events import ALL_LUNAR_EVENTS, ALL_SOLAR_EVENTS, LunarEvent, SolarEvent
from ..core.types import Location


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "kastro[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "kastro[diagnostics]"') from e


@dataclass(frozen=True)
class AltitudeSeries:
    hours: Any    # numpy array, hours after start
    sun: Any      # apparent Sun altitude, degrees
    moon: Any     # apparent Moon altitude, degrees
    solar_events: List[SolarEvent]
    lunar_events: List[LunarEvent]


def altitude_series(
    start: datetime,
    location: Location,
    hours: float = 48.0,
    step_minutes: float = 10.0,
) -> AltitudeSeries:
    """Sample both bodies over [start, start + hours] and collect the events in that span."""
    np = _need_numpy()
    if hours <= 0.0 or step_minutes <= 0.0:
        raise ValueError("hours and step_minutes must be positive")

    grid = np.arange(0.0, hours + step_minutes / 60.0 / 2.0, step_minutes / 60.0)
    times = [start + timedelta(hours=float(h)) for h in grid]
    sun = np.array([calculate_solar_state(t, location=location).altitude for t in times])
    moon = np.array([calculate_lunar_position(t, location=location).altitude for t in times])

    limit = timedelta(hours=hours)
    return AltitudeSeries(
        hours=grid,
        sun=sun,
        moon=moon,
        solar_events=list(SolarEventSequence(start, location=location, limit=limit, requested=ALL_SOLAR_EVENTS)),
        lunar_events=list(LunarEventSequence(start, location=location, limit=limit, requested=ALL_LUNAR_EVENTS)),
    )


def _offset_hours(start: datetime, events: Sequence) -> List[float]:
    return [(e.time - start).total_seconds() / 3600.0 for e in events]


def plot_series(series: AltitudeSeries, start: datetime, location: Location):
    plt = _need_matplotlib()

    fig, ax = plt.subplots(figsize=(11, 5))
    ax.plot(series.hours, series.sun, color="tab:orange", lw=1.6, label="Sun")
    ax.plot(series.hours, series.moon, color="0.35", lw=1.2, label="Moon")
    ax.axhline(0.0, color="k", lw=0.8)
    for level in (-6.0, -12.0, -18.0):
        ax.axhline(level, color="tab:blue", lw=0.5, ls=":")

    for x, e in zip(_offset_hours(start, series.solar_events), series.solar_events):
        ax.axvline(x, color="tab:orange", lw=0.5, alpha=0.5)
        ax.annotate(e.kind.value, (x, ax.get_ylim()[1]), rotation=90, fontsize=6, va="top", ha="right")
    for x, e in zip(_offset_hours(start, series.lunar_events), series.lunar_events):
        ax.axvline(x, color="0.35", lw=0.5, ls="--", alpha=0.6)
        ax.annotate(e.kind.value, (x, ax.get_ylim()[0]), rotation=90, fontsize=6, va="bottom", ha="right")

    ax.set_xlabel(f"hours after {start.astimezone(timezone.utc).isoformat()}")
    ax.set_ylabel("apparent altitude (deg)")
    ax.set_title(f"Sun and Moon altitude at {location.latitude:.3f}, {location.longitude:.3f}")
    ax.set_xlim(float(series.hours[0]), float(series.hours[-1]))
    ax.legend(loc="upper right", frameon=False)
    fig.tight_layout()
    return fig


def main(argv: Optional[List[str]] = None) -> int:
    from ..cli import _now, _parse_iso

    p = argparse.ArgumentParser(prog="kastro plot", description="Plot Sun and Moon altitude with their events.")
    p.add_argument("--lat", type=float, required=True)
    p.add_argument("--lon", type=float, required=True)
    p.add_argument("--start", type=_parse_iso, default=None, help="ISO-8601 start instant (default: now, UTC)")
    p.add_argument("--hours", type=float, default=48.0)
    p.add_argument("--step", type=float, default=10.0, help="Sampling step in minutes")
    p.add_argument("--out", default=None, help="Output image (default: show the window)")
    args = p.parse_args(argv)

    plt = _need_matplotlib()
    start = args.start or _now()
    location = Location(args.lat, args.lon)

    series = altitude_series(start, location, hours=args.hours, step_minutes=args.step)
    fig = plot_series(series, start, location)
    if args.out:
        fig.savefig(args.out, dpi=150)
        print(f"Saved: {args.out}")
    else:
        plt.show()
    plt.close(fig)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
