from __future__ import annotations

import argparse
import importlib
import logging
import sys
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from .core.errors import KastroError


def _parse_iso(s: str) -> datetime:
    """ISO-8601 instant; a trailing Z or a missing offset both mean UTC."""
    if s.endswith(("Z", "z")):
        s = s[:-1] + "+00:00"
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s %(message)s")


def _run_module_main(modpath: str, argv: List[str]) -> int:
    mod = importlib.import_module(modpath)
    return int(mod.main(argv) or 0)


def _add_observer(p: argparse.ArgumentParser) -> None:
    p.add_argument("--lat", type=float, required=True, help="Observer latitude in degrees (positive North)")
    p.add_argument("--lon", type=float, required=True, help="Observer longitude in degrees (positive East)")
    p.add_argument("--verbose", action="store_true", help="Log search progress at DEBUG level")


def _add_window(p: argparse.ArgumentParser) -> None:
    p.add_argument("--start", type=_parse_iso, default=None, help="ISO-8601 start instant (default: now, UTC)")
    g = p.add_mutually_exclusive_group()
    g.add_argument("--days", type=float, default=365.0, help="Search window length in days (default: 365)")
    g.add_argument("--infinite", action="store_true", help="No window limit (use with --count)")
    p.add_argument("--count", type=int, default=None, help="Stop after this many events")
    p.add_argument("--event", action="append", default=[], help="Event kind (repeatable)")
    p.add_argument("--all", action="store_true", help="Every event kind of this body")
    p.add_argument("--reverse", action="store_true", help="Search backwards in time")


def _limit(args: argparse.Namespace) -> Optional[timedelta]:
    if args.infinite:
        return None
    return timedelta(days=args.days)


def _print_events(events: Iterable, count: Optional[int]) -> int:
    for i, event in enumerate(events):
        if count is not None and i >= count:
            break
        print(event)
    return 0


def _guarded(fn, args: argparse.Namespace) -> int:
    try:
        return fn(args)
    except (KastroError, ValueError) as e:
        print(f"kastro: error: {e}", file=sys.stderr)
        return 2


# ============================================================
# Commands
# ============================================================

def cmd_sun(argv: List[str]) -> int:
    p = argparse.ArgumentParser(prog="kastro sun", description="List sunrise, sunset, twilight and culmination events.")
    _add_observer(p)
    _add_window(p)
    args = p.parse_args(argv)
    _setup_logging(args.verbose)

    def run(a: argparse.Namespace) -> int:
        from .api import SolarEventSequence
        from .core.events import ALL_SOLAR_EVENTS, SIMPLE_SOLAR_EVENTS

        if a.infinite and a.count is None:
            raise ValueError("--infinite needs --count")
        kinds = ALL_SOLAR_EVENTS if a.all else (a.event or SIMPLE_SOLAR_EVENTS)
        seq = SolarEventSequence(
            a.start or _now(), a.lat, a.lon, limit=_limit(a), requested=kinds, reverse=a.reverse
        )
        return _print_events(seq, a.count)

    return _guarded(run, args)


def cmd_moon(argv: List[str]) -> int:
    p = argparse.ArgumentParser(prog="kastro moon", description="List lunar phases, moonrise and moonset.")
    _add_observer(p)
    _add_window(p)
    args = p.parse_args(argv)
    _setup_logging(args.verbose)

    def run(a: argparse.Namespace) -> int:
        from .api import LunarEventSequence
        from .core.events import ALL_LUNAR_EVENTS

        if a.infinite and a.count is None:
            raise ValueError("--infinite needs --count")
        kinds = ALL_LUNAR_EVENTS if a.all or not a.event else a.event
        seq = LunarEventSequence(
            a.start or _now(), a.lat, a.lon, limit=_limit(a), requested=kinds, reverse=a.reverse
        )
        return _print_events(seq, a.count)

    return _guarded(run, args)


def cmd_state(argv: List[str]) -> int:
    p = argparse.ArgumentParser(prog="kastro state", description="Print the Sun and Moon state for an observer.")
    _add_observer(p)
    p.add_argument("--at", type=_parse_iso, default=None, help="ISO-8601 instant (default: now, UTC)")
    args = p.parse_args(argv)
    _setup_logging(args.verbose)

    def run(a: argparse.Namespace) -> int:
        from .api import calculate_lunar_state, calculate_solar_state

        at = a.at or _now()
        sun = calculate_solar_state(at, a.lat, a.lon)
        moon = calculate_lunar_state(at, a.lat, a.lon)

        print(f"Time: {at.astimezone(timezone.utc).isoformat()}")
        print()
        print("Sun:")
        print(f"  Azimuth      = {sun.azimuth:.3f} deg")
        print(f"  Altitude     = {sun.altitude:.3f} deg")
        print(f"  Distance     = {sun.distance:.0f} km")
        print(f"  Horizon      = {sun.horizon_state.value} ({sun.horizon_movement_state.value})")
        print(f"  Phase        = {sun.solar_phase.value}")
        lights = ", ".join(s.value for s in sun.light_states) or "-"
        print(f"  Light        = {lights}")
        print()
        print("Moon:")
        print(f"  Azimuth      = {moon.position.azimuth:.3f} deg")
        print(f"  Altitude     = {moon.position.altitude:.3f} deg")
        print(f"  Distance     = {moon.position.distance:.0f} km")
        print(f"  Illuminated  = {moon.illumination.fraction * 100.0:.1f} %")
        print(f"  Phase        = {moon.phase.value} (closest: {moon.illumination.closest_phase.value})")
        print(f"  Horizon      = {moon.horizon_state.value} ({moon.horizon_movement_state.value})")
        return 0

    return _guarded(run, args)


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="kastro", description="Sun and Moon event and state calculator.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("sun", help="Solar events (rise/set, twilight, golden/blue hour, noon/nadir)")
    sub.add_parser("moon", help="Lunar events (phases, moonrise/moonset)")
    sub.add_parser("state", help="Sun and Moon state at an instant")
    sub.add_parser("plot", help="Plot Sun and Moon altitude with events (needs matplotlib)")

    args, rest = p.parse_known_args(argv)

    if args.cmd == "sun":
        return cmd_sun(rest)

    if args.cmd == "moon":
        return cmd_moon(rest)

    if args.cmd == "state":
        return cmd_state(rest)

    if args.cmd == "plot":
        return _run_module_main("kastro.diagnostics.altitude_plot", rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
