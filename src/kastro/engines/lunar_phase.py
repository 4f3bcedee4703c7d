from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta
from typing import Iterable, Iterator, List, Optional, Tuple

from ..core.config import DEFAULT_CONFIG, DEFAULT_LIMIT, SearchConfig, limit_days
from ..core.events import ALL_LUNAR_PHASES, PHASE_ANGLES, LunarEvent, LunarEventType
from ..reference import lunar, solar
from ..reference.ext_math import PI2
from ..reference.time_scales import (
    DAYS_PER_JULIAN_CENTURY,
    JulianDate,
    datetime_utc_to_jd,
    jd_from_julian_century,
    julian_century_from_jd,
)
from ._solver import pegasus
from .sequences import EventSequence, is_within_limit, log_debug, sorted_by_reversible

LOGGER = logging.getLogger(__name__)


def phase_offset(jc: float, phase_rad: float, light_time_jc: float) -> float:
    """
    Moon minus Sun ecliptic longitude minus `phase_rad`, wrapped to [-π, π).

    The Sun is taken `light_time_jc` earlier (aberration by light time).
    Zero exactly at the requested phase and rising through it.
    """
    sun = solar.position_equatorial(JulianDate.from_julian_century(jc - light_time_jc))
    moon = lunar.position_equatorial(JulianDate.from_julian_century(jc))
    diff = moon.phi - sun.phi - phase_rad
    while diff < 0.0:
        diff += PI2
    return math.fmod(diff + math.pi, PI2) - math.pi


class LunarPhaseSequence(EventSequence[LunarEvent]):
    """
    New moon, first quarter, full moon and last quarter.

    Coarse weekly steps bracket each phase, then Pegasus pins it down.
    Each batch yields the next occurrence of every requested phase; the
    following batch starts a little past the last of them.
    """

    def __init__(
        self,
        start: datetime,
        limit: Optional[timedelta] = DEFAULT_LIMIT,
        requested: Iterable[LunarEventType] = ALL_LUNAR_PHASES,
        reverse: bool = False,
        config: SearchConfig = DEFAULT_CONFIG,
    ) -> None:
        self.start_jd = datetime_utc_to_jd(start)
        self.limit_days = limit_days(limit)
        self.requested: Tuple[LunarEventType, ...] = tuple(dict.fromkeys(LunarEventType(k) for k in requested))
        bad = [k for k in self.requested if k not in PHASE_ANGLES]
        if bad:
            raise ValueError(f"not lunar phases: {[k.value for k in bad]}")
        self.reverse = reverse
        self.config = config

    def _generate(self) -> Iterator[LunarEvent]:
        restart_days = self.config.phase_restart_seconds / 86400.0
        sign = -1.0 if self.reverse else 1.0

        cursor = self.start_jd
        while True:
            batch = self._next_batch(cursor)
            yield from batch
            if not batch:
                log_debug(LOGGER, "lunar_phase_exhausted", jd=cursor, reverse=self.reverse)
                return
            cursor = JulianDate.from_datetime(batch[-1].time).value + sign * restart_days

    def _next_batch(self, cursor: float) -> List[LunarEvent]:
        found = []
        for kind in self.requested:
            event = self._next_phase(cursor, kind)
            if event is not None:
                found.append(event)
        return sorted_by_reversible(found, self.reverse, key=lambda e: e.time)

    def _next_phase(self, cursor: float, kind: LunarEventType) -> Optional[LunarEvent]:
        cfg = self.config
        phase_rad = math.radians(PHASE_ANGLES[kind])
        light_time = cfg.sun_light_time_minutes / (1440.0 * DAYS_PER_JULIAN_CENTURY)
        step = cfg.phase_step_days / DAYS_PER_JULIAN_CENTURY
        accuracy = cfg.phase_accuracy_seconds / 86400.0 / DAYS_PER_JULIAN_CENTURY

        def f(jc: float) -> float:
            return phase_offset(jc, phase_rad, light_time)

        t0 = julian_century_from_jd(cursor - cfg.phase_step_days if self.reverse else cursor)
        t1 = t0 + step
        d0, d1 = f(t0), f(t1)
        # need a sign change on the rising slope, not the wrap-around jump
        while d0 * d1 > 0.0 or d1 < d0:
            if self.reverse:
                t1, d1 = t0, d0
                t0 -= step
                d0 = f(t0)
            else:
                t0, d0 = t1, d1
                t1 += step
                d1 = f(t1)

        jd = jd_from_julian_century(pegasus(t0, t1, accuracy, f, max_iterations=cfg.max_iterations))
        limit_jd = self.start_jd + (-1.0 if self.reverse else 1.0) * self.limit_days
        if not is_within_limit(self.reverse, jd, limit_jd):
            return None
        event = LunarEvent(kind, JulianDate(jd).datetime)
        log_debug(LOGGER, "lunar_phase_event", kind=kind.value, time=event.time.isoformat())
        return event
