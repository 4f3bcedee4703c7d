from __future__ import annotations

import heapq
import logging
import math
from datetime import datetime, timedelta
from typing import Callable, Iterable, Iterator, Optional, Tuple

from ..core.config import DEFAULT_CONFIG, DEFAULT_LIMIT, SearchConfig, limit_days
from ..core.events import ANGLE_KINDS, AngleSpec, SolarEvent, SolarEventType
from ..core.types import Location, LocationLike, resolve_location
from ..reference import ext_math as em
from ..reference import solar
from ..reference.time_scales import JulianDate, datetime_utc_to_jd
from .hour_scan import crossings, hour_windows, in_window
from .sequences import EventSequence, log_debug

LOGGER = logging.getLogger(__name__)


def corrected_sun_altitude(threshold: AngleSpec, location: Location) -> Callable[[JulianDate], float]:
    """
    Sun altitude relative to `threshold` (radians); zero at the event.

    Topocentric kinds also shift by parallax, by the limb offset and by
    refraction at the threshold.
    """
    angle_rad = math.radians(threshold.angle_deg)

    def f(jd: JulianDate) -> float:
        pos = solar.position_horizontal(jd, location.latitude, location.longitude)
        modifier = 0.0
        if threshold.is_topocentric:
            plx = em.parallax(location.height, pos.r)
            limb = threshold.angular_position * solar.angular_radius(pos.r)
            modifier = plx - limb - em.apparent_refraction(angle_rad)
        return pos.theta - (angle_rad + modifier)

    return f


class SolarAngleEventSequence(EventSequence[SolarEvent]):
    """
    Sunrise/sunset, twilight, golden and blue hour events.

    Each requested kind keeps its own cursor and is searched in windows of
    `config.chunk_hours`. After an event the kind's next search starts
    `config.angle_restart_hours` past it; after an empty window it starts
    past the window's end. The per-kind streams are merged by time.
    """

    def __init__(
        self,
        start: datetime,
        location: LocationLike,
        limit: Optional[timedelta] = DEFAULT_LIMIT,
        requested: Iterable[SolarEventType] = (),
        reverse: bool = False,
        config: SearchConfig = DEFAULT_CONFIG,
    ) -> None:
        self.start_jd = datetime_utc_to_jd(start)
        self.location = resolve_location(location=location)
        self.limit_days = limit_days(limit)
        self.requested: Tuple[SolarEventType, ...] = tuple(dict.fromkeys(SolarEventType(k) for k in requested))
        bad = [k for k in self.requested if k not in ANGLE_KINDS]
        if bad:
            raise ValueError(f"not solar angle events: {[k.value for k in bad]}")
        self.reverse = reverse
        self.config = config

    def _generate(self) -> Iterator[SolarEvent]:
        if not self.requested:
            return iter(())
        streams = [self._events_of_kind(kind) for kind in self.requested]
        return heapq.merge(*streams, key=lambda e: e.time, reverse=self.reverse)

    def _events_of_kind(self, kind: SolarEventType) -> Iterator[SolarEvent]:
        cfg = self.config
        chunk_days = cfg.chunk_hours / 24.0
        step_days = chunk_days + cfg.chunk_overlap_seconds / 86400.0
        restart_days = cfg.angle_restart_hours / 24.0
        sign = -1.0 if self.reverse else 1.0
        limit_jd = self.start_jd + sign * self.limit_days

        current = self.start_jd
        while (current >= limit_jd) if self.reverse else (current <= limit_jd):
            remaining_days = abs(limit_jd - current)
            local_hours = cfg.chunk_hours if chunk_days < remaining_days else remaining_days * 24.0
            log_debug(LOGGER, "solar_angle_chunk", kind=kind.value, jd=current, hours=local_hours, reverse=self.reverse)
            rt = self._first_crossing(JulianDate(current), kind, local_hours)
            if rt is None:
                current += sign * step_days
                continue
            event_jd = JulianDate(current).at_hour(rt)
            event = SolarEvent(kind, event_jd.datetime)
            log_debug(LOGGER, "solar_angle_event", kind=kind.value, time=event.time.isoformat())
            yield event
            current = event_jd.value + sign * restart_days

    def _first_crossing(self, base: JulianDate, kind: SolarEventType, limit_hours: float) -> Optional[float]:
        """Hour offset from `base` of the first crossing of `kind` in the window, or None."""
        threshold = ANGLE_KINDS[kind]
        altitude = corrected_sun_altitude(threshold, self.location)
        rising = threshold.direction == "dawn"

        for hour, y_minus, qi in hour_windows(
            lambda h: altitude(base.at_hour(h)),
            limit_hours=limit_hours,
            reverse=self.reverse,
        ):
            up, down = crossings(hour, y_minus, qi)
            rt = up if rising else down
            if rt is not None and in_window(rt, limit_hours, self.reverse):
                return rt
        return None
