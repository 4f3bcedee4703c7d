from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Iterable, Iterator, List, Optional

from ..core.config import DEFAULT_CONFIG, DEFAULT_LIMIT, SearchConfig, limit_days
from ..core.events import CULMINATION_KINDS, SolarEvent, SolarEventType
from ..core.types import LocationLike, resolve_location
from ..reference import solar
from ..reference.time_scales import JulianDate, datetime_utc_to_jd
from ._solver import readjust_max, readjust_min
from .hour_scan import hour_windows, in_window
from .sequences import EventSequence, is_outside_limit, is_within_limit, log_debug, sorted_by_reversible

LOGGER = logging.getLogger(__name__)


class NoonAndNadirSequence(EventSequence[SolarEvent]):
    """
    Solar culminations: NOON (highest altitude) and NADIR (lowest).

    Each batch finds the next noon and/or nadir from a cursor, sharpens
    them with the extremum refiner and then restarts just past the last
    one found.
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
        requested = tuple(dict.fromkeys(SolarEventType(k) for k in requested))
        bad = [k for k in requested if k not in CULMINATION_KINDS]
        if bad:
            raise ValueError(f"not culmination events: {[k.value for k in bad]}")
        self.want_noon = SolarEventType.NOON in requested
        self.want_nadir = SolarEventType.NADIR in requested
        self.reverse = reverse
        self.config = config

    def _true_altitude(self, jd: JulianDate) -> float:
        return solar.position_horizontal(jd, self.location.latitude, self.location.longitude).theta

    def _generate(self) -> Iterator[SolarEvent]:
        if not (self.want_noon or self.want_nadir):
            return
        sign = -1.0 if self.reverse else 1.0
        limit_jd = self.start_jd + sign * self.limit_days
        restart_days = self.config.culmination_restart_hours / 24.0

        cursor = self.start_jd
        while True:
            batch = self._next_batch(cursor, limit_jd)
            yield from batch
            if not batch:
                log_debug(LOGGER, "culmination_exhausted", jd=cursor, reverse=self.reverse)
                return
            last_jd = JulianDate.from_datetime(batch[-1].time).value
            if not is_within_limit(self.reverse, last_jd, limit_jd):
                return
            # noon and nadir are ~12 h apart, so skipping an hour never loses one
            cursor = last_jd + sign * restart_days

    def _next_batch(self, cursor: float, limit_jd: float) -> List[SolarEvent]:
        base = JulianDate(cursor)
        limit_hours = abs(limit_jd - cursor) * 24.0
        if is_outside_limit(self.reverse, cursor, limit_jd):
            return []

        def altitude(h: float) -> float:
            return self._true_altitude(base.at_hour(h))

        noon: Optional[float] = None
        nadir: Optional[float] = None
        for hour, _, qi in hour_windows(altitude, limit_hours=limit_hours, reverse=self.reverse):
            if abs(qi.xe) <= 1.0:
                xe_hour = qi.xe + hour
                if (xe_hour <= 0.0) if self.reverse else (xe_hour >= 0.0):
                    if qi.is_maximum:
                        if noon is None and self.want_noon:
                            noon = xe_hour
                    elif nadir is None and self.want_nadir:
                        nadir = xe_hour
            if (noon is not None or not self.want_noon) and (nadir is not None or not self.want_nadir):
                break

        cfg = self.config
        found = []
        if noon is not None:
            noon = readjust_max(noon, cfg.culmination_frame_hours, cfg.culmination_depth, altitude)
            if in_window(noon, limit_hours, self.reverse):
                found.append(SolarEvent(SolarEventType.NOON, base.at_hour(noon).datetime))
        if nadir is not None:
            nadir = readjust_min(nadir, cfg.culmination_frame_hours, cfg.culmination_depth, altitude)
            if in_window(nadir, limit_hours, self.reverse):
                found.append(SolarEvent(SolarEventType.NADIR, base.at_hour(nadir).datetime))

        for event in found:
            log_debug(LOGGER, "culmination_event", kind=event.kind.value, time=event.time.isoformat())
        return sorted_by_reversible(found, self.reverse, key=lambda e: e.time)
