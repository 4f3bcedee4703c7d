from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Iterator, Optional, Tuple

from ..core.config import DEFAULT_LIMIT, limit_days
from ..core.events import ALL_HORIZON_EVENTS, LunarEvent, LunarEventType
from ..core.types import LocationLike, resolve_location
from ..reference import ext_math as em
from ..reference import lunar
from ..reference.time_scales import JulianDate, datetime_utc_to_jd
from .hour_scan import crossings, hour_windows, in_window
from .sequences import EventSequence, log_debug

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Crossing:
    rising: bool
    rt: float    # event, hours from the sequence start
    hour: int    # window centre it was found in


class LunarHorizonEventSequence(EventSequence[LunarEvent]):
    """
    Moonrise and moonset, alternating, forwards or backwards in time.

    Every search is expressed as an hour offset from the one fixed start
    Julian Date; the reference is never re-based onto the last event,
    which keeps the offsets of successive searches consistent.
    """

    def __init__(
        self,
        start: datetime,
        location: LocationLike,
        limit: Optional[timedelta] = DEFAULT_LIMIT,
        requested: Iterable[LunarEventType] = ALL_HORIZON_EVENTS,
        reverse: bool = False,
    ) -> None:
        self.start_jd = datetime_utc_to_jd(start)
        self.location = resolve_location(location=location)
        self.limit_days = limit_days(limit)
        self.requested: Tuple[LunarEventType, ...] = tuple(dict.fromkeys(LunarEventType(k) for k in requested))
        bad = [k for k in self.requested if k not in ALL_HORIZON_EVENTS]
        if bad:
            raise ValueError(f"not lunar horizon events: {[k.value for k in bad]}")
        self.reverse = reverse
        self._refraction = em.apparent_refraction(0.0)

    def _corrected_altitude(self, hour: float) -> float:
        jd = JulianDate(self.start_jd).at_hour(hour)
        pos = lunar.position_horizontal(jd, self.location.latitude, self.location.longitude)
        hc = em.parallax(self.location.height, pos.r) - self._refraction - lunar.angular_radius(pos.r)
        return pos.theta - hc

    def _search(self, start_hour: int, rising: bool, after: Optional[float] = None) -> Optional[_Crossing]:
        """First crossing from `start_hour` on; with `after`, only crossings strictly past that hour offset."""
        limit_hours = self.limit_days * 24.0
        for hour, y_minus, qi in hour_windows(
            self._corrected_altitude,
            limit_hours=limit_hours,
            reverse=self.reverse,
            start_hour=start_hour,
        ):
            up, down = crossings(hour, y_minus, qi)
            rt = up if rising else down
            if rt is None or not in_window(rt, limit_hours, self.reverse):
                continue
            if after is not None and ((rt >= after) if self.reverse else (rt <= after)):
                continue
            return _Crossing(rising, rt, hour)
        return None

    def _first(self) -> Optional[_Crossing]:
        rise = self._search(0, rising=True)
        set_ = self._search(0, rising=False)
        if rise is None or set_ is None:
            return rise or set_
        if self.reverse:
            return set_ if rise.rt < set_.rt else rise
        return rise if rise.rt < set_.rt else set_

    def _generate(self) -> Iterator[LunarEvent]:
        if not self.requested:
            return
        base = JulianDate(self.start_jd)

        found = self._first()
        while found is not None:
            kind = LunarEventType.MOONRISE if found.rising else LunarEventType.MOONSET
            log_debug(LOGGER, "lunar_horizon_event", kind=kind.value, hour=found.rt, reverse=self.reverse)
            if kind in self.requested:
                yield LunarEvent(kind, base.at_hour(found.rt).datetime)
            # rise and set alternate; the other crossing may share this window
            found = self._search(found.hour, rising=not found.rising, after=found.rt)
        log_debug(LOGGER, "lunar_horizon_exhausted", reverse=self.reverse)
