from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, Iterator, Optional, Union

from .core.config import DEFAULT_CONFIG, DEFAULT_LIMIT, SearchConfig
from .core.events import (
    ALL_LUNAR_EVENTS,
    SIMPLE_SOLAR_EVENTS,
    LunarEvent,
    LunarEventType,
    SolarEvent,
    SolarEventType,
    split_lunar_kinds,
    split_solar_kinds,
)
from .core.types import LocationLike, resolve_location
from .engines.culmination import NoonAndNadirSequence
from .engines.lunar_horizon import LunarHorizonEventSequence
from .engines.lunar_phase import LunarPhaseSequence
from .engines.sequences import EventSequence, merge_with
from .engines.solar_angle import SolarAngleEventSequence
from .reference import lunar
from .reference.time_scales import JulianDate
from .states.lunar import (
    LunarIllumination,
    LunarPosition,
    LunarState,
    lunar_illumination_at,
    lunar_position_at,
    lunar_state_at,
)
from .states.solar import SolarState, solar_state_at

SolarKind = Union[SolarEventType, str]
LunarKind = Union[LunarEventType, str]


# ============================================================
# Composite sequences
# ============================================================

class SolarEventSequence(EventSequence[SolarEvent]):
    """
    Every requested solar event from `start`, in time order (newest first
    when `reverse`). Lazy: an INFINITE limit only costs what is consumed.

    Give the observer as latitude/longitude in degrees or as `location`
    (a (lat, lon) pair or a Location).
    """

    def __init__(
        self,
        start: datetime,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        *,
        location: Optional[LocationLike] = None,
        limit: Optional[timedelta] = DEFAULT_LIMIT,
        requested: Iterable[SolarKind] = SIMPLE_SOLAR_EVENTS,
        reverse: bool = False,
        config: SearchConfig = DEFAULT_CONFIG,
    ) -> None:
        self.location = resolve_location(latitude, longitude, location)
        self.reverse = reverse
        angles, culminations = split_solar_kinds(requested)
        self._angles = SolarAngleEventSequence(
            start, self.location, limit=limit, requested=angles, reverse=reverse, config=config
        )
        self._culminations = NoonAndNadirSequence(
            start, self.location, limit=limit, requested=culminations, reverse=reverse, config=config
        )

    def _generate(self) -> Iterator[SolarEvent]:
        return merge_with(self._angles, self._culminations, self.reverse)


class LunarEventSequence(EventSequence[LunarEvent]):
    """Every requested lunar phase and moonrise/moonset, in time order."""

    def __init__(
        self,
        start: datetime,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        *,
        location: Optional[LocationLike] = None,
        limit: Optional[timedelta] = DEFAULT_LIMIT,
        requested: Iterable[LunarKind] = ALL_LUNAR_EVENTS,
        reverse: bool = False,
        config: SearchConfig = DEFAULT_CONFIG,
    ) -> None:
        self.location = resolve_location(latitude, longitude, location)
        self.reverse = reverse
        phases, horizon = split_lunar_kinds(requested)
        self._phases = LunarPhaseSequence(start, limit=limit, requested=phases, reverse=reverse, config=config)
        self._horizon = LunarHorizonEventSequence(
            start, self.location, limit=limit, requested=horizon, reverse=reverse
        )

    def _generate(self) -> Iterator[LunarEvent]:
        return merge_with(self._phases, self._horizon, self.reverse)


# ============================================================
# States
# ============================================================

def calculate_solar_state(
    time: datetime,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    *,
    location: Optional[LocationLike] = None,
    height: Optional[float] = None,
) -> SolarState:
    """
    Sun azimuth/altitude/distance and derived phase for an observer at `time`.

    `height` (metres) overrides the observer height; by default the
    location's own height is used.
    """
    return solar_state_at(JulianDate.from_datetime(time), resolve_location(latitude, longitude, location), height)


def calculate_lunar_position(
    time: datetime,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    *,
    location: Optional[LocationLike] = None,
) -> LunarPosition:
    return lunar_position_at(JulianDate.from_datetime(time), resolve_location(latitude, longitude, location))


def calculate_lunar_illumination(time: datetime) -> LunarIllumination:
    return lunar_illumination_at(JulianDate.from_datetime(time))


def calculate_lunar_distance(time: datetime) -> float:
    """Geocentric Moon distance in km."""
    return lunar.distance_km(JulianDate.from_datetime(time))


def calculate_lunar_state(
    time: datetime,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    *,
    location: Optional[LocationLike] = None,
) -> LunarState:
    return lunar_state_at(JulianDate.from_datetime(time), resolve_location(latitude, longitude, location))
