from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..core.types import HorizonMovementState, HorizonState, Location
from ..reference import ext_math as em
from ..reference import solar
from ..reference.time_scales import JulianDate


class SolarPhase(Enum):
    DAY = "day"
    CIVIL_DAWN = "civil_dawn"
    CIVIL_DUSK = "civil_dusk"
    NAUTICAL_DAWN = "nautical_dawn"
    NAUTICAL_DUSK = "nautical_dusk"
    ASTRONOMICAL_DAWN = "astronomical_dawn"
    ASTRONOMICAL_DUSK = "astronomical_dusk"
    NIGHT = "night"


class LightState(Enum):
    GOLDEN_HOUR_DAWN = "golden_hour_dawn"
    GOLDEN_HOUR_DUSK = "golden_hour_dusk"
    BLUE_HOUR_DAWN = "blue_hour_dawn"
    BLUE_HOUR_DUSK = "blue_hour_dusk"


# (low, high) true altitude in degrees, both ends inclusive; first match wins
TWILIGHT_RANGES: Tuple[Tuple[float, float, SolarPhase, SolarPhase], ...] = (
    (-6.0, 0.0, SolarPhase.CIVIL_DAWN, SolarPhase.CIVIL_DUSK),
    (-12.0, -6.0, SolarPhase.NAUTICAL_DAWN, SolarPhase.NAUTICAL_DUSK),
    (-18.0, -12.0, SolarPhase.ASTRONOMICAL_DAWN, SolarPhase.ASTRONOMICAL_DUSK),
)

LIGHT_RANGES: Tuple[Tuple[float, float, LightState, LightState], ...] = (
    (-8.0, -4.0, LightState.BLUE_HOUR_DAWN, LightState.BLUE_HOUR_DUSK),
    (-6.0, 6.0, LightState.GOLDEN_HOUR_DAWN, LightState.GOLDEN_HOUR_DUSK),
)


@dataclass(frozen=True)
class SolarState:
    """
    Snapshot of the Sun for one observer and instant.

    Angles in degrees (the *_rad fields keep the raw radians), distance in km.
    """
    azimuth: float
    distance: float
    atmospheric_refraction_rad: float
    true_altitude_rad: float
    parallax_rad: float

    @property
    def atmospheric_refraction(self) -> float:
        return math.degrees(self.atmospheric_refraction_rad)

    @property
    def true_altitude(self) -> float:
        return math.degrees(self.true_altitude_rad)

    @property
    def parallax(self) -> float:
        return math.degrees(self.parallax_rad)

    @property
    def altitude(self) -> float:
        """Apparent altitude of the Sun's centre."""
        return self.true_altitude + (self.atmospheric_refraction - self.parallax)

    def altitude_at(self, angular_position: float) -> float:
        """Apparent altitude of a point on the disc: +1 upper limb, -1 lower limb, 0 centre."""
        return self.altitude + angular_position * math.degrees(solar.angular_radius(self.distance))

    @property
    def horizon_state(self) -> HorizonState:
        return HorizonState.UP if self.altitude_at(1.0) > 0.0 else HorizonState.DOWN

    @property
    def horizon_movement_state(self) -> HorizonMovementState:
        return HorizonMovementState.from_azimuth(self.azimuth)

    @property
    def solar_phase(self) -> SolarPhase:
        rising = self.horizon_movement_state is HorizonMovementState.RISING
        alt = self.true_altitude
        for low, high, dawn, dusk in TWILIGHT_RANGES:
            if low <= alt <= high:
                return dawn if rising else dusk
        return SolarPhase.DAY if alt > 0.0 else SolarPhase.NIGHT

    @property
    def light_states(self) -> Tuple[LightState, ...]:
        rising = self.horizon_movement_state is HorizonMovementState.RISING
        alt = self.true_altitude
        return tuple(
            dawn if rising else dusk
            for low, high, dawn, dusk in LIGHT_RANGES
            if low <= alt <= high
        )


def solar_state_at(jd: JulianDate, location: Location, height: Optional[float] = None) -> SolarState:
    if height is None:
        height = location.height
    pos = solar.position_horizontal(jd, location.latitude, location.longitude)
    return SolarState(
        azimuth=(math.degrees(pos.phi) + 180.0) % 360.0,
        distance=pos.r,
        atmospheric_refraction_rad=em.refraction(pos.theta),
        true_altitude_rad=pos.theta,
        parallax_rad=em.parallax(max(height, 0.0), pos.r),
    )
