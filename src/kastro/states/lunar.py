from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from ..core.events import LunarEventType
from ..core.types import HorizonMovementState, HorizonState, Location
from ..reference import ext_math as em
from ..reference import lunar, solar
from ..reference.time_scales import JulianDate
from ..reference.vectors import equatorial_to_horizontal

SUPER_MOON_KM = 360000.0
MICRO_MOON_KM = 405000.0


# ============================================================
# Phase wheel
# ============================================================

class LunarPhase(Enum):
    NEW_MOON = "new_moon"
    WAXING_CRESCENT = "waxing_crescent"
    FIRST_QUARTER = "first_quarter"
    WAXING_GIBBOUS = "waxing_gibbous"
    FULL_MOON = "full_moon"
    WANING_GIBBOUS = "waning_gibbous"
    LAST_QUARTER = "last_quarter"
    WANING_CRESCENT = "waning_crescent"

    @property
    def is_primary(self) -> bool:
        return self in PRIMARY_PHASES

    @property
    def event_type(self) -> Optional[LunarEventType]:
        """Matching event kind for the four primary phases, else None."""
        return PRIMARY_PHASES.get(self)


_P = LunarPhase

PRIMARY_PHASES: Dict[LunarPhase, LunarEventType] = {
    _P.NEW_MOON: LunarEventType.NEW_MOON,
    _P.FIRST_QUARTER: LunarEventType.FIRST_QUARTER,
    _P.FULL_MOON: LunarEventType.FULL_MOON,
    _P.LAST_QUARTER: LunarEventType.LAST_QUARTER,
}

# [start, end) in degrees of elongation, 0 = new moon
INTERMEDIATE_RANGES: Tuple[Tuple[float, float, LunarPhase], ...] = (
    (0.0, 90.0, _P.WAXING_CRESCENT),
    (90.0, 180.0, _P.WAXING_GIBBOUS),
    (180.0, 270.0, _P.WANING_GIBBOUS),
    (270.0, 360.0, _P.WANING_CRESCENT),
)

# centre of each phase on the wheel, in wheel order
_WHEEL: Tuple[Tuple[float, LunarPhase], ...] = (
    (0.0, _P.NEW_MOON),
    (45.0, _P.WAXING_CRESCENT),
    (90.0, _P.FIRST_QUARTER),
    (135.0, _P.WAXING_GIBBOUS),
    (180.0, _P.FULL_MOON),
    (225.0, _P.WANING_GIBBOUS),
    (270.0, _P.LAST_QUARTER),
    (315.0, _P.WANING_CRESCENT),
)


def closest_moon_phase(angle_deg: float) -> LunarPhase:
    """Nearest of the 8 named phases; past 337.5° it wraps back to NEW_MOON."""
    a = em.wrap_deg(angle_deg)
    if a > 315.0 + (360.0 - 315.0) / 2.0:
        return _P.NEW_MOON
    return min(_WHEEL, key=lambda item: abs(item[0] - a))[1]


def lunar_phase(angle_deg: float) -> LunarPhase:
    """
    Intermediate phase the Moon is in. Primary phases are instants, so an
    angle exactly on one maps to the phase that follows it.
    """
    a = em.wrap_deg(angle_deg)
    for start, end, phase in INTERMEDIATE_RANGES:
        if start <= a < end:
            return phase
    raise AssertionError(f"unreachable: {a}")


# ============================================================
# Position
# ============================================================

@dataclass(frozen=True)
class LunarPosition:
    """Topocentric Moon position: degrees, km."""
    distance: float
    azimuth: float
    altitude: float
    parallactic_angle_rad: float

    @property
    def parallactic_angle(self) -> float:
        return math.degrees(self.parallactic_angle_rad)

    @property
    def is_super_moon(self) -> bool:
        return self.distance < SUPER_MOON_KM

    @property
    def is_micro_moon(self) -> bool:
        return self.distance > MICRO_MOON_KM


def lunar_position_at(jd: JulianDate, location: Location) -> LunarPosition:
    mc = lunar.position(jd)
    lat_rad = math.radians(location.latitude)
    h = jd.gmst + math.radians(location.longitude) - mc.phi
    horizontal = equatorial_to_horizontal(h, mc.theta, mc.r, location.latitude)
    pa = math.atan2(math.sin(h), math.tan(lat_rad) * math.cos(mc.theta) - math.sin(mc.theta) * math.cos(h))
    return LunarPosition(
        distance=mc.r,
        azimuth=(math.degrees(horizontal.phi) + 180.0) % 360.0,
        altitude=math.degrees(horizontal.theta + em.refraction(horizontal.theta)),
        parallactic_angle_rad=pa,
    )


# ============================================================
# Illumination
# ============================================================

@dataclass(frozen=True)
class LunarIllumination:
    """
    fraction: illuminated share of the disc, 0..1.
    phase: signed phase angle in degrees; 0 full, ±180 new, negative waxing.
    illumination_angle: position angle of the bright limb's midpoint, degrees.
    """
    fraction: float
    phase: float
    illumination_angle: float

    @property
    def closest_phase(self) -> LunarPhase:
        return closest_moon_phase(self.phase + 180.0)


def lunar_illumination_at(jd: JulianDate) -> LunarIllumination:
    s = solar.position(jd)
    m = lunar.position(jd)
    cos_elong = max(-1.0, min(1.0, m.dot(s) / (m.r * s.r)))
    phi = math.pi - math.acos(cos_elong)
    sun_moon = m.cross(s)
    angle = math.atan2(
        math.cos(s.theta) * math.sin(s.phi - m.phi),
        math.sin(s.theta) * math.cos(m.theta) - math.cos(s.theta) * math.sin(m.theta) * math.cos(s.phi - m.phi),
    )
    return LunarIllumination(
        fraction=(1.0 + math.cos(phi)) / 2.0,
        phase=math.degrees(math.copysign(phi, sun_moon.theta)),
        illumination_angle=math.degrees(angle),
    )


# ============================================================
# State
# ============================================================

@dataclass(frozen=True)
class LunarState:
    position: LunarPosition
    illumination: LunarIllumination

    @property
    def phase(self) -> LunarPhase:
        return lunar_phase(self.illumination.phase + 180.0)

    @property
    def horizon_state(self) -> HorizonState:
        return HorizonState.UP if self.position.altitude > 0.0 else HorizonState.DOWN

    @property
    def horizon_movement_state(self) -> HorizonMovementState:
        return HorizonMovementState.from_azimuth(self.position.azimuth)


def lunar_state_at(jd: JulianDate, location: Location) -> LunarState:
    return LunarState(position=lunar_position_at(jd, location), illumination=lunar_illumination_at(jd))
