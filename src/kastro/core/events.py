from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Literal, Optional, Tuple


# ============================================================
# Solar event kinds
# ============================================================

class SolarEventType(Enum):
    SUNRISE = "sunrise"
    SUNSET = "sunset"
    SUNRISE_END = "sunrise_end"
    SUNSET_BEGIN = "sunset_begin"
    ASTRONOMICAL_DAWN = "astronomical_dawn"
    NAUTICAL_DAWN = "nautical_dawn"
    CIVIL_DAWN = "civil_dawn"
    DAY = "day"
    CIVIL_DUSK = "civil_dusk"
    NAUTICAL_DUSK = "nautical_dusk"
    ASTRONOMICAL_DUSK = "astronomical_dusk"
    NIGHT = "night"
    GOLDEN_HOUR_DAWN = "golden_hour_dawn"
    GOLDEN_HOUR_DAWN_END = "golden_hour_dawn_end"
    GOLDEN_HOUR_DUSK = "golden_hour_dusk"
    GOLDEN_HOUR_DUSK_END = "golden_hour_dusk_end"
    BLUE_HOUR_DAWN = "blue_hour_dawn"
    BLUE_HOUR_DAWN_END = "blue_hour_dawn_end"
    BLUE_HOUR_DUSK = "blue_hour_dusk"
    BLUE_HOUR_DUSK_END = "blue_hour_dusk_end"
    NOON = "noon"
    NADIR = "nadir"


Direction = Literal["dawn", "dusk"]


@dataclass(frozen=True)
class AngleSpec:
    """
    Altitude threshold of an angle event.

    angle_deg: threshold altitude of the Sun's centre.
    direction: crossed while rising ("dawn") or setting ("dusk").
    angular_position: for topocentric kinds, which limb touches the
      threshold (+1 upper, -1 lower); None for plain geocentric angles.
    """
    angle_deg: float
    direction: Direction
    angular_position: Optional[float] = None

    @property
    def is_topocentric(self) -> bool:
        return self.angular_position is not None


_S = SolarEventType

ANGLE_KINDS: Dict[SolarEventType, AngleSpec] = {
    _S.SUNRISE: AngleSpec(0.0, "dawn", 1.0),
    _S.SUNSET: AngleSpec(0.0, "dusk", 1.0),
    _S.SUNRISE_END: AngleSpec(0.0, "dawn", -1.0),
    _S.SUNSET_BEGIN: AngleSpec(0.0, "dusk", -1.0),

    _S.ASTRONOMICAL_DAWN: AngleSpec(-18.0, "dawn"),
    _S.NAUTICAL_DAWN: AngleSpec(-12.0, "dawn"),
    _S.CIVIL_DAWN: AngleSpec(-6.0, "dawn"),
    _S.DAY: AngleSpec(0.0, "dawn"),
    _S.CIVIL_DUSK: AngleSpec(0.0, "dusk"),
    _S.NAUTICAL_DUSK: AngleSpec(-6.0, "dusk"),
    _S.ASTRONOMICAL_DUSK: AngleSpec(-12.0, "dusk"),
    _S.NIGHT: AngleSpec(-18.0, "dusk"),

    _S.GOLDEN_HOUR_DAWN: AngleSpec(-6.0, "dawn"),
    _S.GOLDEN_HOUR_DAWN_END: AngleSpec(6.0, "dawn"),
    _S.GOLDEN_HOUR_DUSK: AngleSpec(6.0, "dusk"),
    _S.GOLDEN_HOUR_DUSK_END: AngleSpec(-6.0, "dusk"),

    _S.BLUE_HOUR_DAWN: AngleSpec(-8.0, "dawn"),
    _S.BLUE_HOUR_DAWN_END: AngleSpec(-4.0, "dawn"),
    _S.BLUE_HOUR_DUSK: AngleSpec(-4.0, "dusk"),
    _S.BLUE_HOUR_DUSK_END: AngleSpec(-8.0, "dusk"),
}

CULMINATION_KINDS: Tuple[SolarEventType, ...] = (_S.NOON, _S.NADIR)

SIMPLE_SOLAR_EVENTS: Tuple[SolarEventType, ...] = (_S.SUNRISE, _S.SUNSET, _S.NOON, _S.NADIR)
ALL_SOLAR_EVENTS: Tuple[SolarEventType, ...] = tuple(SolarEventType)


# ============================================================
# Lunar event kinds
# ============================================================

class LunarEventType(Enum):
    NEW_MOON = "new_moon"
    FIRST_QUARTER = "first_quarter"
    FULL_MOON = "full_moon"
    LAST_QUARTER = "last_quarter"
    MOONRISE = "moonrise"
    MOONSET = "moonset"


_L = LunarEventType

# Moon-minus-Sun ecliptic longitude at each primary phase (degrees).
PHASE_ANGLES: Dict[LunarEventType, float] = {
    _L.NEW_MOON: 0.0,
    _L.FIRST_QUARTER: 90.0,
    _L.FULL_MOON: 180.0,
    _L.LAST_QUARTER: 270.0,
}

ALL_LUNAR_PHASES: Tuple[LunarEventType, ...] = (_L.NEW_MOON, _L.FIRST_QUARTER, _L.LAST_QUARTER, _L.FULL_MOON)
ALL_HORIZON_EVENTS: Tuple[LunarEventType, ...] = (_L.MOONRISE, _L.MOONSET)
ALL_LUNAR_EVENTS: Tuple[LunarEventType, ...] = ALL_LUNAR_PHASES + ALL_HORIZON_EVENTS


# ============================================================
# Event values
# ============================================================

class _OrderedByTime:
    """Events sort by time only; kinds never break ties."""
    time: datetime

    def __lt__(self, other: "_OrderedByTime") -> bool:
        return self.time < other.time

    def __le__(self, other: "_OrderedByTime") -> bool:
        return self.time <= other.time

    def __gt__(self, other: "_OrderedByTime") -> bool:
        return self.time > other.time

    def __ge__(self, other: "_OrderedByTime") -> bool:
        return self.time >= other.time


@dataclass(frozen=True)
class SolarEvent(_OrderedByTime):
    kind: SolarEventType
    time: datetime

    def __str__(self) -> str:
        return f"{self.kind.value}\t{self.time.isoformat()}"


@dataclass(frozen=True)
class LunarEvent(_OrderedByTime):
    kind: LunarEventType
    time: datetime

    @property
    def is_phase(self) -> bool:
        return self.kind in PHASE_ANGLES

    def __str__(self) -> str:
        return f"{self.kind.value}\t{self.time.isoformat()}"


# ============================================================
# Request helpers
# ============================================================

def split_solar_kinds(kinds) -> Tuple[Tuple[SolarEventType, ...], Tuple[SolarEventType, ...]]:
    """(angle kinds, culmination kinds), order preserved, duplicates dropped."""
    kinds = tuple(dict.fromkeys(SolarEventType(k) for k in kinds))
    return (
        tuple(k for k in kinds if k in ANGLE_KINDS),
        tuple(k for k in kinds if k in CULMINATION_KINDS),
    )


def split_lunar_kinds(kinds) -> Tuple[Tuple[LunarEventType, ...], Tuple[LunarEventType, ...]]:
    """(phase kinds, horizon kinds), order preserved, duplicates dropped."""
    kinds = tuple(dict.fromkeys(LunarEventType(k) for k in kinds))
    return (
        tuple(k for k in kinds if k in PHASE_ANGLES),
        tuple(k for k in kinds if k in ALL_HORIZON_EVENTS),
    )
