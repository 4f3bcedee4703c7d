"""kastro public API.

Keep this surface small: users should mostly interact with the sequences,
kinds and state calculators re-exported here.
"""

from .api import (
    LunarEventSequence,
    SolarEventSequence,
    calculate_lunar_distance,
    calculate_lunar_illumination,
    calculate_lunar_position,
    calculate_lunar_state,
    calculate_solar_state,
)
from .core.config import DEFAULT_CONFIG, DEFAULT_LIMIT, INFINITE, SearchConfig
from .core.errors import ConvergenceError, KastroError
from .core.events import (
    ALL_HORIZON_EVENTS,
    ALL_LUNAR_EVENTS,
    ALL_LUNAR_PHASES,
    ALL_SOLAR_EVENTS,
    SIMPLE_SOLAR_EVENTS,
    LunarEvent,
    LunarEventType,
    SolarEvent,
    SolarEventType,
)
from .core.types import HorizonMovementState, HorizonState, Location
from .engines.lunar_horizon import LunarHorizonEventSequence
from .engines.lunar_phase import LunarPhaseSequence
from .states.lunar import (
    LunarIllumination,
    LunarPhase,
    LunarPosition,
    LunarState,
    closest_moon_phase,
    lunar_phase,
)
from .states.solar import LightState, SolarPhase, SolarState

__all__ = [
    "SolarEventSequence",
    "LunarEventSequence",
    "LunarHorizonEventSequence",
    "LunarPhaseSequence",
    "calculate_solar_state",
    "calculate_lunar_position",
    "calculate_lunar_illumination",
    "calculate_lunar_distance",
    "calculate_lunar_state",
    "SearchConfig",
    "DEFAULT_CONFIG",
    "DEFAULT_LIMIT",
    "INFINITE",
    "KastroError",
    "ConvergenceError",
    "SolarEvent",
    "SolarEventType",
    "LunarEvent",
    "LunarEventType",
    "SIMPLE_SOLAR_EVENTS",
    "ALL_SOLAR_EVENTS",
    "ALL_LUNAR_PHASES",
    "ALL_HORIZON_EVENTS",
    "ALL_LUNAR_EVENTS",
    "Location",
    "HorizonState",
    "HorizonMovementState",
    "SolarState",
    "SolarPhase",
    "LightState",
    "LunarPosition",
    "LunarIllumination",
    "LunarState",
    "LunarPhase",
    "closest_moon_phase",
    "lunar_phase",
]

__version__ = "0.1.0"
