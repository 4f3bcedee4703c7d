from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional


# ============================================================
# Search window
# ============================================================

# Pass as `limit` for a sequence that never ends on its own.
INFINITE = None

DEFAULT_LIMIT = timedelta(days=365)


def limit_days(limit: Optional[timedelta]) -> float:
    """
    Search limit as a day count; `INFINITE` maps to math.inf.

    Windows are kept as Julian Date floats so an unbounded limit never
    has to be added to a datetime.
    """
    if limit is None:
        return math.inf
    if not isinstance(limit, timedelta):
        raise TypeError(f"limit must be a timedelta or INFINITE, got {type(limit).__name__}")
    if limit < timedelta(0):
        raise ValueError("limit must not be negative")
    return limit.total_seconds() / 86400.0


# ============================================================
# Search tunables
# ============================================================

@dataclass(frozen=True)
class SearchConfig:
    """
    Step sizes and tolerances of the event search.

    Hours for the hour-stepping searches, days/seconds for the phase search.
    """
    # solar angle events
    chunk_hours: float = 24.0
    chunk_overlap_seconds: float = 1.0
    angle_restart_hours: float = 1.0

    # noon / nadir
    culmination_frame_hours: float = 2.0
    culmination_depth: int = 14
    culmination_restart_hours: float = 1.0

    # lunar phases
    phase_step_days: float = 7.0
    phase_accuracy_seconds: float = 30.0
    phase_restart_seconds: float = 500.0
    sun_light_time_minutes: float = 8.32

    # Pegasus
    max_iterations: int = 30

    def __post_init__(self) -> None:
        for name in (
            "chunk_hours",
            "angle_restart_hours",
            "culmination_frame_hours",
            "culmination_restart_hours",
            "phase_step_days",
            "phase_accuracy_seconds",
            "phase_restart_seconds",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.chunk_overlap_seconds < 0 or self.sun_light_time_minutes < 0:
            raise ValueError("chunk_overlap_seconds and sun_light_time_minutes must not be negative")
        if self.culmination_depth < 0:
            raise ValueError("culmination_depth must not be negative")
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")


DEFAULT_CONFIG = SearchConfig()
