from __future__ import annotations

import math


# ------------------------------------------------------------
# Units & helpers
# ------------------------------------------------------------

PI2 = 2.0 * math.pi
ARCS = math.degrees(3600.0)  # arcseconds per radian

EARTH_MEAN_RADIUS_KM = 6371.0


def frac(x: float) -> float:
    """Fractional part keeping the sign of x (fmod semantics, not [0,1))."""
    return math.fmod(x, 1.0)


def is_zero(x: float) -> bool:
    """True for ±0.0; NaN is never zero."""
    return not math.isnan(x) and x == 0.0


def wrap_deg(x_deg: float) -> float:
    """Wrap degrees to [0,360)."""
    y = math.fmod(x_deg, 360.0)
    if y < 0:
        y += 360.0
    # fmod of a tiny negative can round back up to exactly 360
    return 0.0 if y >= 360.0 else y


def wrap180(deg: float) -> float:
    """Wraps an angle in degrees to the range [-180.0, 180.0)."""
    return (deg + 180.0) % 360.0 - 180.0


def dms(d: int, m: int, s: float) -> float:
    """Degrees/minutes/seconds -> decimal degrees; the sign is taken from d."""
    sig = -1.0 if d < 0 else 1.0
    return sig * ((abs(s) / 60.0 + abs(m)) / 60.0 + abs(d))


# ------------------------------------------------------------
# Horizon corrections (radians unless noted)
# ------------------------------------------------------------

def parallax(height_m: float, distance_km: float) -> float:
    """
    Topocentric correction for a body at `distance_km`, seen from
    `height_m` metres above the mean sphere:
      asin(R/d) - acos(R/(R+h))
    """
    r = EARTH_MEAN_RADIUS_KM
    return math.asin(r / distance_km) - math.acos(r / (r + height_m / 1000.0))


def apparent_refraction(ha_deg: float) -> float:
    """
    Refraction for an apparent altitude given in DEGREES (Sæmundsson form).
    Zero below the horizon.
    """
    if ha_deg < 0.0:
        return 0.0
    return math.pi / (math.tan(math.radians(ha_deg + 7.31 / (ha_deg + 4.4))) * 10800.0)


def refraction(h: float) -> float:
    """
    Refraction for a true altitude in radians (Bennett form). Zero below
    the horizon.
    """
    if h < 0.0:
        return 0.0
    return 0.000296706 / math.tan(h + 0.00312537 / (h + 0.0890118))
