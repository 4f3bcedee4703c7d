# reference/solar.py

from __future__ import annotations

import math

from .ext_math import PI2, frac
from .time_scales import JulianDate
from .vectors import Vector, equatorial_to_ecliptical, equatorial_to_horizontal

SUN_DISTANCE_KM = 149598000.0
SUN_MEAN_RADIUS_KM = 695700.0


def position_equatorial(jd: JulianDate) -> Vector:
    """
    Geocentric ecliptic position of the Sun (low precision series,
    Montenbruck & Pfleger, "Astronomy on the Personal Computer").

    phi = ecliptic longitude, theta = 0, r = distance in km.
    """
    t = jd.julian_century
    m = PI2 * frac(0.993133 + 99.997361 * t)
    l = PI2 * frac(
        0.7859453 + m / PI2
        + (6893.0 * math.sin(m) + 72.0 * math.sin(2.0 * m) + 6191.2 * t) / 1296.0e3
    )
    d = SUN_DISTANCE_KM * (1 - 0.016718 * math.cos(jd.true_anomaly))
    return Vector.of_polar(l, 0.0, d)


def position(jd: JulianDate) -> Vector:
    """Equatorial position (phi = right ascension, theta = declination)."""
    return equatorial_to_ecliptical(jd.julian_century).transpose() @ position_equatorial(jd)  # type: ignore[return-value]


def position_horizontal(jd: JulianDate, lat_deg: float, lon_deg: float) -> Vector:
    """
    Horizontal position for an observer (phi measured from south,
    theta = true altitude, r = distance in km).
    """
    mc = position(jd)
    h = jd.gmst + math.radians(lon_deg) - mc.phi
    return equatorial_to_horizontal(h, mc.theta, mc.r, lat_deg)


def angular_radius(distance_km: float) -> float:
    return math.asin(SUN_MEAN_RADIUS_KM / distance_km)
