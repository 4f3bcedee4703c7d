# reference/lunar.py

from __future__ import annotations

import math

from .ext_math import ARCS, PI2, frac
from .time_scales import JulianDate
from .vectors import Vector, equatorial_to_ecliptical, equatorial_to_horizontal

MOON_MEAN_RADIUS_KM = 1737.1


def position_equatorial(jd: JulianDate) -> Vector:
    """
    Geocentric ecliptic position of the Moon (truncated Brown series,
    Montenbruck & Pfleger). Accurate to a few arcminutes.

    phi = ecliptic longitude, theta = ecliptic latitude, r = distance in km.
    """
    t = jd.julian_century
    l0 = frac(0.606433 + 1336.855225 * t)
    l = PI2 * frac(0.374897 + 1325.552410 * t)
    ls = PI2 * frac(0.993133 + 99.997361 * t)
    d = PI2 * frac(0.827361 + 1236.853086 * t)
    f = PI2 * frac(0.259086 + 1342.227825 * t)
    d2 = 2.0 * d
    l2 = 2.0 * l
    f2 = 2.0 * f

    # longitude perturbations (arcseconds)
    dL = (
        22640.0 * math.sin(l)
        - 4586.0 * math.sin(l - d2)
        + 2370.0 * math.sin(d2)
        + 769.0 * math.sin(l2)
        - 668.0 * math.sin(ls)
        - 412.0 * math.sin(f2)
        - 212.0 * math.sin(l2 - d2)
        - 206.0 * math.sin(l + ls - d2)
        + 192.0 * math.sin(l + d2)
        - 165.0 * math.sin(ls - d2)
        - 125.0 * math.sin(d)
        - 110.0 * math.sin(l + ls)
        + 148.0 * math.sin(l - ls)
        - 55.0 * math.sin(f2 - d2)
    )
    s = f + (dL + 412.0 * math.sin(f2) + 541.0 * math.sin(ls)) / ARCS
    h = f - d2
    n = (
        -526.0 * math.sin(h)
        + 44.0 * math.sin(l + h)
        - 31.0 * math.sin(-l + h)
        - 23.0 * math.sin(ls + h)
        + 11.0 * math.sin(-ls + h)
        - 25.0 * math.sin(-l2 + f)
        + 21.0 * math.sin(-l + f)
    )

    l_moon = PI2 * frac(l0 + dL / 1296.0e3)
    b_moon = (18520.0 * math.sin(s) + n) / ARCS

    dist = (
        385000.5584
        - 20905.3550 * math.cos(l)
        - 3699.1109 * math.cos(d2 - l)
        - 2955.9676 * math.cos(d2)
        - 569.9251 * math.cos(l2)
    )
    return Vector.of_polar(l_moon, b_moon, dist)


def position(jd: JulianDate) -> Vector:
    """Equatorial position (phi = right ascension, theta = declination)."""
    return equatorial_to_ecliptical(jd.julian_century).transpose() @ position_equatorial(jd)  # type: ignore[return-value]


def position_horizontal(jd: JulianDate, lat_deg: float, lon_deg: float) -> Vector:
    mc = position(jd)
    h = jd.gmst + math.radians(lon_deg) - mc.phi
    return equatorial_to_horizontal(h, mc.theta, mc.r, lat_deg)


def angular_radius(distance_km: float) -> float:
    return math.asin(MOON_MEAN_RADIUS_KM / distance_km)


def distance_km(jd: JulianDate) -> float:
    return position(jd).r
