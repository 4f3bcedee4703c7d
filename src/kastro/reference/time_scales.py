# reference/time_scales.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
import math

from .ext_math import PI2, frac


# ============================================================
# Constants
# ============================================================

_JD_UNIX_EPOCH = 2440587.5  # JD at 1970-01-01 00:00:00 UTC
_JD_J2000 = 2451545.0       # JD at 2000-01-01 12:00:00 (J2000.0)
_MJD_OFFSET = 2400000.5

DAYS_PER_JULIAN_CENTURY = 36525.0
SECONDS_PER_DAY = 86400.0


# ============================================================
# Basic JD / JDN helpers
# ============================================================

def jd_to_jdn(jd: float) -> int:
    """
    Julian Date -> Julian Day Number of the civil (UTC) day containing it.

      JDN = floor(JD + 0.5)
    """
    return int(math.floor(jd + 0.5))


def jdn_to_date(jdn: int) -> date:
    """
    JDN -> Gregorian date (proleptic Gregorian, Fliegel–Van Flandern).
    """
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4

    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153

    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)

    return date(int(year), int(month), int(day))


# ============================================================
# datetime(UTC) <-> JD(UTC)
# ============================================================

def datetime_utc_to_jd(dt: datetime) -> float:
    """
    datetime -> JD (UTC). Requires a timezone-aware datetime (any zone).
    """
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    dt_utc = dt.astimezone(timezone.utc)
    t = dt_utc.timestamp()  # seconds since Unix epoch
    return _JD_UNIX_EPOCH + t / SECONDS_PER_DAY


def jd_to_datetime_utc(jd: float) -> datetime:
    """
    JD (UTC) -> timezone-aware datetime in UTC (microsecond resolution).
    """
    t = (jd - _JD_UNIX_EPOCH) * SECONDS_PER_DAY
    return datetime.fromtimestamp(t, tz=timezone.utc)


def jd_from_julian_century(jc: float) -> float:
    return jc * DAYS_PER_JULIAN_CENTURY + _JD_J2000


def julian_century_from_jd(jd: float) -> float:
    return (jd - _JD_J2000) / DAYS_PER_JULIAN_CENTURY


# ============================================================
# JulianDate
# ============================================================

@dataclass(frozen=True)
class JulianDate:
    """
    A continuous day count (UTC based; the formulas here do not model ΔT).

    The search engines step in hours from a fixed reference:
      jd.at_hour(h) == JulianDate(jd.value + h/24)
    """
    value: float

    @classmethod
    def from_datetime(cls, dt: datetime) -> "JulianDate":
        return cls(datetime_utc_to_jd(dt))

    @classmethod
    def from_julian_century(cls, jc: float) -> "JulianDate":
        return cls(jd_from_julian_century(jc))

    def at_hour(self, hour: float) -> "JulianDate":
        return JulianDate(self.value + hour / 24.0)

    @property
    def datetime(self) -> datetime:
        return jd_to_datetime_utc(self.value)

    @property
    def julian_century(self) -> float:
        return julian_century_from_jd(self.value)

    @property
    def mjd(self) -> float:
        return self.value - _MJD_OFFSET

    @property
    def gmst(self) -> float:
        """
        Greenwich mean sidereal time (radians).

        IAU 1982 expression, split into the 0h UT part (t0) and the
        elapsed UT seconds of the day:
          GMST = 24110.54841 + 8640184.812866 t0 + 1.0027379093 ut
                 + (0.093104 - 6.2e-6 t) t²        [seconds]
        """
        mjd = self.mjd
        tmjd = math.floor(mjd)
        j2000_mjd = _JD_J2000 - _MJD_OFFSET
        ut = (mjd - tmjd) * SECONDS_PER_DAY
        t0 = (tmjd - j2000_mjd) / DAYS_PER_JULIAN_CENTURY
        t = (mjd - j2000_mjd) / DAYS_PER_JULIAN_CENTURY
        gmst = 24110.54841 + 8640184.812866 * t0 + 1.0027379093 * ut + (0.093104 - 6.2e-6 * t) * t * t
        return PI2 / SECONDS_PER_DAY * math.fmod(gmst, SECONDS_PER_DAY)

    @property
    def day_of_year(self) -> int:
        d = jdn_to_date(jd_to_jdn(self.value))
        return d.timetuple().tm_yday

    @property
    def true_anomaly(self) -> float:
        """
        Earth's anomaly (radians) counted from perihelion, taken as day 5
        of the year; only used for the Sun's distance.
        """
        return PI2 * frac((self.day_of_year - 5.0) / 365.256363)
