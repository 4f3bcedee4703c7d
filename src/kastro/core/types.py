from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

@dataclass(frozen=True)
class Location:
    """Observer position: degrees north, degrees east, metres above sea level."""
    latitude: float
    longitude: float
    height: float = 0.0

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude must be within [-90, 90], got {self.latitude!r}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude must be within [-180, 180], got {self.longitude!r}")
        if self.height < 0.0:
            raise ValueError(f"height must not be negative, got {self.height!r}")

    @property
    def pair(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)


LocationLike = Union[Location, Tuple[float, float]]


def resolve_location(
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    location: Optional[LocationLike] = None,
) -> Location:
    """Accept either explicit lat/lon or a location (pair or Location)."""
    if location is not None:
        if latitude is not None or longitude is not None:
            raise ValueError("pass either latitude/longitude or location, not both")
        if isinstance(location, Location):
            return location
        lat, lon = location
        return Location(float(lat), float(lon))
    if latitude is None or longitude is None:
        raise ValueError("latitude and longitude are required")
    return Location(float(latitude), float(longitude))


class HorizonState(Enum):
    UP = "up"
    DOWN = "down"


class HorizonMovementState(Enum):
    RISING = "rising"
    SETTING = "setting"

    @classmethod
    def from_azimuth(cls, azimuth_deg: float) -> "HorizonMovementState":
        # East half of the sky (north through south) means the body is still climbing.
        return cls.RISING if 0.0 <= azimuth_deg <= 180.0 else cls.SETTING
