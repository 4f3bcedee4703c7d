from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple, Union

from .ext_math import PI2, is_zero


@dataclass(frozen=True)
class Vector:
    """Cartesian 3-vector with spherical accessors (phi, theta, r)."""
    x: float
    y: float
    z: float

    @classmethod
    def of_polar(cls, phi: float, theta: float, r: float = 1.0) -> "Vector":
        cos_theta = math.cos(theta)
        return cls(
            r * math.cos(phi) * cos_theta,
            r * math.sin(phi) * cos_theta,
            r * math.sin(theta),
        )

    @property
    def phi(self) -> float:
        """Azimuthal angle in [0, 2π)."""
        a = 0.0 if (is_zero(self.x) and is_zero(self.y)) else math.atan2(self.y, self.x)
        return a + PI2 if a < 0.0 else a

    @property
    def theta(self) -> float:
        """Polar (elevation) angle in [-π/2, π/2]."""
        sqr = self.x * self.x + self.y * self.y
        if is_zero(self.z) and is_zero(sqr):
            return 0.0
        return math.atan2(self.z, math.sqrt(sqr))

    @property
    def r(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> "Vector":
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y, -self.z)

    def cross(self, other: "Vector") -> "Vector":
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def dot(self, other: "Vector") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def norm(self) -> float:
        return math.sqrt(self.dot(self))


@dataclass(frozen=True)
class Matrix:
    """Row-major 3x3 matrix."""
    mx: Tuple[float, float, float, float, float, float, float, float, float]

    @classmethod
    def of(cls, *values: float) -> "Matrix":
        if len(values) != 9:
            raise ValueError(f"a 3x3 matrix needs 9 values, got {len(values)}")
        return cls(tuple(float(v) for v in values))  # type: ignore[arg-type]

    @classmethod
    def identity(cls) -> "Matrix":
        return cls.of(1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0)

    @classmethod
    def rotate_x(cls, angle: float) -> "Matrix":
        s, c = math.sin(angle), math.cos(angle)
        return cls.of(
            1.0, 0.0, 0.0,
            0.0, c, s,
            0.0, -s, c,
        )

    @classmethod
    def rotate_y(cls, angle: float) -> "Matrix":
        s, c = math.sin(angle), math.cos(angle)
        return cls.of(
            c, 0.0, -s,
            0.0, 1.0, 0.0,
            s, 0.0, c,
        )

    @classmethod
    def rotate_z(cls, angle: float) -> "Matrix":
        s, c = math.sin(angle), math.cos(angle)
        return cls.of(
            c, s, 0.0,
            -s, c, 0.0,
            0.0, 0.0, 1.0,
        )

    def __getitem__(self, rc: Tuple[int, int]) -> float:
        r, c = rc
        if not (0 <= r <= 2 and 0 <= c <= 2):
            raise IndexError(f"row/column out of range: {r}:{c}")
        return self.mx[r * 3 + c]

    def transpose(self) -> "Matrix":
        return Matrix.of(*(self[j, i] for i in range(3) for j in range(3)))

    def __neg__(self) -> "Matrix":
        return Matrix.of(*(-v for v in self.mx))

    def __add__(self, other: "Matrix") -> "Matrix":
        return Matrix.of(*(a + b for a, b in zip(self.mx, other.mx)))

    def __sub__(self, other: "Matrix") -> "Matrix":
        return Matrix.of(*(a - b for a, b in zip(self.mx, other.mx)))

    def __mul__(self, scalar: float) -> "Matrix":
        return Matrix.of(*(v * scalar for v in self.mx))

    def __matmul__(self, other: Union["Matrix", Vector]) -> Union["Matrix", Vector]:
        if isinstance(other, Vector):
            vec = (other.x, other.y, other.z)
            x, y, z = (sum(self[i, j] * vec[j] for j in range(3)) for i in range(3))
            return Vector(x, y, z)
        return Matrix.of(*(
            sum(self[i, k] * other[k, j] for k in range(3))
            for i in range(3)
            for j in range(3)
        ))


def equatorial_to_horizontal(tau: float, dec: float, dist: float, lat_deg: float) -> Vector:
    """Hour angle / declination -> horizontal frame for an observer at lat_deg."""
    return Matrix.rotate_y(math.pi / 2.0 - math.radians(lat_deg)) @ Vector.of_polar(tau, dec, dist)  # type: ignore[return-value]


def equatorial_to_ecliptical(jc: float) -> Matrix:
    """Rotation by the mean obliquity of the ecliptic at Julian century jc."""
    eps = math.radians(23.43929111 - (46.8150 + (0.00059 - 0.001813 * jc) * jc) * jc / 3600.0)
    return Matrix.rotate_x(eps)
