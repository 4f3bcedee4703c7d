from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Interpolation:
    """
    Parabola through (-1, y_minus), (0, y0), (+1, y_plus).

    xe/ye: vertex (xe may lie outside [-1, 1]).
    root1/root2: roots, only `number_of_roots` of which lie in [-1, 1].
    """
    xe: float
    ye: float
    raw_root1: float
    root2: float
    number_of_roots: int
    is_maximum: bool

    @property
    def root1(self) -> float:
        # A single in-window root may be labelled root2 by the ± ordering;
        # callers of the single-root branch only look at root1.
        return self.root2 if self.raw_root1 < -1.0 else self.raw_root1


def of(y_minus: float, y0: float, y_plus: float) -> Interpolation:
    """
    3-point quadratic interpolation (Montenbruck & Pfleger, QUAD):

      a = (y+ + y-)/2 - y0,  b = (y+ - y-)/2
      xe = -b / 2a,          ye = (a xe + b) xe + y0
      roots = xe ± sqrt(b² - 4 a y0) / 2|a|
    """
    a = 0.5 * (y_plus + y_minus) - y0
    b = 0.5 * (y_plus - y_minus)

    if a == 0.0:
        # collinear samples: no vertex, and the straight-line case is never
        # reported as a root
        return Interpolation(math.nan, math.nan, math.nan, math.nan, 0, False)

    xe = -b / (2.0 * a)
    ye = (a * xe + b) * xe + y0
    is_maximum = a < 0.0

    dis = b * b - 4.0 * a * y0
    count = 0
    if dis >= 0.0:
        dx = 0.5 * math.sqrt(dis) / abs(a)
        root1 = xe - dx
        root2 = xe + dx
        if abs(root1) <= 1.0:
            count += 1
        if abs(root2) <= 1.0:
            count += 1
    else:
        root1 = math.nan
        root2 = math.nan

    return Interpolation(xe, ye, root1, root2, count, is_maximum)
