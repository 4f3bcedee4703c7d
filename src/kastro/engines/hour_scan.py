from __future__ import annotations

import math
from typing import Callable, Iterator, Optional, Tuple

from . import quadratic
from .quadratic import Interpolation


def max_hour(limit_hours: float, reverse: bool) -> float:
    """Last whole hour the scan visits; ±inf for an unbounded window."""
    if math.isinf(limit_hours):
        return -math.inf if reverse else math.inf
    return math.floor(-limit_hours) if reverse else math.ceil(limit_hours)


def hour_windows(
    f: Callable[[float], float],
    *,
    limit_hours: float,
    reverse: bool = False,
    start_hour: int = 0,
) -> Iterator[Tuple[int, float, Interpolation]]:
    """
    Slide a 3-sample window (h-1, h, h+1) one hour at a time from
    `start_hour`, forwards or backwards, and yield
    (h, f(h-1), quadratic fit of the window).

    Each step costs one new evaluation of f; the generator stops after
    the last hour inside the limit.
    """
    last = max_hour(limit_hours, reverse)
    hour = start_hour
    y_minus = f(hour - 1.0)
    y0 = f(float(hour))
    y_plus = f(hour + 1.0)
    while (hour >= last) if reverse else (hour <= last):
        yield hour, y_minus, quadratic.of(y_minus, y0, y_plus)
        if reverse:
            hour -= 1
            y_plus, y0 = y0, y_minus
            y_minus = f(hour - 1.0)
        else:
            hour += 1
            y_minus, y0 = y0, y_plus
            y_plus = f(hour + 1.0)


def crossings(hour: int, y_minus: float, qi: Interpolation) -> Tuple[Optional[float], Optional[float]]:
    """
    Zero crossings of the window as absolute hours: (rising, falling).

    With a single root the sign at h-1 tells the direction; with two, the
    vertex value does (a dip below zero means fall-then-rise).
    """
    if qi.number_of_roots == 1:
        rt = qi.root1 + hour
        return (rt, None) if y_minus < 0.0 else (None, rt)
    if qi.number_of_roots == 2:
        if qi.ye < 0.0:
            return hour + qi.root2, hour + qi.root1
        return hour + qi.root1, hour + qi.root2
    return None, None


def in_window(rt: float, limit_hours: float, reverse: bool) -> bool:
    """[0, limit) forwards; (-limit, 0] backwards."""
    if reverse:
        return -limit_hours < rt <= 0.0
    return 0.0 <= rt < limit_hours
