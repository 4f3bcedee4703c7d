from __future__ import annotations
from typing import Callable

from ..core.errors import ConvergenceError

MAX_ITERATIONS = 30


def pegasus(
    lower: float,
    upper: float,
    accuracy: float,
    f: Callable[[float], float],
    *,
    max_iterations: int = MAX_ITERATIONS,
) -> float:
    """Pegasus root finder (regula falsi with the f1·f2/(f2+f3) correction).

    f(lower) and f(upper) must have opposite signs. Returns the bracket end
    with the smaller |f| once the bracket is no wider than `accuracy`.
    """
    x1, x2 = lower, upper
    f1, f2 = f(x1), f(x2)
    if f1 * f2 >= 0.0:
        raise ConvergenceError("No root within the given boundaries")

    for _ in range(max_iterations):
        try:
            x3 = x2 - f2 / ((f2 - f1) / (x2 - x1))
        except ZeroDivisionError as e:
            raise ConvergenceError("Degenerate bracket") from e
        f3 = f(x3)
        if f3 * f2 <= 0.0:
            x1, f1 = x2, f2
            x2, f2 = x3, f3
        else:
            f1 = f1 * f2 / (f2 + f3)
            x2, f2 = x3, f3
        if abs(x2 - x1) <= accuracy:
            return x1 if abs(f1) < abs(f2) else x2

    raise ConvergenceError("Maximum number of iterations exceeded")


def _readjust(
    left: float,
    right: float,
    depth: int,
    f: Callable[[float], float],
    right_is_better: Callable[[float, float], bool],
) -> float:
    yl, yr = f(left), f(right)
    for _ in range(depth):
        middle = (left + right) / 2.0
        ym = f(middle)
        if right_is_better(yl, yr):
            left, yl = middle, ym
        else:
            right, yr = middle, ym
    return right if right_is_better(yl, yr) else left


def readjust_max(time: float, frame: float, depth: int, f: Callable[[float], float]) -> float:
    """Sharpen an approximate maximum of f by bisecting [time-frame, time+frame] `depth` times."""
    return _readjust(time - frame, time + frame, depth, f, lambda yl, yr: yl < yr)


def readjust_min(time: float, frame: float, depth: int, f: Callable[[float], float]) -> float:
    """Same as readjust_max, for a minimum."""
    return _readjust(time - frame, time + frame, depth, f, lambda yl, yr: yr < yl)
