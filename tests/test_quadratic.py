# tests/test_quadratic.py

import math

import pytest

from kastro.engines import quadratic
from kastro.engines.hour_scan import crossings, hour_windows, in_window, max_hour


def test_two_roots_and_minimum():
    qi = quadratic.of(1.0, -1.0, 1.0)
    assert qi.number_of_roots == 2
    assert qi.root1 == pytest.approx(-0.7071, abs=1e-3)
    assert qi.root2 == pytest.approx(0.7071, abs=1e-3)
    assert qi.xe == pytest.approx(0.0, abs=1e-12)
    assert qi.ye == pytest.approx(-1.0)
    assert not qi.is_maximum


def test_two_roots_and_maximum():
    qi = quadratic.of(-1.0, 1.0, -1.0)
    assert qi.number_of_roots == 2
    assert qi.root1 == pytest.approx(-0.7071, abs=1e-3)
    assert qi.root2 == pytest.approx(0.7071, abs=1e-3)
    assert qi.ye == pytest.approx(1.0)
    assert qi.is_maximum


def test_one_root():
    qi = quadratic.of(2.0, 0.0, -1.0)
    assert qi.number_of_roots == 1
    assert qi.root1 == pytest.approx(0.0, abs=1e-12)
    assert qi.xe == pytest.approx(1.5)
    assert qi.ye == pytest.approx(-1.125)
    assert not qi.is_maximum


def test_collinear_samples_have_no_roots():
    qi = quadratic.of(3.0, 2.0, 1.0)
    assert qi.number_of_roots == 0
    assert math.isnan(qi.xe)
    assert not qi.is_maximum


def test_parabola_without_real_roots():
    # f(x) = x^2 + 3 sampled at -1, 0, 1
    qi = quadratic.of(4.0, 3.0, 4.0)
    assert qi.number_of_roots == 0
    assert qi.xe == pytest.approx(0.0, abs=1e-12)
    assert qi.ye == pytest.approx(3.0)


def test_recovers_both_roots_of_known_parabola():
    # f(x) = x^2 + 2x - 3, roots at -3 and 1; sample around each root with unit spacing
    f = lambda x: x * x + 2 * x - 3
    qi = quadratic.of(f(0.0), f(1.0), f(2.0))
    assert qi.number_of_roots == 1
    assert qi.root1 + 1.0 == pytest.approx(1.0, abs=1e-3)

    qi = quadratic.of(f(-4.0), f(-3.0), f(-2.0))
    assert qi.number_of_roots == 1
    assert qi.root1 - 3.0 == pytest.approx(-3.0, abs=1e-3)


def test_single_root_fallback_uses_root2_when_root1_is_far_left():
    # roots at -3 and +0.5 relative to the window centre
    f = lambda x: (x + 3.0) * (x - 0.5)
    qi = quadratic.of(f(-1.0), f(0.0), f(1.0))
    assert qi.number_of_roots == 1
    assert qi.raw_root1 == pytest.approx(-3.0)
    assert qi.root1 == pytest.approx(0.5)


# ------------------------------------------------------------
# Hour scan
# ------------------------------------------------------------

def test_max_hour_bounds():
    assert max_hour(5.5, reverse=False) == 6
    assert max_hour(5.5, reverse=True) == -6
    assert max_hour(math.inf, reverse=False) == math.inf
    assert max_hour(math.inf, reverse=True) == -math.inf


def test_hour_windows_forward_and_reverse_visit_the_right_hours():
    f = lambda h: h
    fwd = [h for h, _, _ in hour_windows(f, limit_hours=3.0)]
    assert fwd == [0, 1, 2, 3]
    rev = [h for h, _, _ in hour_windows(f, limit_hours=3.0, reverse=True)]
    assert rev == [0, -1, -2, -3]


def test_hour_windows_evaluates_each_hour_once():
    calls = []

    def f(h):
        calls.append(h)
        return h

    list(hour_windows(f, limit_hours=4.0))
    assert sorted(calls) == sorted(set(calls))


def test_crossings_single_root_direction():
    f = lambda x: 0.1 * x * x + x - 0.25
    qi = quadratic.of(f(-1.0), f(0.0), f(1.0))
    up, down = crossings(10, f(-1.0), qi)
    assert up == pytest.approx(10.0 + (-1.0 + math.sqrt(1.1)) / 0.2, abs=1e-9)
    assert down is None

    up, down = crossings(10, -f(-1.0), quadratic.of(-f(-1.0), -f(0.0), -f(1.0)))
    assert up is None
    assert down == pytest.approx(10.0 + (-1.0 + math.sqrt(1.1)) / 0.2, abs=1e-9)


def test_crossings_two_roots_dip():
    # dips below zero between -0.5 and 0.5: falls first, then rises
    f = lambda x: x * x - 0.25
    qi = quadratic.of(f(-1.0), f(0.0), f(1.0))
    up, down = crossings(0, f(-1.0), qi)
    assert down == pytest.approx(-0.5)
    assert up == pytest.approx(0.5)


def test_in_window_edges():
    assert in_window(0.0, 24.0, reverse=False)
    assert not in_window(24.0, 24.0, reverse=False)
    assert not in_window(-0.1, 24.0, reverse=False)
    assert in_window(0.0, 24.0, reverse=True)
    assert in_window(-23.9, 24.0, reverse=True)
    assert not in_window(0.1, 24.0, reverse=True)
