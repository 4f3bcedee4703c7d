# tests/test_solar_events.py

from datetime import datetime, timedelta, timezone
from itertools import islice

import pytest

from kastro import (
    ALL_SOLAR_EVENTS,
    INFINITE,
    SIMPLE_SOLAR_EVENTS,
    Location,
    SolarEventSequence,
    SolarEventType,
    calculate_solar_state,
)
from kastro.core.events import split_solar_kinds
from kastro.engines.culmination import NoonAndNadirSequence
from kastro.engines.solar_angle import SolarAngleEventSequence

UTC = timezone.utc
DENVER_TZ = timezone(timedelta(hours=-7))          # MST
SANTA_MONICA_TZ = timezone(timedelta(hours=-7))    # PDT
WELLINGTON_TZ = timezone(timedelta(hours=12))      # NZST
SINGAPORE_TZ = timezone(timedelta(hours=8))

COLOGNE = (50.938056, 6.956944)
ALERT = (82.5, -62.316667)
WELLINGTON = (-41.2875, 174.776111)
SINGAPORE = (1.283333, 103.833333)
SANTA_MONICA = (34.0, -118.5)
DENVER = (39.749618, -104.988892)

S = SolarEventType


def at(*args, tz=UTC):
    return datetime(*args, tzinfo=tz)


def assert_similar(expected, actual, tolerance=timedelta(minutes=1)):
    assert abs(expected - actual) <= tolerance, f"expected {expected} got {actual}"


def assert_events(expected, actual, tolerance=timedelta(minutes=1)):
    assert [k for k, _ in expected] == [e.kind for e in actual]
    for (_, t), event in zip(expected, actual):
        assert_similar(t, event.time, tolerance)


def test_cologne_all_angle_events():
    expected = {
        S.ASTRONOMICAL_DAWN: at(2017, 8, 10, 1, 44, 18),
        S.NAUTICAL_DAWN: at(2017, 8, 10, 2, 44, 57),
        S.BLUE_HOUR_DAWN: at(2017, 8, 10, 3, 18, 22),
        S.CIVIL_DAWN: at(2017, 8, 10, 3, 34, 1),
        S.GOLDEN_HOUR_DAWN: at(2017, 8, 10, 3, 34, 1),
        S.BLUE_HOUR_DAWN_END: at(2017, 8, 10, 3, 48, 59),
        S.SUNRISE: at(2017, 8, 10, 4, 11, 49),
        S.SUNRISE_END: at(2017, 8, 10, 4, 15, 33),
        S.DAY: at(2017, 8, 10, 4, 17, 44),
        S.GOLDEN_HOUR_DAWN_END: at(2017, 8, 10, 4, 58, 33),
        S.GOLDEN_HOUR_DUSK: at(2017, 8, 10, 18, 15, 49),
        S.CIVIL_DUSK: at(2017, 8, 10, 18, 56, 30),
        S.SUNSET_BEGIN: at(2017, 8, 10, 18, 58, 39),
        S.SUNSET: at(2017, 8, 10, 19, 2, 20),
        S.BLUE_HOUR_DUSK: at(2017, 8, 10, 19, 25, 16),
        S.NAUTICAL_DUSK: at(2017, 8, 10, 19, 40, 13),
        S.GOLDEN_HOUR_DUSK_END: at(2017, 8, 10, 19, 40, 13),
        S.BLUE_HOUR_DUSK_END: at(2017, 8, 10, 19, 55, 35),
        S.ASTRONOMICAL_DUSK: at(2017, 8, 10, 20, 28, 56),
        S.NIGHT: at(2017, 8, 10, 21, 28, 43),
    }
    seq = SolarEventSequence(at(2017, 8, 10), location=COLOGNE, requested=ALL_SOLAR_EVENTS)
    events = list(islice((e for e in seq if e.kind not in (S.NOON, S.NADIR)), len(expected)))

    assert {e.kind for e in events} == set(expected)
    for event in events:
        assert_similar(expected[event.kind], event.time)
    assert [e.time for e in events] == sorted(e.time for e in events)


def test_cologne_sunrise_sunset_strings_as_kinds():
    seq = SolarEventSequence(
        at(2017, 8, 10), *COLOGNE, limit=timedelta(days=1), requested=["sunrise", "sunset"]
    )
    assert_events(
        [(S.SUNRISE, at(2017, 8, 10, 4, 11, 49)), (S.SUNSET, at(2017, 8, 10, 19, 2, 20))],
        list(seq),
    )


def test_alert_midnight_sun_only_culminations():
    seq = SolarEventSequence(at(2017, 8, 10), location=ALERT)
    assert_events(
        [(S.NADIR, at(2017, 8, 10, 4, 16, 8)), (S.NOON, at(2017, 8, 10, 16, 13, 14))],
        seq.take(2),
    )
    horizon = SolarEventSequence(
        at(2017, 8, 10), location=ALERT, limit=timedelta(days=1), requested=[S.SUNRISE, S.SUNSET]
    )
    assert list(horizon) == []


def test_alert_first_sunset_after_midnight_sun():
    seq = SolarEventSequence(at(2017, 9, 6), location=ALERT)
    assert_events(
        [
            (S.SUNSET, at(2017, 9, 6, 3, 6, 2)),
            (S.NADIR, at(2017, 9, 6, 4, 9, 31)),
            (S.SUNRISE, at(2017, 9, 6, 5, 13, 15)),
            (S.NOON, at(2017, 9, 6, 16, 5, 41)),
        ],
        seq.take(4),
    )


def test_alert_summer_solstice_culminations():
    seq = SolarEventSequence(at(2020, 6, 20), location=ALERT)
    assert_events(
        [
            (S.NADIR, at(2020, 6, 20, 4, 10, 54)),
            (S.NOON, at(2020, 6, 20, 16, 11, 2)),
            (S.NADIR, at(2020, 6, 21, 4, 11, 9)),
            (S.NOON, at(2020, 6, 21, 16, 11, 13)),
        ],
        seq.take(4),
    )


@pytest.mark.parametrize(
    "location, start, expected",
    [
        (
            WELLINGTON,
            at(2017, 8, 10, tz=WELLINGTON_TZ),
            [
                (S.NADIR, at(2017, 8, 9, 12, 26, 18)),
                (S.SUNRISE, at(2017, 8, 9, 19, 18, 33)),
                (S.NOON, at(2017, 8, 10, 0, 26, 33)),
                (S.SUNSET, at(2017, 8, 10, 5, 34, 50)),
            ],
        ),
        (
            SINGAPORE,
            at(2017, 8, 10, tz=SINGAPORE_TZ),
            [
                (S.NADIR, at(2017, 8, 9, 17, 10, 13)),
                (S.SUNRISE, at(2017, 8, 9, 23, 5, 13)),
                (S.NOON, at(2017, 8, 10, 5, 10, 7)),
                (S.SUNSET, at(2017, 8, 10, 11, 14, 56)),
            ],
        ),
    ],
)
def test_simple_events_other_hemispheres(location, start, expected):
    assert_events(expected, SolarEventSequence(start, location=location).take(4))


def test_denver_three_day_limit_ends_sequence():
    events = list(
        SolarEventSequence(
            at(2023, 12, 1, tz=DENVER_TZ),
            location=DENVER,
            limit=timedelta(days=3),
            requested=[S.SUNRISE, S.NOON, S.SUNSET],
        )
    )
    expected = []
    for day, rise, noon, set_ in (
        (1, (7, 1), (11, 48), (16, 35)),
        (2, (7, 2), (11, 49), (16, 35)),
        (3, (7, 3), (11, 49), (16, 35)),
    ):
        expected += [
            (S.SUNRISE, at(2023, 12, day, *rise, tz=DENVER_TZ)),
            (S.NOON, at(2023, 12, day, *noon, tz=DENVER_TZ)),
            (S.SUNSET, at(2023, 12, day, *set_, tz=DENVER_TZ)),
        ]
    assert_events(expected, events, tolerance=timedelta(minutes=2))


def test_one_day_limit_does_not_spill_into_next_day():
    events = list(
        SolarEventSequence(
            at(2024, 1, 11, tz=DENVER_TZ),
            location=DENVER,
            limit=timedelta(days=1),
            requested=[S.SUNRISE, S.NOON, S.SUNSET],
        )
    )
    assert_events(
        [
            (S.SUNRISE, at(2024, 1, 11, 7, 20, tz=DENVER_TZ)),
            (S.NOON, at(2024, 1, 11, 12, 7, 57, tz=DENVER_TZ)),
            (S.SUNSET, at(2024, 1, 11, 16, 55, 25, tz=DENVER_TZ)),
        ],
        events,
    )


def test_empty_kinds_is_empty():
    assert list(SolarEventSequence(at(2023, 8, 1, tz=DENVER_TZ), location=DENVER, requested=[])) == []
    assert SolarAngleEventSequence(at(2023, 8, 1), DENVER).first() is None
    assert NoonAndNadirSequence(at(2023, 8, 1), DENVER).first() is None


def test_noon_and_nadir_point_south_and_north():
    start = at(2020, 6, 2, 3, 30, tz=SANTA_MONICA_TZ)
    seq = SolarEventSequence(start, location=SANTA_MONICA)
    noon = next(e for e in seq if e.kind is S.NOON)
    nadir = next(e for e in seq if e.kind is S.NADIR)
    assert calculate_solar_state(noon.time, location=SANTA_MONICA).azimuth == pytest.approx(180.0, abs=0.1)
    nadir_azimuth = calculate_solar_state(nadir.time, location=SANTA_MONICA).azimuth
    assert min(nadir_azimuth, 360.0 - nadir_azimuth) < 0.1


def test_just_before_and_just_after_noon():
    def first_noon(start):
        return next(e for e in SolarEventSequence(start, location=SANTA_MONICA) if e.kind is S.NOON).time

    tolerance = timedelta(seconds=65)
    noon = first_noon(at(2020, 5, 3, tz=SANTA_MONICA_TZ))
    next_noon = first_noon(at(2020, 5, 4, tz=SANTA_MONICA_TZ))

    assert_similar(noon, first_noon(noon - timedelta(minutes=30)), tolerance)
    assert_similar(noon, first_noon(noon - timedelta(minutes=2)), tolerance)
    assert_similar(next_noon, first_noon(noon + timedelta(minutes=2)), tolerance)
    assert_similar(next_noon, first_noon(noon + timedelta(minutes=30)), tolerance)


def test_reverse_noon_matches_forward_noon():
    start = at(2020, 5, 3, tz=SANTA_MONICA_TZ)
    forward = NoonAndNadirSequence(start, SANTA_MONICA, requested=[S.NOON]).first()
    backward = NoonAndNadirSequence(
        forward.time + timedelta(minutes=5), SANTA_MONICA, requested=[S.NOON], reverse=True
    ).first()
    assert_similar(forward.time, backward.time, timedelta(seconds=65))


def test_reverse_sequence_is_newest_first():
    events = list(
        SolarEventSequence(at(2017, 8, 11), location=COLOGNE, limit=timedelta(days=1), reverse=True)
    )
    assert [e.kind for e in events] == [S.NADIR, S.SUNSET, S.NOON, S.SUNRISE]
    assert_similar(at(2017, 8, 10, 19, 2, 20), events[1].time)
    assert_similar(at(2017, 8, 10, 4, 11, 49), events[3].time)


def test_forward_ordering_and_window_containment():
    start = at(2017, 3, 1, 6, 30)
    limit = timedelta(days=3)
    events = list(SolarEventSequence(start, location=COLOGNE, limit=limit, requested=ALL_SOLAR_EVENTS))
    assert events
    times = [e.time for e in events]
    assert times == sorted(times)
    slack = timedelta(minutes=1)
    assert all(start - slack <= t <= start + limit + slack for t in times)


def test_reverse_ordering_and_window_containment():
    start = at(2017, 3, 4, 6, 30)
    limit = timedelta(days=2)
    events = list(
        SolarEventSequence(start, location=COLOGNE, limit=limit, requested=ALL_SOLAR_EVENTS, reverse=True)
    )
    assert events
    times = [e.time for e in events]
    assert times == sorted(times, reverse=True)
    slack = timedelta(minutes=1)
    assert all(start - limit - slack <= t <= start + slack for t in times)


def test_infinite_limit_is_lazy():
    seq = SolarEventSequence(at(2017, 8, 10), location=COLOGNE, limit=INFINITE, requested=SIMPLE_SOLAR_EVENTS)
    events = seq.take(12)
    assert len(events) == 12
    assert [e.time for e in events] == sorted(e.time for e in events)


def test_sequence_can_be_iterated_twice():
    seq = SolarEventSequence(at(2017, 8, 10), location=COLOGNE, limit=timedelta(days=1))
    assert list(seq) == list(seq)


def test_wrong_family_rejected():
    with pytest.raises(ValueError):
        SolarAngleEventSequence(at(2017, 8, 10), COLOGNE, requested=[S.NOON])
    with pytest.raises(ValueError):
        NoonAndNadirSequence(at(2017, 8, 10), COLOGNE, requested=[S.SUNRISE])
    with pytest.raises(ValueError):
        SolarEventSequence(at(2017, 8, 10), location=COLOGNE, requested=["moonrise"])


def test_split_solar_kinds():
    angles, culminations = split_solar_kinds(["noon", S.SUNRISE, "sunrise", S.NADIR])
    assert angles == (S.SUNRISE,)
    assert culminations == (S.NOON, S.NADIR)


def test_location_forms_agree():
    start = at(2017, 8, 10)
    a = SolarEventSequence(start, *COLOGNE, limit=timedelta(days=1)).take(4)
    b = SolarEventSequence(start, location=Location(*COLOGNE), limit=timedelta(days=1)).take(4)
    assert a == b


def test_naive_start_rejected():
    with pytest.raises(ValueError):
        SolarEventSequence(datetime(2017, 8, 10), location=COLOGNE)


def test_consecutive_sunrises_when_sunrise_drifts_earlier():
    # in April each sunrise comes a little earlier than the one before
    first = SolarAngleEventSequence(at(2017, 4, 1), COLOGNE, requested=[S.SUNRISE]).first()
    start = first.time - timedelta(seconds=30)
    events = SolarAngleEventSequence(start, COLOGNE, limit=timedelta(days=10), requested=[S.SUNRISE]).take(10)
    assert [e.time.date() for e in events] == [first.time.date() + timedelta(days=i) for i in range(10)]
    assert_similar(first.time, events[0].time, timedelta(seconds=1))


def test_consecutive_sunrises_in_reverse():
    last = SolarAngleEventSequence(at(2017, 10, 1), COLOGNE, requested=[S.SUNRISE]).first()
    start = last.time + timedelta(seconds=30)
    events = SolarAngleEventSequence(
        start, COLOGNE, limit=timedelta(days=10), requested=[S.SUNRISE], reverse=True
    ).take(10)
    assert [e.time.date() for e in events] == [last.time.date() - timedelta(days=i) for i in range(10)]


def test_each_kind_keeps_its_own_cursor():
    start = at(2017, 4, 1)
    both = list(SolarAngleEventSequence(start, COLOGNE, limit=timedelta(days=5), requested=[S.SUNRISE, S.SUNSET]))
    rises = list(SolarAngleEventSequence(start, COLOGNE, limit=timedelta(days=5), requested=[S.SUNRISE]))
    sets = list(SolarAngleEventSequence(start, COLOGNE, limit=timedelta(days=5), requested=[S.SUNSET]))
    assert both == sorted(rises + sets, key=lambda e: e.time)
    assert len(rises) == len(sets) == 5
