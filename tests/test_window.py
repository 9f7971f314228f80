from __future__ import annotations

import random
from collections import Counter

import pytest

from bikeflow.buckets.minute_buckets import MinuteBuckets
from bikeflow.buckets.window import (
    AllTime,
    WindowCentered,
    covered_minutes,
    filter_by_minute,
    parse_query,
    window_bounds,
)
from bikeflow.errors import InvalidArgument

from helpers import make_trip, random_trips


class RecordingBuckets(list):
    """Bucket array that remembers which slots were read."""

    def __init__(self, slots):
        super().__init__(slots)
        self.visited: list[int] = []

    def __getitem__(self, idx):
        self.visited.append(idx)
        return super().__getitem__(idx)


def _brute_force(trips, minute, half=60):
    lo, _ = window_bounds(minute, half)
    return [t for t in trips if (t.start_minute - lo) % 1440 < 2 * half]


def test_parse_query_sentinel_and_minutes():
    assert parse_query(-1) == AllTime()
    assert parse_query(0) == WindowCentered(0)
    assert parse_query(1439) == WindowCentered(1439)


@pytest.mark.parametrize("bad", [-2, 1440, 5000, 1.5, "10", None, True])
def test_parse_query_rejects_out_of_range(bad):
    with pytest.raises(InvalidArgument):
        parse_query(bad)


def test_window_bounds():
    assert window_bounds(600) == (540, 660)
    assert window_bounds(0) == (1380, 60)
    assert window_bounds(1435) == (1375, 55)


@pytest.mark.parametrize("seed", range(5))
def test_filter_matches_brute_force_scan(seed):
    rng = random.Random(seed)
    trips = random_trips(rng, 2000, ["A", "B", "C", "D"])
    buckets = MinuteBuckets.build(trips)

    for minute in [0, 59, 60, 720, 1379, 1380, 1439] + [rng.randrange(1440) for _ in range(40)]:
        got = filter_by_minute(buckets.departures, WindowCentered(minute))
        want = _brute_force(trips, minute)
        assert Counter(map(id, got)) == Counter(map(id, want)), minute


@pytest.mark.parametrize("minute", [0, 1439])
def test_wraparound_includes_both_sides_of_midnight(minute):
    late = make_trip(1439, 1439)
    early = make_trip(0, 0)
    noon = make_trip(720, 720)
    buckets = MinuteBuckets.build([late, early, noon])

    got = filter_by_minute(buckets.departures, WindowCentered(minute))

    assert late in got
    assert early in got
    assert noon not in got


def test_all_time_returns_every_trip():
    rng = random.Random(11)
    trips = random_trips(rng, 300, ["A", "B"])
    buckets = MinuteBuckets.build(trips)

    got = filter_by_minute(buckets.departures, AllTime())
    assert Counter(map(id, got)) == Counter(map(id, trips))


def test_filter_only_reads_covered_buckets():
    buckets = MinuteBuckets.build([make_trip(m, m) for m in range(0, 1440, 7)])

    plain = RecordingBuckets(buckets.departures)
    filter_by_minute(plain, WindowCentered(600))
    assert plain.visited == list(range(540, 660))

    wrapped = RecordingBuckets(buckets.departures)
    filter_by_minute(wrapped, WindowCentered(10))
    assert wrapped.visited == list(range(1390, 1440)) + list(range(0, 70))
    assert len(wrapped.visited) == 120


def test_covered_minutes_respects_half_window():
    assert list(covered_minutes(WindowCentered(100), 15)) == list(range(85, 115))
    assert len(list(covered_minutes(AllTime(), 15))) == 1440


def test_filter_is_repeatable():
    rng = random.Random(3)
    buckets = MinuteBuckets.build(random_trips(rng, 400, ["A", "B"]))

    first = filter_by_minute(buckets.arrivals, WindowCentered(5))
    second = filter_by_minute(buckets.arrivals, WindowCentered(5))
    assert first == second


@pytest.mark.parametrize("half", [0, -10, 720, 900, 1.5, True])
def test_filter_rejects_half_window_outside_day(half):
    buckets = MinuteBuckets.build([make_trip(m, m) for m in range(1440)])

    with pytest.raises(InvalidArgument):
        filter_by_minute(buckets.departures, WindowCentered(600), half)
    with pytest.raises(InvalidArgument):
        window_bounds(600, half)
    with pytest.raises(InvalidArgument):
        list(covered_minutes(AllTime(), half))


def test_widest_half_window_keeps_full_width():
    buckets = MinuteBuckets.build([make_trip(m, m) for m in range(1440)])
    got = filter_by_minute(buckets.departures, WindowCentered(600), 719)
    assert len(got) == 1438
