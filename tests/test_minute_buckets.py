from __future__ import annotations

import random
from datetime import datetime

from bikeflow.buckets.minute_buckets import MinuteBuckets
from bikeflow.trips.types import Trip, minute_of_day

from helpers import make_trip, random_trips


def test_minute_of_day_wraps_malformed_components():
    assert minute_of_day(0, 0) == 0
    assert minute_of_day(23, 59) == 1439
    assert minute_of_day(24, 0) == 0
    assert minute_of_day(25, 5) == 65


def test_trip_from_datetimes_uses_wall_clock_minutes():
    trip = Trip.from_datetimes(
        datetime(2024, 3, 1, 23, 50),
        datetime(2024, 3, 2, 0, 10),
        7,
        "B",
    )
    assert trip.start_minute == 1430
    assert trip.end_minute == 10
    assert trip.start_station_id == "7"


def test_build_places_each_trip_in_one_departure_and_one_arrival_bucket():
    trip = make_trip(1430, 10)
    buckets = MinuteBuckets.build([trip])

    assert len(buckets.departures) == 1440
    assert len(buckets.arrivals) == 1440
    assert buckets.departures[1430] == (trip,)
    assert buckets.arrivals[10] == (trip,)
    assert sum(buckets.bucket_sizes("departures")) == 1
    assert sum(buckets.bucket_sizes("arrivals")) == 1


def test_bucket_sizes_sum_to_trip_count():
    rng = random.Random(7)
    trips = random_trips(rng, 500, ["A", "B", "C"])
    buckets = MinuteBuckets.build(trips)

    assert buckets.trip_count == 500
    assert sum(buckets.bucket_sizes("departures")) == 500
    assert sum(buckets.bucket_sizes("arrivals")) == 500


def test_buckets_are_immutable_tuples():
    buckets = MinuteBuckets.build([make_trip(5, 6)])
    assert isinstance(buckets.departures, tuple)
    assert all(isinstance(slot, tuple) for slot in buckets.arrivals)
