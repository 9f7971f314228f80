# bikeflow/buckets/minute_buckets.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from bikeflow.trips.types import MINUTES_PER_DAY, Trip

BucketArray = Tuple[Tuple[Trip, ...], ...]


@dataclass(frozen=True)
class MinuteBuckets:
    """
    departures: 1440 slots, slot m holds trips with start_minute == m
    arrivals:   1440 slots, slot m holds trips with end_minute == m

    Built once per dataset load and never mutated afterwards.
    """
    departures: BucketArray
    arrivals: BucketArray

    @classmethod
    def build(cls, trips: Iterable[Trip]) -> "MinuteBuckets":
        dep: List[List[Trip]] = [[] for _ in range(MINUTES_PER_DAY)]
        arr: List[List[Trip]] = [[] for _ in range(MINUTES_PER_DAY)]

        for trip in trips:
            dep[trip.start_minute % MINUTES_PER_DAY].append(trip)
            arr[trip.end_minute % MINUTES_PER_DAY].append(trip)

        return cls(
            departures=tuple(tuple(slot) for slot in dep),
            arrivals=tuple(tuple(slot) for slot in arr),
        )

    @property
    def trip_count(self) -> int:
        return sum(len(slot) for slot in self.departures)

    def bucket_sizes(self, kind: str = "departures") -> List[int]:
        if kind == "departures":
            slots = self.departures
        elif kind == "arrivals":
            slots = self.arrivals
        else:
            raise ValueError("kind must be 'departures' or 'arrivals'")
        return [len(slot) for slot in slots]
