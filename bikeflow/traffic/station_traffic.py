# bikeflow/traffic/station_traffic.py
from __future__ import annotations

from collections import Counter
from typing import Iterable, List

from bikeflow.trips.types import Station, Trip


def count_by_station(trips: Iterable[Trip], key: str) -> Counter:
    """
    key: "start_station_id" (departures) or "end_station_id" (arrivals)
    """
    return Counter(getattr(t, key) for t in trips)


def compute_station_traffic(
    stations: Iterable[Station],
    filtered_departures: Iterable[Trip],
    filtered_arrivals: Iterable[Trip],
) -> List[Station]:
    """
    Returns fresh Station objects with departures / arrivals / total_traffic set.

    Trips pointing at station ids we don't know (retired stations etc.)
    are simply not counted anywhere.
    """
    dep = count_by_station(filtered_departures, "start_station_id")
    arr = count_by_station(filtered_arrivals, "end_station_id")

    return [s.with_traffic(dep.get(s.id, 0), arr.get(s.id, 0)) for s in stations]
