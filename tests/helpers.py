from __future__ import annotations

import random
from typing import List

from bikeflow.trips.types import Station, Trip


def make_trip(start: int, end: int, s0: str = "A", s1: str = "B") -> Trip:
    return Trip(start_minute=start, end_minute=end, start_station_id=s0, end_station_id=s1)


def make_station(sid: str, lat: float = 42.36, lon: float = -71.09) -> Station:
    return Station(id=sid, lat=lat, lon=lon, name=f"Station {sid}")


def random_trips(rng: random.Random, n: int, station_ids: List[str]) -> List[Trip]:
    return [
        make_trip(
            rng.randrange(1440),
            rng.randrange(1440),
            rng.choice(station_ids),
            rng.choice(station_ids),
        )
        for _ in range(n)
    ]
