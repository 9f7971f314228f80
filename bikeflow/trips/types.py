# bikeflow/trips/types.py
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

MINUTES_PER_DAY = 1440


def minute_of_day(hour: int, minute: int) -> int:
    # malformed components still land in [0, 1439]
    return (int(hour) * 60 + int(minute)) % MINUTES_PER_DAY


def departure_ratio(departures: int, total_traffic: int) -> float:
    """
    Share of a station's traffic that was outbound.
    A station with no traffic sits at the neutral midpoint (0.5).
    """
    if total_traffic == 0:
        return 0.5
    return departures / total_traffic


@dataclass(frozen=True)
class Trip:
    start_minute: int
    end_minute: int
    start_station_id: str
    end_station_id: str

    @classmethod
    def from_datetimes(
        cls,
        started_at: datetime,
        ended_at: datetime,
        start_station_id: str,
        end_station_id: str,
    ) -> "Trip":
        return cls(
            start_minute=minute_of_day(started_at.hour, started_at.minute),
            end_minute=minute_of_day(ended_at.hour, ended_at.minute),
            start_station_id=str(start_station_id),
            end_station_id=str(end_station_id),
        )


@dataclass
class Station:
    id: str
    lat: float
    lon: float
    name: str = ""
    capacity: int | None = None
    departures: int = 0
    arrivals: int = 0
    total_traffic: int = 0

    @property
    def departure_ratio(self) -> float:
        return departure_ratio(self.departures, self.total_traffic)

    def with_traffic(self, departures: int, arrivals: int) -> "Station":
        return replace(
            self,
            departures=int(departures),
            arrivals=int(arrivals),
            total_traffic=int(departures) + int(arrivals),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "lat": self.lat,
            "lon": self.lon,
            "departures": self.departures,
            "arrivals": self.arrivals,
            "total_traffic": self.total_traffic,
            "departure_ratio": self.departure_ratio,
        }
