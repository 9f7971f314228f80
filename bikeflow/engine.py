# bikeflow/engine.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from colorama import Fore, Style

from bikeflow.buckets.minute_buckets import MinuteBuckets
from bikeflow.buckets.window import Query, filter_by_minute, parse_query
from bikeflow.config import EngineConfig
from bikeflow.errors import NotReady
from bikeflow.traffic.scales import TrafficScales, derive_scales
from bikeflow.traffic.station_traffic import compute_station_traffic
from bikeflow.trips.load_trips import IngestReport, TripSchema, load_trips_csv
from bikeflow.trips.types import Station, Trip
from bikeflow.util.time_fmt import format_hhmm
from bikeflow.util.stations import load_stations


@dataclass(frozen=True)
class TrafficResult:
    query: Query
    stations: Tuple[Station, ...]
    scales: TrafficScales

    @property
    def is_filtered(self) -> bool:
        return self.scales.is_filtered

    @property
    def max_total_traffic(self) -> int:
        return self.scales.max_total_traffic

    def to_dict(self) -> dict:
        minute = getattr(self.query, "minute", -1)
        return {
            "minute": minute,
            "time": format_hhmm(minute) if self.is_filtered else None,
            "is_filtered": self.is_filtered,
            "max_total_traffic": self.max_total_traffic,
            "stations": [s.to_dict() for s in self.stations],
        }


class TrafficEngine:
    """
    Build-once / query-many station traffic engine.

      engine = TrafficEngine()
      engine.set_stations(stations)
      engine.load_trips(trips)
      result = engine.query(480)   # 08:00 ± half window
      result = engine.query(-1)    # whole day
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self._buckets: Optional[MinuteBuckets] = None
        self._stations: Optional[Tuple[Station, ...]] = None
        self.ingest_report: Optional[IngestReport] = None

    # ----------------------------------------------------------------- loading
    def set_stations(self, stations: Iterable[Station]) -> None:
        self._stations = tuple(stations)

    def load_trips(self, trips: Iterable[Trip], report: Optional[IngestReport] = None) -> MinuteBuckets:
        buckets = MinuteBuckets.build(trips)
        # single assignment: queries see the old buckets or the new ones, never half of each
        self._buckets = buckets
        self.ingest_report = report
        return buckets

    @classmethod
    def from_files(
        cls,
        trips_csv_path: str | Path,
        stations_path: str | Path,
        config: Optional[EngineConfig] = None,
        schema: Optional[TripSchema] = None,
    ) -> "TrafficEngine":
        engine = cls(config)

        print(f"{Fore.CYAN}Loading station registry…{Style.RESET_ALL}")
        engine.set_stations(load_stations(stations_path, id_field=engine.config.station_id_field))

        trips, report = load_trips_csv(trips_csv_path, schema=schema)

        print(f"{Fore.CYAN}Bucketing {len(trips):,} trips by minute…{Style.RESET_ALL}")
        engine.load_trips(trips, report)

        print(f"{Fore.GREEN}Traffic engine ready ({len(engine.stations)} stations).{Style.RESET_ALL}")
        return engine

    # --------------------------------------------------------------- accessors
    @property
    def is_ready(self) -> bool:
        return self._buckets is not None and self._stations is not None

    @property
    def buckets(self) -> MinuteBuckets:
        if self._buckets is None:
            raise NotReady("trips have not been loaded yet")
        return self._buckets

    @property
    def stations(self) -> Tuple[Station, ...]:
        if self._stations is None:
            raise NotReady("stations have not been loaded yet")
        return self._stations

    # ------------------------------------------------------------------ query
    def filtered_trips(self, query: Query) -> Tuple[List[Trip], List[Trip]]:
        buckets = self.buckets
        half = self.config.half_window_minutes
        return (
            filter_by_minute(buckets.departures, query, half),
            filter_by_minute(buckets.arrivals, query, half),
        )

    def query(self, minute) -> TrafficResult:
        """
        minute: -1 (whole day), 0..1439, or a Query value.
        Raises InvalidArgument for anything else, NotReady before loading.
        """
        q = parse_query(minute)
        stations = self.stations
        departures, arrivals = self.filtered_trips(q)

        updated = compute_station_traffic(stations, departures, arrivals)
        return TrafficResult(
            query=q,
            stations=tuple(updated),
            scales=derive_scales(updated, q),
        )
