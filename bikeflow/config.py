# bikeflow/config.py
from __future__ import annotations

import os
from dataclasses import dataclass

from bikeflow.buckets.window import DEFAULT_HALF_WINDOW_MINUTES, _check_half_window
from bikeflow.errors import InvalidArgument

# radius ranges for the station circles (px)
UNFILTERED_RADIUS_RANGE = (0.0, 25.0)
FILTERED_RADIUS_RANGE = (3.0, 50.0)


@dataclass(frozen=True)
class EngineConfig:
    half_window_minutes: int = DEFAULT_HALF_WINDOW_MINUTES
    unfiltered_radius_range: tuple[float, float] = UNFILTERED_RADIUS_RANGE
    filtered_radius_range: tuple[float, float] = FILTERED_RADIUS_RANGE
    station_id_field: str = "station_id"

    def __post_init__(self):
        _check_half_window(self.half_window_minutes)

    def radius_range(self, is_filtered: bool) -> tuple[float, float]:
        return self.filtered_radius_range if is_filtered else self.unfiltered_radius_range

    @classmethod
    def from_env(cls, environ=None) -> "EngineConfig":
        """
        Reads:
          BIKEFLOW_HALF_WINDOW        (int minutes, default 60)
          BIKEFLOW_STATION_ID_FIELD   (station_id | short_name)
        """
        env = os.environ if environ is None else environ

        raw_half = env.get("BIKEFLOW_HALF_WINDOW", str(DEFAULT_HALF_WINDOW_MINUTES))
        try:
            half = int(raw_half)
        except ValueError:
            raise InvalidArgument(f"BIKEFLOW_HALF_WINDOW is not an int: {raw_half!r}")

        return cls(
            half_window_minutes=half,
            station_id_field=env.get("BIKEFLOW_STATION_ID_FIELD", "station_id"),
        )
