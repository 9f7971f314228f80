import json
from pathlib import Path
from typing import List

from bikeflow.trips.types import Station


def load_stations(path: str | Path, id_field: str = "station_id") -> List[Station]:
    """
    Load bike share stations from a GBFS station_information.json.

    id_field picks which station key the trip log refers to
    ("station_id", or "short_name" for logs keyed by short name).
    Stations missing that key or coordinates are skipped.
    """
    with open(path) as f:
        raw = json.load(f)["data"]["stations"]

    stations = []
    for s in raw:
        sid = s.get(id_field)
        if sid is None or s.get("lat") is None or s.get("lon") is None:
            continue

        cap = s.get("capacity")
        stations.append(
            Station(
                id=str(sid),
                name=s.get("name", ""),
                lat=float(s["lat"]),
                lon=float(s["lon"]),
                capacity=int(cap) if cap is not None else None,
            )
        )

    return stations
