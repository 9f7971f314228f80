# bikeflow/traffic/scales.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, Tuple

import numpy as np

from bikeflow.buckets.window import Query, WindowCentered
from bikeflow.trips.types import Station, departure_ratio

# quantized flow levels: mostly arrivals / balanced / mostly departures
FLOW_LEVELS = (0.0, 0.5, 1.0)


@dataclass(frozen=True)
class TrafficScales:
    max_total_traffic: int
    is_filtered: bool
    ratios: Dict[str, float] = field(default_factory=dict)

    def departure_ratio_of(self, station_id: str) -> float:
        # unknown station == no traffic
        return self.ratios.get(str(station_id), 0.5)


def derive_scales(stations: Iterable[Station], query: Query) -> TrafficScales:
    stations = list(stations)

    totals = np.fromiter((s.total_traffic for s in stations), dtype=np.int64, count=len(stations))
    max_total = int(totals.max()) if totals.size else 0

    ratios = {s.id: departure_ratio(s.departures, s.total_traffic) for s in stations}

    return TrafficScales(
        max_total_traffic=max_total,
        is_filtered=isinstance(query, WindowCentered),
        ratios=ratios,
    )


def sqrt_scale(value: float, domain_max: float, out_range: Tuple[float, float]) -> float:
    """
    Square-root scale from [0, domain_max] onto out_range, so circle area
    tracks traffic. An empty domain maps everything to the range minimum.
    """
    r0, r1 = out_range
    if domain_max <= 0:
        return float(r0)
    v = min(max(float(value), 0.0), float(domain_max))
    return r0 + (r1 - r0) * math.sqrt(v / domain_max)


def quantize_flow(ratio: float) -> float:
    """
    [0, 1] -> one of FLOW_LEVELS, split at thirds.
    """
    r = min(max(float(ratio), 0.0), 1.0)
    idx = min(int(r * len(FLOW_LEVELS)), len(FLOW_LEVELS) - 1)
    return FLOW_LEVELS[idx]
