# bikeflow/trips/load_trips.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Tuple

import pandas as pd
from colorama import Fore, Style
from tqdm import tqdm

from bikeflow.errors import SchemaError
from bikeflow.trips.types import Trip


@dataclass(frozen=True)
class TripSchema:
    start_time: str
    end_time: str
    start_station: str
    end_station: str
    # None -> ISO-8601
    time_fmt: Optional[str] = None


# Bike Share Toronto ridership export, e.g. "09/01/2024 00:00"
TORONTO_SCHEMA = TripSchema(
    start_time="Start Time",
    end_time="End Time",
    start_station="Start Station Id",
    end_station="End Station Id",
    time_fmt="%m/%d/%Y %H:%M",
)

# Bluebikes / GBFS-style export, e.g. "2024-03-01 08:14:21.512"
BLUEBIKES_SCHEMA = TripSchema(
    start_time="started_at",
    end_time="ended_at",
    start_station="start_station_id",
    end_station="end_station_id",
)

KNOWN_SCHEMAS = (TORONTO_SCHEMA, BLUEBIKES_SCHEMA)


@dataclass(frozen=True)
class IngestReport:
    rows_read: int
    trips_kept: int
    dropped_bad_time: int
    dropped_missing_station: int

    @property
    def dropped(self) -> int:
        return self.dropped_bad_time + self.dropped_missing_station


def detect_schema(columns: Iterable[str]) -> TripSchema:
    cols = {str(c).strip() for c in columns}
    for schema in KNOWN_SCHEMAS:
        needed = {schema.start_time, schema.end_time, schema.start_station, schema.end_station}
        if needed <= cols:
            return schema
    raise SchemaError(
        "Trips CSV must contain either "
        "'Start Time/End Time/Start Station Id/End Station Id' or "
        "'started_at/ended_at/start_station_id/end_station_id' columns"
    )


def _parse_dt(s, time_fmt: Optional[str]) -> Optional[datetime]:
    if isinstance(s, datetime):
        return s
    if s is None:
        return None
    s = str(s).strip()
    if not s:
        return None
    # parsed exactly like the load_trips_csv columns
    ts = pd.to_datetime(s, format=time_fmt or "ISO8601", errors="coerce")
    if pd.isna(ts):
        return None
    return ts.to_pydatetime()


def _clean_id(v) -> str:
    if v is None:
        return ""
    if isinstance(v, float) and pd.isna(v):
        return ""
    return str(v).strip()


def trips_from_rows(
    rows: Iterable[Mapping],
    schema: TripSchema = TORONTO_SCHEMA,
) -> Tuple[List[Trip], IngestReport]:
    """
    Mapping rows (csv.DictReader, JSON records, ...) -> trips.

    Rows with an unparseable start/end time or an empty station id are dropped
    and counted; a bad row never fails the load.
    """
    trips: List[Trip] = []
    rows_read = 0
    bad_time = 0
    missing_station = 0

    for row in rows:
        rows_read += 1

        started_at = _parse_dt(row.get(schema.start_time), schema.time_fmt)
        ended_at = _parse_dt(row.get(schema.end_time), schema.time_fmt)
        if started_at is None or ended_at is None:
            bad_time += 1
            continue

        s0 = _clean_id(row.get(schema.start_station))
        s1 = _clean_id(row.get(schema.end_station))
        if not s0 or not s1:
            missing_station += 1
            continue

        trips.append(Trip.from_datetimes(started_at, ended_at, s0, s1))

    report = IngestReport(
        rows_read=rows_read,
        trips_kept=len(trips),
        dropped_bad_time=bad_time,
        dropped_missing_station=missing_station,
    )
    return trips, report


def _to_datetime(series: pd.Series, time_fmt: Optional[str]) -> pd.Series:
    return pd.to_datetime(series, format=time_fmt or "ISO8601", errors="coerce")


def load_trips_csv(
    trips_csv_path: str | Path,
    schema: Optional[TripSchema] = None,
    encoding: str = "utf-8-sig",
) -> Tuple[List[Trip], IngestReport]:
    """
    Load a ridership CSV into Trip records.

    Only the four columns we need are read. The column layout is detected
    from the header unless a schema is given.
    """
    trips_csv_path = Path(trips_csv_path)

    print(f"{Fore.CYAN}Reading trips from {trips_csv_path.name}…{Style.RESET_ALL}")

    header = pd.read_csv(trips_csv_path, nrows=0, encoding=encoding)
    colmap = {c.strip(): c for c in header.columns}
    if schema is None:
        schema = detect_schema(colmap.keys())

    wanted = [schema.start_time, schema.end_time, schema.start_station, schema.end_station]
    missing = [c for c in wanted if c not in colmap]
    if missing:
        raise SchemaError(f"Trips CSV missing columns: {missing}")

    df = pd.read_csv(
        trips_csv_path,
        usecols=[colmap[c] for c in wanted],
        dtype=str,
        encoding=encoding,
        encoding_errors="replace",
    )
    df.columns = [c.strip() for c in df.columns]
    rows_read = len(df)

    start = _to_datetime(df[schema.start_time], schema.time_fmt)
    end = _to_datetime(df[schema.end_time], schema.time_fmt)
    time_ok = start.notna() & end.notna()

    s0 = df[schema.start_station].fillna("").str.strip()
    s1 = df[schema.end_station].fillna("").str.strip()
    station_ok = (s0 != "") & (s1 != "")

    keep = time_ok & station_ok
    bad_time = int((~time_ok).sum())
    missing_station = int((time_ok & ~station_ok).sum())

    start_min = (start[keep].dt.hour * 60 + start[keep].dt.minute) % 1440
    end_min = (end[keep].dt.hour * 60 + end[keep].dt.minute) % 1440

    trips: List[Trip] = []
    for sm, em, a, b in tqdm(
        zip(start_min.astype(int), end_min.astype(int), s0[keep], s1[keep]),
        total=int(keep.sum()),
        desc="Building trips",
    ):
        trips.append(Trip(start_minute=int(sm), end_minute=int(em), start_station_id=a, end_station_id=b))

    report = IngestReport(
        rows_read=rows_read,
        trips_kept=len(trips),
        dropped_bad_time=bad_time,
        dropped_missing_station=missing_station,
    )

    if report.dropped:
        print(
            f"{Fore.YELLOW}Dropped {report.dropped} malformed rows "
            f"({bad_time} bad timestamps, {missing_station} missing station ids){Style.RESET_ALL}"
        )
    print(f"{Fore.GREEN}Loaded {len(trips):,} trips.{Style.RESET_ALL}")

    return trips, report
