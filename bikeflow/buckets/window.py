# bikeflow/buckets/window.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple, Union

from bikeflow.errors import InvalidArgument
from bikeflow.trips.types import MINUTES_PER_DAY, Trip

ALL_TIME_SENTINEL = -1
DEFAULT_HALF_WINDOW_MINUTES = 60


@dataclass(frozen=True)
class AllTime:
    """No time filter: every trip of the day counts."""


@dataclass(frozen=True)
class WindowCentered:
    minute: int

    def __post_init__(self):
        _check_minute(self.minute)


Query = Union[AllTime, WindowCentered]


def _check_half_window(half_window) -> None:
    if not isinstance(half_window, int) or isinstance(half_window, bool):
        raise InvalidArgument(f"half_window must be an int, got {half_window!r}")
    # 2*half must stay below 1440 or the window bounds collapse onto each other
    if not (1 <= half_window < MINUTES_PER_DAY // 2):
        raise InvalidArgument(f"half_window must be in [1, 719], got {half_window}")


def _check_minute(minute) -> None:
    if not isinstance(minute, int) or isinstance(minute, bool):
        raise InvalidArgument(f"minute must be an int, got {minute!r}")
    if not (0 <= minute < MINUTES_PER_DAY):
        raise InvalidArgument(f"minute must be in [0, 1439], got {minute}")


def parse_query(value) -> Query:
    """
    Controller value -> Query.
      -1        -> AllTime()
      0..1439   -> WindowCentered(value)
    Anything else is rejected rather than wrapped.
    """
    if isinstance(value, (AllTime, WindowCentered)):
        return value
    if isinstance(value, int) and not isinstance(value, bool) and value == ALL_TIME_SENTINEL:
        return AllTime()
    return WindowCentered(value)


def window_bounds(minute: int, half_window: int = DEFAULT_HALF_WINDOW_MINUTES) -> Tuple[int, int]:
    _check_half_window(half_window)
    lo = (minute - half_window + MINUTES_PER_DAY) % MINUTES_PER_DAY
    hi = (minute + half_window) % MINUTES_PER_DAY
    return lo, hi


def covered_minutes(query: Query, half_window: int = DEFAULT_HALF_WINDOW_MINUTES) -> Iterator[int]:
    """
    Bucket indices a query touches, in scan order.
    Wrapping windows yield [lo, 1439] first, then [0, hi).
    """
    _check_half_window(half_window)
    if isinstance(query, AllTime):
        yield from range(MINUTES_PER_DAY)
        return

    lo, hi = window_bounds(query.minute, half_window)
    if lo > hi:
        yield from range(lo, MINUTES_PER_DAY)
        yield from range(0, hi)
    else:
        yield from range(lo, hi)


def filter_by_minute(
    bucket_array: Sequence[Sequence[Trip]],
    query: Query,
    half_window: int = DEFAULT_HALF_WINDOW_MINUTES,
) -> List[Trip]:
    out: List[Trip] = []
    for m in covered_minutes(query, half_window):
        out.extend(bucket_array[m])
    return out
