# bikeflow/util/time_fmt.py
from bikeflow.trips.types import MINUTES_PER_DAY


def format_hhmm(minute: int) -> str:
    m = int(minute) % MINUTES_PER_DAY
    return f"{m // 60:02d}:{m % 60:02d}"


def format_minute_label(minute: int) -> str:
    """
    Slider label, e.g. 0 -> "12:00 AM", 754 -> "12:34 PM", -1 -> "Any time".
    """
    if int(minute) == -1:
        return "Any time"

    m = int(minute) % MINUTES_PER_DAY
    hh, mm = divmod(m, 60)
    suffix = "AM" if hh < 12 else "PM"
    hh12 = hh % 12 or 12
    return f"{hh12}:{mm:02d} {suffix}"
