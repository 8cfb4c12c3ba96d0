"""Modification-time columns: month, day, and clock time or year."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime

SIX_MONTHS_SECONDS = 182 * 24 * 60 * 60
FUTURE_SKEW_SECONDS = 5
EPOCH_YEAR = 1970
MEAN_YEAR_SECONDS = 31_556_952
MONTH_ABBREVIATIONS: tuple[str, ...] = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


@dataclass(frozen=True)
class TimestampFields:
    modified_at_ns: int
    month: str
    day: str
    time: str


def shows_year(modified_seconds: int, now_seconds: int) -> bool:
    """Return whether a timestamp is old or far enough in the future to show its year."""
    if modified_seconds < now_seconds - SIX_MONTHS_SECONDS:
        return True
    return modified_seconds > now_seconds + FUTURE_SKEW_SECONDS


def estimated_year(modified_seconds: int) -> int:
    """Approximate the calendar year of an epoch offset using the mean Gregorian year."""
    return EPOCH_YEAR + modified_seconds // MEAN_YEAR_SECONDS


def _out_of_range_fields(mtime_ns: int, modified_seconds: int) -> TimestampFields:
    # Outside datetime's range: pin month and day to the nearest end of the year.
    if modified_seconds < 0:
        month, day = "Jan", "01"
    else:
        month, day = "Dec", "31"
    return TimestampFields(
        modified_at_ns=mtime_ns,
        month=month,
        day=day,
        time=str(estimated_year(modified_seconds)),
    )


def format_timestamp(mtime_ns: int, now: float | None = None) -> TimestampFields:
    """Split ``mtime_ns`` into the month/day/time display fields in local time.

    ``now`` (epoch seconds) defaults to the current clock and is only
    overridden by tests. Times beyond what :mod:`datetime` can represent show
    the nearest year end (``Dec 31`` or ``Jan 01``) and an estimated year.
    """
    now_seconds = int(time.time() if now is None else now)
    modified_seconds = mtime_ns // 1_000_000_000
    try:
        moment = datetime.fromtimestamp(modified_seconds)
    except (ValueError, OverflowError, OSError):
        return _out_of_range_fields(mtime_ns, modified_seconds)

    if shows_year(modified_seconds, now_seconds):
        clock = f"{moment.year}"
    else:
        clock = f"{moment.hour:02d}:{moment.minute:02d}"

    return TimestampFields(
        modified_at_ns=mtime_ns,
        month=MONTH_ABBREVIATIONS[moment.month - 1],
        day=f"{moment.day:02d}",
        time=clock,
    )


__all__ = [
    "SIX_MONTHS_SECONDS",
    "FUTURE_SKEW_SECONDS",
    "TimestampFields",
    "shows_year",
    "estimated_year",
    "format_timestamp",
]
