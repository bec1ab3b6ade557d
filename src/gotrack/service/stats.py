# SPDX-License-Identifier: MIT

import datetime
import math
from typing import Optional, TypedDict

from gotrack.model.entry import Entry
from gotrack.time import hours_between

DAYS_OF_WEEK = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]


class Summary(TypedDict):
    total: int
    average_hours_between: Optional[float]
    hours_since_last: Optional[int]


def get_average_hours_between(entries: list[Entry]) -> Optional[float]:
    """
    Mean gap between entries.

    Uses the stored `duration_from_last_hours` values when any entry has one,
    otherwise the gaps between the sorted timestamps.
    """
    durations = [
        entry["duration_from_last_hours"]
        for entry in entries
        if entry["duration_from_last_hours"] is not None
    ]
    if len(durations) > 0:
        return sum(durations) / len(durations)

    if len(entries) < 2:
        return None
    timestamps = sorted(entry["timestamp"] for entry in entries)
    total_hours = hours_between(timestamps[-1], timestamps[0])
    return total_hours / (len(timestamps) - 1)


def get_hours_since_last(
    entries: list[Entry], now: datetime.datetime
) -> Optional[int]:
    if len(entries) == 0:
        return None
    last_timestamp = max(entry["timestamp"] for entry in entries)
    # Half hours round up, as in the dashboard
    return math.floor(hours_between(now, last_timestamp) + 0.5)


def get_summary(entries: list[Entry], now: datetime.datetime) -> Summary:
    return {
        "total": len(entries),
        "average_hours_between": get_average_hours_between(entries),
        "hours_since_last": get_hours_since_last(entries, now),
    }


def get_distribution(entries: list[Entry], field: str) -> dict[str, int]:
    """Count entries per value of `field`, in order of first appearance."""
    counts: dict[str, int] = {}
    for entry in entries:
        value = str(entry[field])  # type: ignore[literal-required]
        counts[value] = counts.get(value, 0) + 1
    return counts


def get_day_of_week_counts(entries: list[Entry]) -> list[int]:
    """Entries per local weekday, Sunday first."""
    counts = [0] * 7
    for entry in entries:
        # isoweekday: Monday is 1, Sunday is 7
        counts[entry["timestamp"].in_tz("local").isoweekday() % 7] += 1
    return counts


def get_hour_of_day_counts(entries: list[Entry]) -> list[int]:
    """Entries per local hour of day, 0 through 23."""
    counts = [0] * 24
    for entry in entries:
        counts[entry["timestamp"].in_tz("local").hour] += 1
    return counts


def format_elapsed(hours: float) -> str:
    days = math.floor(hours / 24)
    remaining_hours = math.floor(hours % 24)
    if days > 0:
        return f"{days} days and {remaining_hours} hours"
    return f"{remaining_hours} hours"
