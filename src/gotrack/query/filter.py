# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

import pendulum

from gotrack.model.entry import Entry
from gotrack.model.filter import EntryFilter

ATTRIBUTE_FILTER_KEYS = ("location", "type", "speed", "amount")


def filter_entries(entries: list[Entry], entry_filter: EntryFilter) -> list[Entry]:
    filtered_entries = []
    for entry in entries:
        if entry_filter["start"] is not None and entry["timestamp"] < entry_filter["start"]:
            continue
        if entry_filter["end"] is not None and entry["timestamp"] > entry_filter["end"]:
            continue
        if any(
            entry_filter[key] is not None  # type: ignore[literal-required]
            and entry[key] != entry_filter[key]  # type: ignore[literal-required]
            for key in ATTRIBUTE_FILTER_KEYS
        ):
            continue
        filtered_entries.append(entry)
    return deepcopy(filtered_entries)


def default_date_range(
    days: int = 30,
) -> tuple[pendulum.DateTime, pendulum.DateTime]:
    """Local start of day `days` ago through the end of today, in UTC."""
    today = pendulum.today("local")
    start = today.subtract(days=days).start_of("day")
    end = today.end_of("day")
    return start.in_tz("UTC"), end.in_tz("UTC")


def build_entry_filter(
    start: Optional[pendulum.DateTime] = None,
    end: Optional[pendulum.DateTime] = None,
    location: Optional[str] = None,
    type: Optional[str] = None,
    speed: Optional[str] = None,
    amount: Optional[str] = None,
    default_days: Optional[int] = None,
) -> EntryFilter:
    """
    Assemble a filter. When `default_days` is given, a missing start or end
    falls back to the default dashboard range.
    """
    if default_days is not None:
        default_start, default_end = default_date_range(default_days)
        start = start if start is not None else default_start
        end = end if end is not None else default_end
    return {
        "start": start,
        "end": end,
        "location": location or None,
        "type": type or None,
        "speed": speed or None,
        "amount": amount or None,
    }
