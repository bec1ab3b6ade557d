# SPDX-License-Identifier: MIT

import datetime
from decimal import ROUND_HALF_DOWN, ROUND_HALF_UP, Decimal
from typing import Optional

from gotrack.model.entry import Entry
from gotrack.time import hours_between

HUNDREDTHS = Decimal("0.01")


def round_hours(hours: float) -> float:
    """Round to two decimals, halves toward positive infinity."""
    rounding = ROUND_HALF_UP if hours >= 0 else ROUND_HALF_DOWN
    return float(Decimal(repr(hours)).quantize(HUNDREDTHS, rounding=rounding))


def compute_duration(
    current_timestamp: datetime.datetime,
    previous_timestamp: Optional[datetime.datetime],
) -> Optional[float]:
    """
    Hours elapsed from `previous_timestamp` to `current_timestamp`.

    Returns None when there is no previous entry. A current timestamp earlier
    than the previous one gives a negative duration.
    """
    if previous_timestamp is None:
        return None
    return round_hours(hours_between(current_timestamp, previous_timestamp))


def annotate_duration(entry: Entry, latest_entry: Optional[Entry]) -> Entry:
    """
    Set `duration_from_last_hours` from the latest stored entry.

    The latest entry is whatever the datastore holds at write time, which is
    not necessarily the entry's chronological predecessor.
    """
    previous_timestamp = None if latest_entry is None else latest_entry["timestamp"]
    entry["duration_from_last_hours"] = compute_duration(
        entry["timestamp"], previous_timestamp
    )
    return entry
