# SPDX-License-Identifier: MIT

from copy import deepcopy

from gotrack.model.entry import Entry


def sort_entries(entries: list[Entry], descending: bool = True) -> list[Entry]:
    """Order entries by timestamp, newest first unless `descending` is False."""
    sorted_entries = deepcopy(entries)
    sorted_entries.sort(key=lambda entry: entry["timestamp"], reverse=descending)
    return sorted_entries
