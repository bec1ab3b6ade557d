# SPDX-License-Identifier: MIT

import csv
import datetime
import io
from typing import Any

import pendulum

from gotrack.errors import ExportError
from gotrack.model.entry import Entry
from gotrack.time import datetime_to_iso_str

RECORD_COLUMNS = ["timestamp", "location", "type", "speed", "amount", "notes"]

FULL_COLUMNS = [
    "id",
    "timestamp",
    "location",
    "type",
    "speed",
    "amount",
    "notes",
    "duration_from_last_hours",
    "created",
]


def _csv_value(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, pendulum.DateTime):
        return datetime_to_iso_str(value)
    return value


def entries_to_csv(entries: list[Entry], columns: list[str] = RECORD_COLUMNS) -> str:
    """
    Render entries as CSV text.

    Text values are quoted with inner quotes doubled, numbers are written
    bare and missing values are left empty.
    """
    if len(entries) == 0:
        raise ExportError("No data to export")

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    writer.writerow(columns)
    for entry in entries:
        writer.writerow([_csv_value(entry.get(column)) for column in columns])
    return buffer.getvalue()


def export_filename(today: datetime.date) -> str:
    return f"gotrack-export-{today.isoformat()}.csv"
