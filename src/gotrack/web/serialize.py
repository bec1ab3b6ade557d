# SPDX-License-Identifier: MIT

from typing import Any, Optional

from gotrack.model.entry import Entry
from gotrack.service.reminder import ReminderOutcome
from gotrack.service.stats import DAYS_OF_WEEK, Summary
from gotrack.time import datetime_to_iso_str, datetime_to_iso_str_optional
from gotrack.view.views.entry import format_gap


def entry_to_json(entry: Entry) -> dict[str, Any]:
    return {
        "id": entry["id"],
        "timestamp": datetime_to_iso_str(entry["timestamp"]),
        "location": entry["location"],
        "type": entry["type"],
        "speed": entry["speed"],
        "amount": entry["amount"],
        "notes": entry["notes"],
        "duration_from_last_hours": entry["duration_from_last_hours"],
        "gap": format_gap(entry["duration_from_last_hours"]),
        "created": datetime_to_iso_str(entry["created"]),
    }


def optional_entry_to_json(entry: Optional[Entry]) -> Optional[dict[str, Any]]:
    if entry is None:
        return None
    return entry_to_json(entry)


def summary_to_json(summary: Summary) -> dict[str, Any]:
    average = summary["average_hours_between"]
    return {
        "total": summary["total"],
        "average_hours_between": round(average, 1) if average is not None else None,
        "hours_since_last": summary["hours_since_last"],
    }


def day_of_week_to_json(counts: list[int]) -> list[dict[str, Any]]:
    return [{"day": day, "count": count} for day, count in zip(DAYS_OF_WEEK, counts)]


def hour_of_day_to_json(counts: list[int]) -> list[dict[str, Any]]:
    return [{"hour": hour, "count": count} for hour, count in enumerate(counts)]


def reminder_outcome_to_json(outcome: ReminderOutcome) -> dict[str, Any]:
    return {
        "status": outcome["status"],
        "elapsed_hours": outcome["elapsed_hours"],
        "threshold": outcome["threshold"],
        "last_timestamp": datetime_to_iso_str_optional(outcome["last_timestamp"]),
    }
