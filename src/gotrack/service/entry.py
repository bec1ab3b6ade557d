# SPDX-License-Identifier: MIT

import logging
from typing import Any, Mapping, Optional, Protocol

import pendulum

from gotrack.errors import EntryValidationError
from gotrack.model.entry import CATEGORY_FIELDS, EntityId, Entry
from gotrack.service.duration import annotate_duration
from gotrack.template.entry import get_entry_template
from gotrack.time import datetime_from_str, now_utc

logger = logging.getLogger(__name__)


class WritableEntryRepository(Protocol):
    def get_latest_entry(self) -> Optional[Entry]: ...

    def save_new_entry(self, entry: Entry) -> EntityId: ...

    def delete_entry(self, id: EntityId) -> None: ...


def validate_entry(entry: Entry) -> None:
    """Raise EntryValidationError if a categorical field has an unknown value."""
    for field, allowed in CATEGORY_FIELDS.items():
        value = entry[field]  # type: ignore[literal-required]
        if value not in allowed:
            raise EntryValidationError(
                f"Invalid {field}: {value!r}. Valid options: {', '.join(allowed)}"
            )
    if entry["notes"] is not None and not isinstance(entry["notes"], str):
        raise EntryValidationError("Notes must be text")


def build_entry(
    timestamp: Optional[pendulum.DateTime] = None,
    location: Optional[str] = None,
    type: Optional[str] = None,
    speed: Optional[str] = None,
    amount: Optional[str] = None,
    notes: Optional[str] = None,
) -> Entry:
    entry = get_entry_template()
    if timestamp is not None:
        entry["timestamp"] = timestamp
    if location is not None:
        entry["location"] = location  # type: ignore[typeddict-item]
    if type is not None:
        entry["type"] = type  # type: ignore[typeddict-item]
    if speed is not None:
        entry["speed"] = speed  # type: ignore[typeddict-item]
    if amount is not None:
        entry["amount"] = amount  # type: ignore[typeddict-item]
    if notes is not None and notes.strip() != "":
        entry["notes"] = notes
    return entry


def entry_from_payload(payload: Mapping[str, Any]) -> Entry:
    """Build an entry from a submitted JSON or form mapping."""
    raw_timestamp = payload.get("timestamp")
    timestamp: Optional[pendulum.DateTime] = None
    if raw_timestamp:
        try:
            timestamp = datetime_from_str(str(raw_timestamp))
        except ValueError as e:
            raise EntryValidationError(f"Invalid timestamp: {raw_timestamp!r}") from e

    for field in (*CATEGORY_FIELDS, "notes"):
        value = payload.get(field)
        if value is not None and not isinstance(value, str):
            raise EntryValidationError(f"Invalid {field}: {value!r} must be text")

    return build_entry(
        timestamp=timestamp,
        location=payload.get("location"),
        type=payload.get("type"),
        speed=payload.get("speed"),
        amount=payload.get("amount"),
        notes=payload.get("notes"),
    )


def create_entry(repository: WritableEntryRepository, entry: Entry) -> Entry:
    """
    Validate an entry, annotate it with the gap from the latest stored entry
    and save it.

    Reading the latest entry and saving the new one are not atomic, so two
    concurrent submissions can both measure from the same predecessor.
    """
    validate_entry(entry)
    entry["created"] = now_utc()

    latest_entry = repository.get_latest_entry()
    annotate_duration(entry, latest_entry)

    entry["id"] = repository.save_new_entry(entry)
    logger.info(
        "Logged entry %s (%s hours since last)",
        entry["id"],
        entry["duration_from_last_hours"],
    )
    return entry


def delete_entries(repository: WritableEntryRepository, ids: list[EntityId]) -> None:
    for id in ids:
        repository.delete_entry(id)
        logger.info("Deleted entry %s", id)
