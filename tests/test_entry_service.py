# SPDX-License-Identifier: MIT

import pendulum
import pytest

from gotrack.errors import EntryValidationError
from gotrack.repository.entry import ENTRY_REPO
from gotrack.service.entry import (
    build_entry,
    create_entry,
    delete_entries,
    entry_from_payload,
    validate_entry,
)


class TestBuildEntry:
    def test_defaults(self):
        entry = build_entry()
        assert entry["location"] == "Home"
        assert entry["type"] == "Smooth & soft sausage"
        assert entry["speed"] == "Fast"
        assert entry["amount"] == "Normal"
        assert entry["notes"] is None

    def test_blank_notes_ignored(self):
        assert build_entry(notes="   ")["notes"] is None

    def test_overrides(self):
        timestamp = pendulum.datetime(2024, 5, 1, 7, 30, tz="UTC")
        entry = build_entry(timestamp=timestamp, location="Hotel", amount="Monstrous")
        assert entry["timestamp"] == timestamp
        assert entry["location"] == "Hotel"
        assert entry["amount"] == "Monstrous"


class TestEntryFromPayload:
    def test_parses_timestamp_as_utc(self):
        entry = entry_from_payload(
            {"timestamp": "2024-05-01T09:30:00+02:00", "speed": "Slow", "notes": "ok"}
        )
        assert entry["timestamp"] == pendulum.datetime(2024, 5, 1, 7, 30, tz="UTC")
        assert entry["timestamp"].timezone_name == "UTC"
        assert entry["speed"] == "Slow"
        assert entry["notes"] == "ok"

    def test_naive_timestamp_is_utc(self):
        entry = entry_from_payload({"timestamp": "2024-05-01T07:30:00"})
        assert entry["timestamp"] == pendulum.datetime(2024, 5, 1, 7, 30, tz="UTC")

    def test_invalid_timestamp(self):
        with pytest.raises(EntryValidationError, match="Invalid timestamp"):
            entry_from_payload({"timestamp": "yesterday-ish"})

    def test_non_text_notes(self):
        with pytest.raises(EntryValidationError, match="Invalid notes"):
            entry_from_payload({"notes": 5})

    def test_non_text_category(self):
        with pytest.raises(EntryValidationError, match="Invalid speed"):
            entry_from_payload({"speed": ["Fast"]})


class TestValidateEntry:
    def test_unknown_category_value(self):
        entry = build_entry(type="Rainbow")
        with pytest.raises(EntryValidationError, match="Invalid type"):
            validate_entry(entry)

    def test_valid_entry(self):
        validate_entry(build_entry())


class TestCreateEntry:
    def test_first_entry_has_no_duration(self):
        entry = create_entry(
            ENTRY_REPO, build_entry(timestamp=pendulum.datetime(2024, 1, 1, tz="UTC"))
        )
        assert entry["id"] is not None
        assert entry["duration_from_last_hours"] is None

    def test_duration_from_latest_entry(self):
        create_entry(
            ENTRY_REPO, build_entry(timestamp=pendulum.datetime(2024, 1, 1, tz="UTC"))
        )
        second = create_entry(
            ENTRY_REPO,
            build_entry(timestamp=pendulum.datetime(2024, 1, 2, 1, 30, tz="UTC")),
        )
        assert second["duration_from_last_hours"] == 25.5

    def test_invalid_entry_not_saved(self):
        with pytest.raises(EntryValidationError):
            create_entry(ENTRY_REPO, build_entry(location="Office"))
        assert ENTRY_REPO.get_all_entries() == []

    def test_delete_entries(self):
        first = create_entry(
            ENTRY_REPO, build_entry(timestamp=pendulum.datetime(2024, 1, 1, tz="UTC"))
        )
        second = create_entry(
            ENTRY_REPO, build_entry(timestamp=pendulum.datetime(2024, 1, 2, tz="UTC"))
        )
        delete_entries(ENTRY_REPO, [first["id"]])
        assert [entry["id"] for entry in ENTRY_REPO.get_all_entries()] == [second["id"]]
