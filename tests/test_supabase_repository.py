# SPDX-License-Identifier: MIT

from typing import Any, Optional

import pendulum
import pytest
from supabase import PostgrestAPIError

from gotrack.configuration import get_default_configuration
from gotrack.errors import ConfigurationError, DatastoreError
from gotrack.query.filter import build_entry_filter
from gotrack.repository.backend import get_entry_repository
from gotrack.repository.entry import ENTRY_REPO
from gotrack.repository.supabase import SupabaseEntryRepository

ROW = {
    "id": 7,
    "timestamp": "2024-01-02T08:00:00+00:00",
    "location": "Home",
    "type": "Hard sausage",
    "speed": "Slow",
    "amount": "Little",
    "notes": "",
    "duration_from_last_hours": 31.25,
    "created_at": "2024-01-02T08:01:00+00:00",
}


class FakeResponse:
    def __init__(self, data: list[dict[str, Any]]):
        self.data = data


class FakeQuery:
    """Records the PostgREST builder chain and returns canned rows."""

    def __init__(self, client: "FakeClient", table: str):
        self.client = client
        self.calls: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = [("table", (table,), {})]
        client.queries.append(self)

    def __getattr__(self, name: str):
        def record(*args: Any, **kwargs: Any) -> "FakeQuery":
            self.calls.append((name, args, kwargs))
            return self

        return record

    def execute(self) -> FakeResponse:
        if self.client.error is not None:
            raise self.client.error
        return FakeResponse(self.client.rows)


class FakeClient:
    def __init__(self, rows: Optional[list[dict[str, Any]]] = None, error: Optional[Exception] = None):
        self.rows = rows if rows is not None else []
        self.error = error
        self.queries: list[FakeQuery] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


def call_names(query: FakeQuery) -> list[str]:
    return [name for name, _, _ in query.calls]


class TestSupabaseEntryRepository:
    def test_latest_entry_orders_descending_with_limit(self):
        client = FakeClient([ROW])
        repository = SupabaseEntryRepository(None, None, client=client)

        entry = repository.get_latest_entry()

        assert entry is not None
        assert entry["id"] == "7"
        assert entry["timestamp"] == pendulum.datetime(2024, 1, 2, 8, tz="UTC")
        assert entry["notes"] is None
        assert entry["created"] == pendulum.datetime(2024, 1, 2, 8, 1, tz="UTC")
        query = client.queries[0]
        assert query.calls[0] == ("table", ("gos",), {})
        assert ("order", ("timestamp",), {"desc": True}) in query.calls
        assert ("limit", (1,), {}) in query.calls

    def test_latest_entry_when_empty(self):
        repository = SupabaseEntryRepository(None, None, client=FakeClient([]))
        assert repository.get_latest_entry() is None

    def test_save_new_entry(self, entry_factory):
        client = FakeClient([{**ROW, "id": 12}])
        repository = SupabaseEntryRepository(None, None, table="movements", client=client)
        entry = entry_factory(
            pendulum.datetime(2024, 1, 2, 8, tz="UTC"), duration_from_last_hours=31.25
        )

        assert repository.save_new_entry(entry) == "12"
        assert entry["id"] == "12"
        name, args, _ = client.queries[0].calls[1]
        assert name == "insert"
        assert args[0]["timestamp"] == "2024-01-02T08:00:00+00:00"
        assert args[0]["duration_from_last_hours"] == 31.25
        assert "id" not in args[0]
        assert client.queries[0].calls[0] == ("table", ("movements",), {})

    def test_delete_by_id(self):
        client = FakeClient([])
        SupabaseEntryRepository(None, None, client=client).delete_entry("7")
        assert call_names(client.queries[0]) == ["table", "delete", "eq"]
        assert client.queries[0].calls[2] == ("eq", ("id", "7"), {})

    def test_query_pushes_filters_down(self):
        client = FakeClient([ROW])
        repository = SupabaseEntryRepository(None, None, client=client)
        start = pendulum.datetime(2024, 1, 1, tz="UTC")

        entries = repository.query_entries(build_entry_filter(start=start, speed="Slow"))

        assert len(entries) == 1
        calls = client.queries[0].calls
        assert ("gte", ("timestamp", "2024-01-01T00:00:00+00:00"), {}) in calls
        assert ("eq", ("speed", "Slow"), {}) in calls
        assert "lte" not in call_names(client.queries[0])

    def test_missing_entry(self):
        repository = SupabaseEntryRepository(None, None, client=FakeClient([]))
        with pytest.raises(DatastoreError, match="No entry with id"):
            repository.get_entry("99")

    def test_api_error_becomes_datastore_error(self):
        error = PostgrestAPIError(
            {"message": "permission denied", "code": "42501", "hint": None, "details": None}
        )
        repository = SupabaseEntryRepository(None, None, client=FakeClient(error=error))
        with pytest.raises(DatastoreError, match="Supabase select failed: permission denied"):
            repository.get_latest_entry()

    def test_requires_credentials(self):
        with pytest.raises(ConfigurationError):
            SupabaseEntryRepository(None, None)


class TestGetEntryRepository:
    def test_local_backend(self):
        assert get_entry_repository(get_default_configuration()) is ENTRY_REPO

    def test_supabase_backend_without_credentials(self):
        config = get_default_configuration()
        config["backend"] = "supabase"
        with pytest.raises(ConfigurationError):
            get_entry_repository(config)

    def test_unknown_backend(self):
        config = get_default_configuration()
        config["backend"] = "sqlite"  # type: ignore[typeddict-item]
        with pytest.raises(ConfigurationError, match="Unknown backend"):
            get_entry_repository(config)
