# SPDX-License-Identifier: MIT

import logging
from typing import Any, Callable, Optional, cast

import httpx
from supabase import Client, PostgrestAPIError, create_client

from gotrack import time
from gotrack.errors import ConfigurationError, DatastoreError
from gotrack.model.entry import EntityId, Entry
from gotrack.model.filter import EntryFilter
from gotrack.query.filter import ATTRIBUTE_FILTER_KEYS

logger = logging.getLogger(__name__)

INSERT_COLUMNS = (
    "location",
    "type",
    "speed",
    "amount",
    "notes",
    "duration_from_last_hours",
)


class SupabaseEntryRepository:
    """Entries stored in a hosted Supabase (PostgREST) table."""

    def __init__(
        self,
        url: Optional[str],
        key: Optional[str],
        table: str = "gos",
        client: Optional[Client] = None,
    ) -> None:
        if client is None:
            if not url or not key:
                raise ConfigurationError(
                    "supabase_url and supabase_key are required for the supabase backend"
                )
            client = create_client(url, key)
        self.client = client
        self.table = table

    def __execute(self, action: str, build: Callable[[], Any]) -> list[dict[str, Any]]:
        try:
            response = build().execute()
        except PostgrestAPIError as e:
            logger.error("Supabase %s failed: %s", action, e.message)
            raise DatastoreError(f"Supabase {action} failed: {e.message}") from e
        except httpx.HTTPError as e:
            logger.error("Supabase %s failed: %s", action, e)
            raise DatastoreError(f"Supabase {action} failed: {e}") from e
        return cast(list[dict[str, Any]], response.data or [])

    def __row_to_entry(self, row: dict[str, Any]) -> Entry:
        created = row.get("created_at") or row["timestamp"]
        return {
            "id": str(row["id"]),
            "timestamp": time.datetime_from_str(row["timestamp"]),
            "location": row["location"],
            "type": row["type"],
            "speed": row["speed"],
            "amount": row["amount"],
            "notes": row.get("notes") or None,
            "duration_from_last_hours": row.get("duration_from_last_hours"),
            "created": time.datetime_from_str(created),
        }

    def flush(self) -> bool:
        # Every write goes straight to the server
        return False

    def save_new_entry(self, entry: Entry) -> EntityId:
        row: dict[str, Any] = {column: entry[column] for column in INSERT_COLUMNS}  # type: ignore[literal-required]
        row["timestamp"] = time.datetime_to_iso_str(entry["timestamp"])
        rows = self.__execute(
            "insert", lambda: self.client.table(self.table).insert(row)
        )
        if len(rows) == 0:
            raise DatastoreError("Supabase insert returned no row")
        entry["id"] = str(rows[0]["id"])
        return entry["id"]

    def delete_entry(self, id: EntityId) -> None:
        self.__execute(
            "delete", lambda: self.client.table(self.table).delete().eq("id", id)
        )

    def get_entry(self, id: EntityId) -> Entry:
        rows = self.__execute(
            "select",
            lambda: self.client.table(self.table).select("*").eq("id", id).limit(1),
        )
        if len(rows) == 0:
            raise DatastoreError(f"No entry with id {id}")
        return self.__row_to_entry(rows[0])

    def get_latest_entry(self) -> Optional[Entry]:
        rows = self.__execute(
            "select",
            lambda: self.client.table(self.table)
            .select("*")
            .order("timestamp", desc=True)
            .limit(1),
        )
        if len(rows) == 0:
            return None
        return self.__row_to_entry(rows[0])

    def get_all_entries(self) -> list[Entry]:
        rows = self.__execute(
            "select", lambda: self.client.table(self.table).select("*")
        )
        return [self.__row_to_entry(row) for row in rows]

    def query_entries(self, entry_filter: EntryFilter) -> list[Entry]:
        def build() -> Any:
            query = self.client.table(self.table).select("*")
            if entry_filter["start"] is not None:
                query = query.gte(
                    "timestamp", time.datetime_to_iso_str(entry_filter["start"])
                )
            if entry_filter["end"] is not None:
                query = query.lte(
                    "timestamp", time.datetime_to_iso_str(entry_filter["end"])
                )
            for key in ATTRIBUTE_FILTER_KEYS:
                value = entry_filter[key]  # type: ignore[literal-required]
                if value is not None:
                    query = query.eq(key, value)
            return query.order("timestamp", desc=True)

        rows = self.__execute("select", build)
        return [self.__row_to_entry(row) for row in rows]
