# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, Optional, cast

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper  # noqa: F401
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from gotrack import configuration, time
from gotrack.errors import DatastoreError
from gotrack.model.entry import EntityId, Entry, generate_entity_id
from gotrack.model.filter import EntryFilter
from gotrack.query.filter import filter_entries
from gotrack.query.sort import sort_entries

logger = logging.getLogger(__name__)


class EntryRepository:
    """Entries stored as one YAML file each under the data directory."""

    def __init__(self) -> None:
        self._entries: Optional[list[Entry]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._deleted_ids: set[str] = set()

    @property
    def entries(self) -> list[Entry]:
        if self._entries is None:
            self.__load_data()
        if self._entries is None:
            raise ValueError()
        return self._entries

    def __load_data(self) -> None:
        entries: list[Entry] = []
        if configuration.DATA_ENTRIES_DIR.is_dir():
            for file_path in configuration.DATA_ENTRIES_DIR.iterdir():
                if file_path.suffix != ".yaml":
                    continue
                try:
                    raw_entry = load(file_path.read_text(), Loader=Loader)
                except (OSError, YAMLError) as e:
                    logger.error("Could not read entry file %s: %s", file_path, e)
                    raise DatastoreError(f"Could not read {file_path.name}: {e}") from e
                if raw_entry is not None:
                    entries.append(self.__convert_entry_for_deserialization(raw_entry))
        self._entries = entries

    def __save_data(self) -> None:
        configuration.DATA_ENTRIES_DIR.mkdir(parents=True, exist_ok=True)

        try:
            # Write dirty entities
            for entry in self.entries:
                if entry["id"] in self._dirty_ids:
                    serializable_entry = self.__convert_entry_for_serialization(
                        deepcopy(entry)
                    )
                    file_path = configuration.DATA_ENTRIES_DIR / f"{entry['id']}.yaml"
                    file_path.write_text(dump(serializable_entry, Dumper=Dumper))

            # Remove hard-deleted entity files
            for entity_id in self._deleted_ids:
                file_path = configuration.DATA_ENTRIES_DIR / f"{entity_id}.yaml"
                if file_path.exists():
                    file_path.unlink()
        except OSError as e:
            logger.error("Could not write entries: %s", e)
            raise DatastoreError(f"Could not write entries: {e}") from e

        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._entries is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def reset(self) -> None:
        self._entries = None
        self.is_dirty = False
        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def __convert_entry_for_serialization(self, entry: Entry) -> dict[str, Any]:
        serializable_entry = cast(dict[str, Any], entry)
        serializable_entry["timestamp"] = time.datetime_to_iso_str(
            serializable_entry["timestamp"]
        )
        serializable_entry["created"] = time.datetime_to_iso_str(
            serializable_entry["created"]
        )
        return serializable_entry

    def __convert_entry_for_deserialization(self, entry: dict[str, Any]) -> Entry:
        deserializable_entry = entry
        deserializable_entry["timestamp"] = time.datetime_from_str(
            deserializable_entry["timestamp"]
        )
        deserializable_entry["created"] = time.datetime_from_str(
            deserializable_entry["created"]
        )
        deserializable_entry.setdefault("notes", None)
        deserializable_entry.setdefault("duration_from_last_hours", None)
        return cast(Entry, deserializable_entry)

    def save_new_entry(self, entry: Entry) -> EntityId:
        self.is_dirty = True

        entry["id"] = generate_entity_id()
        self.entries.append(deepcopy(entry))
        self._dirty_ids.add(entry["id"])

        return entry["id"]

    def delete_entry(self, id: EntityId) -> None:
        """Hard delete. Unknown ids are ignored."""
        remaining = [entry for entry in self.entries if entry["id"] != id]
        if len(remaining) == len(self.entries):
            return
        self.is_dirty = True
        self._entries = remaining
        self._dirty_ids.discard(id)
        self._deleted_ids.add(id)

    def get_all_entries(self) -> list[Entry]:
        return deepcopy(self.entries)

    def get_entry(self, id: EntityId) -> Entry:
        matches = [entry for entry in self.entries if entry["id"] == id]
        if len(matches) == 0:
            raise DatastoreError(f"No entry with id {id}")
        return deepcopy(matches[0])

    def get_latest_entry(self) -> Optional[Entry]:
        if len(self.entries) == 0:
            return None
        return deepcopy(max(self.entries, key=lambda entry: entry["timestamp"]))

    def query_entries(self, entry_filter: EntryFilter) -> list[Entry]:
        return sort_entries(filter_entries(self.entries, entry_filter))


ENTRY_REPO = EntryRepository()
